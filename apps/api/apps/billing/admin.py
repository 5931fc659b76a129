from django.contrib import admin
from .models import Bill


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'date', 'total', 'currency', 'payment_method', 'payment_status']
    list_filter = ['payment_status', 'payment_method', 'currency']
    search_fields = ['patient__first_name', 'patient__last_name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    autocomplete_fields = ['patient']
    date_hierarchy = 'date'

    fieldsets = (
        ('Bill', {
            'fields': ('id', 'patient', 'encounter', 'date', 'items')
        }),
        ('Amounts', {
            'fields': ('subtotal', 'tax', 'discount', 'total', 'currency')
        }),
        ('Payment', {
            'fields': ('payment_method', 'payment_status', 'notes')
        }),
        ('Audit', {
            'fields': ('created_at', 'updated_at')
        }),
    )
