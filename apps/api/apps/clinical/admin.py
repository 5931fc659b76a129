from django.contrib import admin
from .models import Patient, Encounter, LabResult, Prescription


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ['first_name', 'last_name', 'gender', 'phone', 'city', 'registration_date']
    list_filter = ['gender', 'blood_group', 'state']
    search_fields = ['first_name', 'last_name', 'phone', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Info', {
            'fields': ('id', 'first_name', 'last_name', 'date_of_birth', 'gender')
        }),
        ('Contact', {
            'fields': ('phone', 'email', 'aadhaar', 'emergency_contact', 'emergency_phone')
        }),
        ('Address', {
            'fields': ('address', 'city', 'state', 'pincode')
        }),
        ('Medical', {
            'fields': ('blood_group', 'allergies', 'medical_history')
        }),
        ('Audit', {
            'fields': ('registration_date', 'created_at', 'updated_at')
        }),
    )


@admin.register(Encounter)
class EncounterAdmin(admin.ModelAdmin):
    list_display = ['patient', 'doctor', 'type', 'status', 'date']
    list_filter = ['type', 'status', 'date']
    search_fields = ['patient__first_name', 'patient__last_name', 'chief_complaint', 'diagnosis_code']
    readonly_fields = ['id', 'created_at', 'updated_at']
    autocomplete_fields = ['patient']
    date_hierarchy = 'date'


@admin.register(LabResult)
class LabResultAdmin(admin.ModelAdmin):
    list_display = ['test_name', 'patient', 'status', 'ordered_date', 'report_generated_at']
    list_filter = ['status', 'test_category']
    search_fields = ['test_name', 'patient__first_name', 'patient__last_name']
    readonly_fields = ['id', 'report_generated_at', 'created_at', 'updated_at']
    autocomplete_fields = ['patient']


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ['patient', 'doctor', 'status', 'date']
    list_filter = ['status']
    search_fields = ['patient__first_name', 'patient__last_name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    autocomplete_fields = ['patient']
