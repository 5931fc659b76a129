"""
Billing models: bill.
"""
import uuid
from decimal import Decimal
from django.db import models
from django.utils import timezone


class PaymentMethodChoices(models.TextChoices):
    """Payment methods"""
    CASH = 'CASH', 'Cash'
    CARD = 'CARD', 'Card'
    UPI = 'UPI', 'UPI'
    NET_BANKING = 'NET_BANKING', 'Net Banking'
    CHEQUE = 'CHEQUE', 'Cheque'


class PaymentStatusChoices(models.TextChoices):
    """Payment status"""
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'
    CANCELLED = 'CANCELLED', 'Cancelled'


class Bill(models.Model):
    """
    Patient bill.

    items is a list of {description, quantity, unitPrice, amount} objects.
    total = subtotal + tax - discount, all in `currency`.
    Only PAID bills count towards revenue.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'clinical.Patient',
        on_delete=models.CASCADE,
        related_name='bills'
    )
    encounter = models.ForeignKey(
        'clinical.Encounter',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='bills'
    )
    date = models.DateTimeField(default=timezone.now)
    items = models.JSONField(default=list)

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    currency = models.CharField(max_length=3, default='INR')

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethodChoices.choices,
        blank=True,
        null=True
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatusChoices.choices,
        default=PaymentStatusChoices.PENDING
    )
    notes = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bill'
        verbose_name = 'Bill'
        verbose_name_plural = 'Bills'
        indexes = [
            models.Index(fields=['patient'], name='idx_bill_patient'),
            models.Index(fields=['date'], name='idx_bill_date'),
            models.Index(fields=['payment_status'], name='idx_bill_payment_status'),
        ]

    def __str__(self):
        return f"Bill {self.id} - {self.patient} ({self.total} {self.currency})"
