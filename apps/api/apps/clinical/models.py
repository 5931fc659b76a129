"""
Clinical models: patient, encounter, lab_result, prescription.
"""
import uuid
from django.db import models
from django.conf import settings
from django.utils import timezone


# ============================================================================
# Enums
# ============================================================================

class GenderChoices(models.TextChoices):
    """Patient gender"""
    MALE = 'MALE', 'Male'
    FEMALE = 'FEMALE', 'Female'
    OTHER = 'OTHER', 'Other'


class EncounterTypeChoices(models.TextChoices):
    """Encounter types"""
    CONSULTATION = 'CONSULTATION', 'Consultation'
    FOLLOWUP = 'FOLLOWUP', 'Follow-up'
    EMERGENCY = 'EMERGENCY', 'Emergency'


class EncounterStatusChoices(models.TextChoices):
    """Encounter status"""
    SCHEDULED = 'SCHEDULED', 'Scheduled'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class LabStatusChoices(models.TextChoices):
    """Lab result status"""
    PENDING = 'PENDING', 'Pending'
    IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
    COMPLETED = 'COMPLETED', 'Completed'


class PrescriptionStatusChoices(models.TextChoices):
    """Prescription status"""
    ACTIVE = 'ACTIVE', 'Active'
    COMPLETED = 'COMPLETED', 'Completed'
    DISCONTINUED = 'DISCONTINUED', 'Discontinued'


# ============================================================================
# Models
# ============================================================================

class Patient(models.Model):
    """
    Patient demographics, contact info and medical background.

    aadhaar, phone, email and address are PII; serializers render them
    through apps.authz.visibility so only permitted roles see raw values.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Name fields
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)

    # Demographics
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=10, choices=GenderChoices.choices)

    # Contact
    phone = models.CharField(max_length=20)
    email = models.EmailField(blank=True, null=True)
    aadhaar = models.CharField(max_length=14, blank=True, null=True, unique=True)

    # Address
    address = models.TextField(blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    state = models.CharField(max_length=100, blank=True, default='')
    pincode = models.CharField(max_length=10, blank=True, default='')

    emergency_contact = models.CharField(max_length=200, blank=True, null=True)
    emergency_phone = models.CharField(max_length=20, blank=True, null=True)

    # Medical background
    blood_group = models.CharField(max_length=5, blank=True, null=True)
    allergies = models.TextField(blank=True, null=True)
    medical_history = models.TextField(blank=True, null=True)

    registration_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patient'
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='idx_patient_name'),
            models.Index(fields=['phone'], name='idx_patient_phone'),
            models.Index(fields=['registration_date'], name='idx_patient_registered'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Encounter(models.Model):
    """
    Clinical encounters (consultations, follow-ups, emergencies).

    vital_signs and soap_notes are free-form JSON documents captured by the
    charting UI.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='encounters'
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='encounters'
    )
    date = models.DateTimeField(default=timezone.now)
    type = models.CharField(
        max_length=20,
        choices=EncounterTypeChoices.choices,
        default=EncounterTypeChoices.CONSULTATION
    )
    status = models.CharField(
        max_length=20,
        choices=EncounterStatusChoices.choices,
        default=EncounterStatusChoices.SCHEDULED
    )
    chief_complaint = models.TextField()
    diagnosis = models.TextField(blank=True, null=True)
    diagnosis_code = models.CharField(max_length=20, blank=True, null=True, help_text="ICD-10 code")
    notes = models.TextField(blank=True, null=True)
    vital_signs = models.JSONField(blank=True, null=True)
    soap_notes = models.JSONField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'encounter'
        verbose_name = 'Encounter'
        verbose_name_plural = 'Encounters'
        indexes = [
            models.Index(fields=['patient'], name='idx_encounter_patient'),
            models.Index(fields=['doctor'], name='idx_encounter_doctor'),
            models.Index(fields=['date'], name='idx_encounter_date'),
            models.Index(fields=['type'], name='idx_encounter_type'),
            models.Index(fields=['status'], name='idx_encounter_status'),
        ]

    def __str__(self):
        return f"Encounter {self.type} - {self.patient} ({self.date.date()})"


class LabResult(models.Model):
    """
    Lab test orders and their results.

    report_generated_at is stamped by the generate-report background job
    once the lab report document has been produced.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='lab_results'
    )
    encounter = models.ForeignKey(
        'Encounter',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='lab_results'
    )
    test_name = models.CharField(max_length=200)
    test_category = models.CharField(max_length=100)
    ordered_date = models.DateTimeField(default=timezone.now)
    report_date = models.DateTimeField(blank=True, null=True)
    status = models.CharField(
        max_length=20,
        choices=LabStatusChoices.choices,
        default=LabStatusChoices.PENDING
    )
    results = models.TextField(blank=True, null=True)
    normal_range = models.CharField(max_length=100, blank=True, null=True)
    unit = models.CharField(max_length=50, blank=True, null=True)
    remarks = models.TextField(blank=True, null=True)
    ordered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='ordered_lab_results'
    )
    report_generated_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'lab_result'
        verbose_name = 'Lab Result'
        verbose_name_plural = 'Lab Results'
        indexes = [
            models.Index(fields=['patient'], name='idx_lab_patient'),
            models.Index(fields=['ordered_date'], name='idx_lab_ordered_date'),
            models.Index(fields=['status'], name='idx_lab_status'),
        ]

    def __str__(self):
        return f"{self.test_name} - {self.patient} ({self.status})"


class Prescription(models.Model):
    """
    Prescriptions issued during an encounter.

    medications is a list of {name, dosage, frequency, duration} objects.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='prescriptions'
    )
    encounter = models.ForeignKey(
        'Encounter',
        on_delete=models.CASCADE,
        related_name='prescriptions'
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='prescriptions'
    )
    date = models.DateTimeField(default=timezone.now)
    medications = models.JSONField(default=list)
    instructions = models.TextField(blank=True, null=True)
    status = models.CharField(
        max_length=20,
        choices=PrescriptionStatusChoices.choices,
        default=PrescriptionStatusChoices.ACTIVE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'prescription'
        verbose_name = 'Prescription'
        verbose_name_plural = 'Prescriptions'
        indexes = [
            models.Index(fields=['patient'], name='idx_prescription_patient'),
            models.Index(fields=['date'], name='idx_prescription_date'),
        ]

    def __str__(self):
        return f"Prescription for {self.patient} ({self.date.date()})"
