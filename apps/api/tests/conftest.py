"""
Global test fixtures for pytest.

Provides reusable fixtures for API testing:
- Users and authenticated API clients by role
- Model factories (Patient, Encounter, LabResult, Prescription, Bill)
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from apps.authz.models import Role, RoleChoices, User, UserRole
from apps.billing.models import Bill, PaymentStatusChoices
from apps.clinical.models import Encounter, LabResult, Patient, Prescription


@pytest.fixture(autouse=True)
def clear_cache():
    """Query cache is process-local in tests; start every test empty."""
    cache.clear()
    yield
    cache.clear()


def create_user_with_role(email, role_name, **extra_fields):
    user = User.objects.create_user(
        email=email,
        password='testpass123',
        is_active=True,
        **extra_fields
    )

    role, _ = Role.objects.get_or_create(name=role_name)
    UserRole.objects.create(user=user, role=role)

    return user


def authenticated_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def admin_user(db):
    """Admin user (without authenticated client)."""
    return create_user_with_role(
        'admin@test.com', RoleChoices.ADMIN,
        first_name='Asha', last_name='Admin', is_staff=True, is_superuser=True,
    )


@pytest.fixture
def doctor_user(db):
    """Doctor user; orders labs and owns encounters."""
    return create_user_with_role(
        'doctor@test.com', RoleChoices.DOCTOR, first_name='Rajesh', last_name='Kumar',
    )


@pytest.fixture
def nurse_user(db):
    return create_user_with_role('nurse@test.com', RoleChoices.NURSE)


@pytest.fixture
def lab_tech_user(db):
    return create_user_with_role('labtech@test.com', RoleChoices.LAB_TECH)


@pytest.fixture
def pharmacist_user(db):
    return create_user_with_role('pharmacist@test.com', RoleChoices.PHARMACIST)


@pytest.fixture
def billing_user(db):
    return create_user_with_role('billing@test.com', RoleChoices.BILLING)


# ============================================================================
# API Clients
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    """Admin has full access to all resources."""
    return authenticated_client(admin_user)


@pytest.fixture
def doctor_client(doctor_user):
    return authenticated_client(doctor_user)


@pytest.fixture
def nurse_client(nurse_user):
    return authenticated_client(nurse_user)


@pytest.fixture
def lab_tech_client(lab_tech_user):
    return authenticated_client(lab_tech_user)


@pytest.fixture
def pharmacist_client(pharmacist_user):
    return authenticated_client(pharmacist_user)


@pytest.fixture
def billing_client(billing_user):
    return authenticated_client(billing_user)


# ============================================================================
# Model Factories
# ============================================================================

@pytest.fixture
def aware():
    """Build timezone-aware datetimes in the settings timezone."""
    def _aware(year, month, day, hour=10, minute=0):
        return timezone.make_aware(datetime(year, month, day, hour, minute))

    return _aware


@pytest.fixture
def make_patient(db):
    """Factory fixture for creating patients."""
    counter = {'n': 0}

    def _create_patient(**kwargs):
        counter['n'] += 1
        n = counter['n']
        defaults = {
            'first_name': f'Patient{n}',
            'last_name': 'Sharma',
            'date_of_birth': date(1985, 6, 15),
            'gender': 'FEMALE',
            'phone': f'+91 98765 4{n:04d}',
            'email': f'patient{n}@example.in',
            'aadhaar': f'1234-5678-{n:04d}',
            'address': '12 MG Road',
            'city': 'Bengaluru',
            'state': 'Karnataka',
            'pincode': '560001',
        }
        defaults.update(kwargs)
        return Patient.objects.create(**defaults)

    return _create_patient


@pytest.fixture
def patient(make_patient):
    return make_patient(first_name='Priya', last_name='Sharma')


@pytest.fixture
def make_encounter(db, doctor_user):
    """Factory fixture for creating encounters."""
    def _create_encounter(patient, **kwargs):
        defaults = {
            'patient': patient,
            'doctor': doctor_user,
            'date': timezone.now(),
            'type': 'CONSULTATION',
            'status': 'COMPLETED',
            'chief_complaint': 'Fever and cough',
        }
        defaults.update(kwargs)
        return Encounter.objects.create(**defaults)

    return _create_encounter


@pytest.fixture
def make_lab_result(db, doctor_user):
    """Factory fixture for creating lab results."""
    def _create_lab_result(patient, **kwargs):
        defaults = {
            'patient': patient,
            'ordered_by': doctor_user,
            'test_name': 'Complete Blood Count',
            'test_category': 'Hematology',
            'ordered_date': timezone.now(),
            'status': 'PENDING',
        }
        defaults.update(kwargs)
        return LabResult.objects.create(**defaults)

    return _create_lab_result


@pytest.fixture
def make_prescription(db, doctor_user):
    """Factory fixture for creating prescriptions."""
    def _create_prescription(encounter, **kwargs):
        defaults = {
            'patient': encounter.patient,
            'encounter': encounter,
            'doctor': doctor_user,
            'medications': [
                {'name': 'Paracetamol', 'dosage': '500mg', 'frequency': 'TID', 'duration': '5 days'},
            ],
        }
        defaults.update(kwargs)
        return Prescription.objects.create(**defaults)

    return _create_prescription


@pytest.fixture
def make_bill(db):
    """
    Factory fixture for creating bills.

    total defaults to subtotal + tax - discount.
    """
    def _create_bill(patient, subtotal='1000.00', tax='180.00', discount='0.00', **kwargs):
        subtotal, tax, discount = Decimal(subtotal), Decimal(tax), Decimal(discount)
        defaults = {
            'patient': patient,
            'date': timezone.now(),
            'items': [{'description': 'Consultation', 'quantity': 1, 'unitPrice': str(subtotal), 'amount': str(subtotal)}],
            'subtotal': subtotal,
            'tax': tax,
            'discount': discount,
            'total': subtotal + tax - discount,
            'payment_method': 'UPI',
            'payment_status': PaymentStatusChoices.PAID,
        }
        defaults.update(kwargs)
        return Bill.objects.create(**defaults)

    return _create_bill
