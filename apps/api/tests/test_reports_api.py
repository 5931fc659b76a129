"""
Tests for report endpoints.

/api/v1/reports/{dashboard,patients,revenue,labs,encounters}
"""
from decimal import Decimal

import pytest
from rest_framework import status

from apps.billing.models import PaymentStatusChoices


REPORT_ENDPOINTS = [
    '/api/v1/reports/patients',
    '/api/v1/reports/revenue',
    '/api/v1/reports/labs',
    '/api/v1/reports/encounters',
]


# ============================================================================
# Permissions
# ============================================================================

@pytest.mark.django_db
class TestReportPermissions:
    """Dashboard needs view_dashboard; other reports need view_reports."""

    endpoint = '/api/v1/reports/dashboard'

    def test_unauthenticated_rejected(self, api_client):
        response = api_client.get(self.endpoint)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.parametrize('client_fixture', [
        'admin_client',
        'doctor_client',
        'nurse_client',
        'lab_tech_client',
        'pharmacist_client',
        'billing_client',
    ])
    def test_dashboard_open_to_every_role(self, client_fixture, request):
        client = request.getfixturevalue(client_fixture)
        response = client.get(self.endpoint)
        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.parametrize('endpoint', REPORT_ENDPOINTS)
    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('admin_client', status.HTTP_200_OK),
        ('doctor_client', status.HTTP_200_OK),
        ('billing_client', status.HTTP_200_OK),
        ('nurse_client', status.HTTP_403_FORBIDDEN),
        ('lab_tech_client', status.HTTP_403_FORBIDDEN),
        ('pharmacist_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_reports_by_role(self, endpoint, client_fixture, expected_status, request):
        client = request.getfixturevalue(client_fixture)
        response = client.get(endpoint)
        assert response.status_code == expected_status


# ============================================================================
# Query parameter validation
# ============================================================================

@pytest.mark.django_db
class TestReportQueryValidation:

    @pytest.mark.parametrize('endpoint', REPORT_ENDPOINTS)
    def test_malformed_date_is_400(self, admin_client, endpoint):
        response = admin_client.get(endpoint, {'startDate': '2024-13-45'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'startDate' in response.data

    def test_unknown_lab_status_is_400(self, admin_client):
        response = admin_client.get('/api/v1/reports/labs', {'status': 'LOST'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status' in response.data

    def test_unknown_encounter_type_is_400(self, admin_client):
        response = admin_client.get('/api/v1/reports/encounters', {'type': 'HOUSE_CALL'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'type' in response.data

    def test_blank_params_are_ignored(self, admin_client, patient):
        response = admin_client.get('/api/v1/reports/patients', {'startDate': '', 'endDate': ''})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1


# ============================================================================
# Payloads
# ============================================================================

@pytest.mark.django_db
class TestDashboardEndpoint:

    endpoint = '/api/v1/reports/dashboard'

    def test_payload(self, admin_client, patient, make_encounter, make_lab_result, make_bill):
        make_encounter(patient)
        make_lab_result(patient)
        make_bill(patient, subtotal='400.00', tax='72.00')

        response = admin_client.get(self.endpoint)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'totalPatients': 1,
            'totalEncounters': 1,
            'pendingLabs': 1,
            'totalRevenue': Decimal('472.00'),
            'todayEncounters': 1,
        }

    @pytest.mark.parametrize('client_fixture', [
        'billing_client',
        'admin_client',
        'nurse_client',
        'doctor_client',
        'lab_tech_client',
        'pharmacist_client',
    ])
    def test_revenue_unmasked_for_every_role(self, client_fixture, request, patient, make_bill):
        make_bill(patient, subtotal='100.00', tax='0.00')
        client = request.getfixturevalue(client_fixture)

        response = client.get(self.endpoint)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totalRevenue'] == Decimal('100.00')


@pytest.mark.django_db
class TestPatientReportEndpoint:

    endpoint = '/api/v1/reports/patients'

    def test_rows_have_counts(self, admin_client, patient, make_encounter, make_bill):
        make_encounter(patient)
        make_bill(patient)

        response = admin_client.get(self.endpoint)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
        row = response.data['patients'][0]
        assert row['firstName'] == 'Priya'
        assert row['counts'] == {'encounters': 1, 'labResults': 0, 'prescriptions': 0, 'bills': 1}

    def test_aadhaar_masked_for_billing(self, billing_client, patient):
        response = billing_client.get(self.endpoint)

        row = response.data['patients'][0]
        assert row['aadhaar'] == '***'
        assert row['phone'] == patient.phone

    def test_aadhaar_visible_for_doctor(self, doctor_client, patient):
        response = doctor_client.get(self.endpoint)

        row = response.data['patients'][0]
        assert row['aadhaar'] == patient.aadhaar

    def test_query_count_does_not_grow_with_rows(self, doctor_client, make_patient,
                                                 django_assert_max_num_queries):
        for _ in range(20):
            make_patient()

        with django_assert_max_num_queries(8):
            response = doctor_client.get(self.endpoint)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 20
        assert all(row['phone'] != '***' for row in response.data['patients'])


@pytest.mark.django_db
class TestRevenueReportEndpoint:

    endpoint = '/api/v1/reports/revenue'

    def test_paid_bills_in_range(self, billing_client, patient, make_bill, aware):
        make_bill(patient, date=aware(2024, 3, 1), subtotal='100.00', tax='18.00')
        make_bill(patient, date=aware(2024, 3, 31), subtotal='200.00', tax='36.00', discount='10.00')
        make_bill(patient, date=aware(2024, 3, 15), payment_status=PaymentStatusChoices.PENDING)
        make_bill(patient, date=aware(2024, 4, 1))

        response = billing_client.get(self.endpoint, {'startDate': '2024-03-01', 'endDate': '2024-03-31'})

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert data['total'] == 2
        assert data['totalRevenue'] == Decimal('344.00')
        assert data['totalTax'] == Decimal('54.00')
        assert data['totalDiscount'] == Decimal('10.00')
        assert [bill['total'] for bill in data['bills']] == [Decimal('226.00'), Decimal('118.00')]
        assert all(bill['paymentStatus'] == 'PAID' for bill in data['bills'])
        assert data['bills'][0]['patient']['firstName'] == 'Priya'

    def test_start_after_end_is_empty(self, billing_client, patient, make_bill):
        make_bill(patient)

        response = billing_client.get(self.endpoint, {'startDate': '2024-02-01', 'endDate': '2024-01-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 0
        assert response.data['bills'] == []
        assert response.data['totalRevenue'] == Decimal('0.00')


@pytest.mark.django_db
class TestLabReportEndpoint:

    endpoint = '/api/v1/reports/labs'

    def test_filtered_by_status(self, doctor_client, patient, make_lab_result):
        make_lab_result(patient, status='PENDING')
        make_lab_result(patient, status='COMPLETED', results='Hb 13.5 g/dL')

        response = doctor_client.get(self.endpoint, {'status': 'COMPLETED'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
        lab = response.data['labs'][0]
        assert lab['testName'] == 'Complete Blood Count'
        assert lab['orderedBy']['name'] == 'Rajesh Kumar'
        assert lab['encounter'] is None
        assert sorted(response.data['statusCounts'], key=lambda c: c['status']) == [
            {'status': 'COMPLETED', 'count': 1},
            {'status': 'PENDING', 'count': 1},
        ]


@pytest.mark.django_db
class TestEncounterReportEndpoint:

    endpoint = '/api/v1/reports/encounters'

    def test_filtered_by_type(self, admin_client, patient, make_encounter):
        make_encounter(patient, type='EMERGENCY', status='IN_PROGRESS')
        make_encounter(patient, type='CONSULTATION', status='COMPLETED')

        response = admin_client.get(self.endpoint, {'type': 'EMERGENCY'})

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert data['total'] == 1
        assert data['encounters'][0]['type'] == 'EMERGENCY'
        assert data['encounters'][0]['doctor']['email'] == 'doctor@test.com'
        assert data['typeCounts'] == [
            {'type': 'CONSULTATION', 'count': 1},
            {'type': 'EMERGENCY', 'count': 1},
        ]
        assert data['statusCounts'] == [
            {'status': 'COMPLETED', 'count': 1},
            {'status': 'IN_PROGRESS', 'count': 1},
        ]
