"""
Tests for report aggregation services.

Covers inclusive date bounds, PAID-only revenue, breakdown grouping and
dashboard statistics.
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.billing.models import PaymentStatusChoices
from apps.reports import services


@pytest.mark.django_db
class TestDateRangeFilter:

    def test_no_bounds_is_no_constraint(self):
        assert services.date_range_filter('date') == {}

    def test_bounds_compare_calendar_date(self):
        lookups = services.date_range_filter('ordered_date', date(2024, 1, 1), date(2024, 1, 31))
        assert lookups == {
            'ordered_date__date__gte': date(2024, 1, 1),
            'ordered_date__date__lte': date(2024, 1, 31),
        }

    def test_malformed_date_string_fails_at_query_time(self, patient, make_bill):
        make_bill(patient)
        with pytest.raises(ValidationError):
            services.get_revenue_report(start_date='not-a-date')


@pytest.mark.django_db
class TestDashboardStats:

    def test_empty_database(self):
        stats = services.get_dashboard_stats()

        assert stats == {
            'totalPatients': 0,
            'totalEncounters': 0,
            'pendingLabs': 0,
            'totalRevenue': Decimal('0'),
            'todayEncounters': 0,
        }

    def test_counts_and_paid_revenue(self, make_patient, make_encounter, make_lab_result, make_bill):
        p1 = make_patient()
        p2 = make_patient()

        make_encounter(p1)
        make_encounter(p2, date=timezone.now() - timedelta(days=3))

        make_lab_result(p1, status='PENDING')
        make_lab_result(p1, status='PENDING')
        make_lab_result(p2, status='COMPLETED')

        make_bill(p1, subtotal='1000.00', tax='180.00')  # 1180.00 PAID
        make_bill(p2, subtotal='500.00', tax='90.00', discount='40.00')  # 550.00 PAID
        make_bill(p2, subtotal='9999.00', payment_status=PaymentStatusChoices.PENDING)
        make_bill(p2, subtotal='7777.00', payment_status=PaymentStatusChoices.CANCELLED)

        stats = services.get_dashboard_stats()

        assert stats['totalPatients'] == 2
        assert stats['totalEncounters'] == 2
        assert stats['pendingLabs'] == 2
        assert stats['totalRevenue'] == Decimal('1730.00')
        assert stats['todayEncounters'] == 1

    def test_today_uses_local_calendar_day(self, patient, make_encounter):
        today = timezone.localdate()
        start_of_today = timezone.make_aware(datetime.combine(today, time.min))

        make_encounter(patient, date=start_of_today)
        make_encounter(patient, date=start_of_today - timedelta(minutes=1))

        stats = services.get_dashboard_stats()

        assert stats['todayEncounters'] == 1


@pytest.mark.django_db
class TestPatientReport:

    def test_filters_on_registration_date_inclusive(self, make_patient, aware):
        make_patient(registration_date=aware(2024, 1, 1, 9))
        make_patient(registration_date=aware(2024, 1, 31, 23, 30))
        make_patient(registration_date=aware(2024, 2, 1, 0, 5))

        report = services.get_patient_report(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

        assert report['total'] == 2
        assert len(report['patients']) == 2

    def test_activity_counts(self, patient, make_patient, make_encounter, make_lab_result,
                             make_prescription, make_bill):
        encounter = make_encounter(patient)
        make_encounter(patient)
        make_lab_result(patient, encounter=encounter)
        make_prescription(encounter)
        make_bill(patient)
        make_bill(patient)
        make_bill(patient)
        make_patient()

        report = services.get_patient_report()
        rows = {p.id: p for p in report['patients']}

        assert report['total'] == 2
        row = rows[patient.id]
        assert row.encounter_count == 2
        assert row.lab_result_count == 1
        assert row.prescription_count == 1
        assert row.bill_count == 3

    def test_start_after_end_is_empty(self, make_patient):
        make_patient()

        report = services.get_patient_report(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

        assert report == {'total': 0, 'patients': []}


@pytest.mark.django_db
class TestRevenueReport:

    def test_only_paid_bills_in_range_newest_first(self, patient, make_bill, aware):
        older = make_bill(patient, date=aware(2024, 3, 1))
        newer = make_bill(patient, date=aware(2024, 3, 10))
        make_bill(patient, date=aware(2024, 3, 5), payment_status=PaymentStatusChoices.PENDING)
        make_bill(patient, date=aware(2024, 3, 6), payment_status=PaymentStatusChoices.CANCELLED)
        make_bill(patient, date=aware(2024, 3, 11))  # outside range

        report = services.get_revenue_report(start_date=date(2024, 3, 1), end_date=date(2024, 3, 10))

        assert [bill.id for bill in report['bills']] == [newer.id, older.id]
        assert report['total'] == 2

    def test_sums_match_returned_bills(self, patient, make_bill):
        make_bill(patient, subtotal='1000.00', tax='180.00', discount='100.00')
        make_bill(patient, subtotal='250.50', tax='45.09', discount='0.00')
        make_bill(patient, subtotal='99.99', tax='0.00', discount='9.99')

        report = services.get_revenue_report()
        bills = report['bills']

        assert report['totalRevenue'] == sum(b.total for b in bills)
        assert report['totalTax'] == sum(b.tax for b in bills)
        assert report['totalDiscount'] == sum(b.discount for b in bills)
        assert report['totalRevenue'] == Decimal('1465.59')

    def test_no_paid_bills_sums_to_zero(self, patient, make_bill):
        make_bill(patient, payment_status=PaymentStatusChoices.PENDING)

        report = services.get_revenue_report()

        assert report['total'] == 0
        assert report['totalRevenue'] == Decimal('0')
        assert report['totalTax'] == Decimal('0')
        assert report['totalDiscount'] == Decimal('0')

    def test_start_after_end_is_empty(self, patient, make_bill):
        make_bill(patient)

        report = services.get_revenue_report(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

        assert report['total'] == 0
        assert report['bills'] == []
        assert report['totalRevenue'] == Decimal('0')

    @patch('apps.reports.services.log_report_generated')
    def test_positional_bounds_are_logged(self, mock_log, patient, make_bill):
        make_bill(patient)

        services.get_revenue_report(date(2024, 1, 1), date(2024, 1, 31))

        args, kwargs = mock_log.call_args
        assert args == ('revenue',)
        assert kwargs['start_date'] == date(2024, 1, 1)
        assert kwargs['end_date'] == date(2024, 1, 31)
        assert kwargs['row_count'] == 0


@pytest.mark.django_db
class TestLabReport:

    def test_status_filter_and_breakdown(self, patient, make_lab_result, aware):
        make_lab_result(patient, status='PENDING', ordered_date=aware(2024, 5, 2))
        make_lab_result(patient, status='PENDING', ordered_date=aware(2024, 5, 3))
        make_lab_result(patient, status='COMPLETED', ordered_date=aware(2024, 5, 4))
        make_lab_result(patient, status='COMPLETED', ordered_date=aware(2024, 6, 1))  # outside range

        report = services.get_lab_report(
            start_date=date(2024, 5, 1), end_date=date(2024, 5, 31), status='PENDING'
        )

        assert report['total'] == 2
        assert all(lab.status == 'PENDING' for lab in report['labs'])
        assert report['statusCounts'] == [{'status': 'PENDING', 'count': 2}]

    def test_ordered_newest_first_with_relations(self, patient, make_lab_result, aware,
                                                 django_assert_num_queries):
        first = make_lab_result(patient, ordered_date=aware(2024, 5, 2))
        second = make_lab_result(patient, ordered_date=aware(2024, 5, 9))

        report = services.get_lab_report()

        assert [lab.id for lab in report['labs']] == [second.id, first.id]
        with django_assert_num_queries(0):
            for lab in report['labs']:
                assert lab.patient.first_name
                assert lab.ordered_by.email

    def test_no_bounds_breakdown_covers_everything(self, patient, make_lab_result, aware):
        make_lab_result(patient, status='IN_PROGRESS', ordered_date=aware(2023, 1, 1))
        make_lab_result(patient, status='PENDING', ordered_date=aware(2024, 1, 1))

        report = services.get_lab_report(status='PENDING')

        assert report['total'] == 1
        assert report['statusCounts'] == [
            {'status': 'IN_PROGRESS', 'count': 1},
            {'status': 'PENDING', 'count': 1},
        ]

    def test_start_after_end_is_empty(self, patient, make_lab_result):
        make_lab_result(patient, status='PENDING')

        report = services.get_lab_report(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

        assert report == {'total': 0, 'statusCounts': [], 'labs': []}


@pytest.mark.django_db
class TestEncounterReport:

    def test_type_filter_and_breakdowns(self, patient, make_encounter, aware):
        make_encounter(patient, type='CONSULTATION', status='COMPLETED', date=aware(2024, 4, 1))
        make_encounter(patient, type='EMERGENCY', status='IN_PROGRESS', date=aware(2024, 4, 2))
        make_encounter(patient, type='EMERGENCY', status='COMPLETED', date=aware(2024, 4, 30))
        make_encounter(patient, type='FOLLOWUP', status='SCHEDULED', date=aware(2024, 5, 1))  # outside

        report = services.get_encounter_report(
            start_date=date(2024, 4, 1), end_date=date(2024, 4, 30), type='EMERGENCY'
        )

        assert report['total'] == 2
        assert [e.date for e in report['encounters']] == [aware(2024, 4, 30), aware(2024, 4, 2)]
        assert report['typeCounts'] == [{'type': 'EMERGENCY', 'count': 2}]
        assert report['statusCounts'] == [
            {'status': 'COMPLETED', 'count': 1},
            {'status': 'IN_PROGRESS', 'count': 1},
        ]

    def test_no_bounds_breakdowns_cover_everything(self, patient, make_encounter, aware):
        make_encounter(patient, type='CONSULTATION', status='COMPLETED', date=aware(2023, 6, 1))
        make_encounter(patient, type='EMERGENCY', status='IN_PROGRESS', date=aware(2024, 4, 2))

        report = services.get_encounter_report(type='EMERGENCY')

        assert report['total'] == 1
        assert report['typeCounts'] == [
            {'type': 'CONSULTATION', 'count': 1},
            {'type': 'EMERGENCY', 'count': 1},
        ]
        assert report['statusCounts'] == [
            {'status': 'COMPLETED', 'count': 1},
            {'status': 'IN_PROGRESS', 'count': 1},
        ]

    def test_start_after_end_is_empty(self, patient, make_encounter):
        make_encounter(patient)

        report = services.get_encounter_report(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

        assert report['total'] == 0
        assert report['encounters'] == []
        assert report['typeCounts'] == []
        assert report['statusCounts'] == []
