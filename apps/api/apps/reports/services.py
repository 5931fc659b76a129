"""
Report aggregation services.

Read-only queries over patients, encounters, lab results and bills.
Date bounds are inclusive and compared on the calendar date of the record;
absent bounds impose no constraint. Date values are passed to the ORM
unvalidated, so a malformed string surfaces as a query-time
django.core.exceptions.ValidationError. Views validate query parameters
before calling in here.

Results are plain dicts with camelCase keys; record lists hold model
instances with their related rows joined.
"""
import asyncio
import inspect
import time
from decimal import Decimal
from functools import wraps

from asgiref.sync import async_to_sync
from django.db.models import Count, Sum
from django.utils import timezone

from apps.billing.models import Bill, PaymentStatusChoices
from apps.clinical.models import Encounter, LabResult, LabStatusChoices, Patient
from apps.core.observability import metrics
from apps.core.observability.events import log_report_generated
from apps.core.observability.tracing import trace_span


def _instrumented(report):
    """Trace, time and count a report function; log the generated report."""
    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            filters = dict(bound.arguments)

            start_time = time.time()
            try:
                with trace_span(f'report.{report}', attributes=filters):
                    result = func(*args, **kwargs)
            except Exception:
                metrics.report_requests_total.labels(report=report, result='failure').inc()
                raise
            finally:
                metrics.report_query_duration_seconds.labels(report=report).observe(
                    time.time() - start_time
                )

            metrics.report_requests_total.labels(report=report, result='success').inc()
            log_report_generated(
                report,
                row_count=result.get('total'),
                duration_ms=(time.time() - start_time) * 1000,
                **filters
            )
            return result
        return wrapper
    return decorator


def date_range_filter(field, start_date=None, end_date=None):
    """
    ORM lookups bounding `field` (a datetime column) by calendar date.

    >>> date_range_filter('date', '2024-01-01', None)
    {'date__date__gte': '2024-01-01'}
    """
    lookups = {}
    if start_date:
        lookups[f'{field}__date__gte'] = start_date
    if end_date:
        lookups[f'{field}__date__lte'] = end_date
    return lookups


def count_by(queryset, field):
    """[{field: value, 'count': n}, ...] grouped over the queryset."""
    return list(
        queryset.order_by()
        .values(field)
        .annotate(count=Count('id'))
        .order_by(field)
    )


async def _gather_dashboard_stats(today):
    return await asyncio.gather(
        Patient.objects.acount(),
        Encounter.objects.acount(),
        LabResult.objects.filter(status=LabStatusChoices.PENDING).acount(),
        Bill.objects.filter(payment_status=PaymentStatusChoices.PAID).aaggregate(total=Sum('total')),
        Encounter.objects.filter(date__date=today).acount(),
    )


@_instrumented('dashboard')
def get_dashboard_stats():
    """
    Headline counts for the dashboard.

    The five reads are independent and issued concurrently. "Today" is the
    local calendar day in settings.TIME_ZONE.
    """
    total_patients, total_encounters, pending_labs, revenue, today_encounters = async_to_sync(
        _gather_dashboard_stats
    )(timezone.localdate())

    return {
        'totalPatients': total_patients,
        'totalEncounters': total_encounters,
        'pendingLabs': pending_labs,
        'totalRevenue': revenue['total'] or Decimal('0'),
        'todayEncounters': today_encounters,
    }


@_instrumented('patients')
def get_patient_report(start_date=None, end_date=None):
    """Patients registered in the range, with per-patient activity counts."""
    patients = list(
        Patient.objects
        .filter(**date_range_filter('registration_date', start_date, end_date))
        .annotate(
            encounter_count=Count('encounters', distinct=True),
            lab_result_count=Count('lab_results', distinct=True),
            prescription_count=Count('prescriptions', distinct=True),
            bill_count=Count('bills', distinct=True),
        )
        .order_by('-registration_date')
    )

    return {
        'total': len(patients),
        'patients': patients,
    }


@_instrumented('revenue')
def get_revenue_report(start_date=None, end_date=None):
    """
    PAID bills in the range, newest first, with revenue/tax/discount totals.

    Totals are summed over exactly the returned bills.
    """
    bills = list(
        Bill.objects
        .filter(
            payment_status=PaymentStatusChoices.PAID,
            **date_range_filter('date', start_date, end_date)
        )
        .select_related('patient', 'encounter')
        .order_by('-date')
    )

    return {
        'total': len(bills),
        'totalRevenue': sum((bill.total for bill in bills), Decimal('0')),
        'totalTax': sum((bill.tax for bill in bills), Decimal('0')),
        'totalDiscount': sum((bill.discount for bill in bills), Decimal('0')),
        'bills': bills,
    }


@_instrumented('labs')
def get_lab_report(start_date=None, end_date=None, status=None):
    """
    Lab results ordered in the range, optionally narrowed to one status.

    With a date bound, statusCounts is grouped over the returned set.
    Without one it covers every lab result, whatever the status filter.
    """
    matching = LabResult.objects.filter(**date_range_filter('ordered_date', start_date, end_date))
    if status:
        matching = matching.filter(status=status)

    grouped = matching if start_date or end_date else LabResult.objects.all()

    labs = list(
        matching.select_related('patient', 'ordered_by', 'encounter')
        .order_by('-ordered_date')
    )

    return {
        'total': len(labs),
        'statusCounts': count_by(grouped, 'status'),
        'labs': labs,
    }


@_instrumented('encounters')
def get_encounter_report(start_date=None, end_date=None, type=None):
    """
    Encounters in the range, optionally narrowed to one type.

    typeCounts and statusCounts follow the same rule as the lab report:
    grouped over the returned set when a date bound is given, over every
    encounter otherwise.
    """
    matching = Encounter.objects.filter(**date_range_filter('date', start_date, end_date))
    if type:
        matching = matching.filter(type=type)

    grouped = matching if start_date or end_date else Encounter.objects.all()

    encounters = list(
        matching.select_related('patient', 'doctor')
        .order_by('-date')
    )

    return {
        'total': len(encounters),
        'typeCounts': count_by(grouped, 'type'),
        'statusCounts': count_by(grouped, 'status'),
        'encounters': encounters,
    }
