"""
Lab result services.

- Lab detail reads through the query cache
- Status updates applied optimistically to the cached detail
- Lab report job dispatch to the lab-reports queue
"""
from typing import Any, Dict, Optional

from django.db import transaction
from django.utils import timezone

from apps.clinical.models import LabResult, LabStatusChoices
from apps.clinical.serializers import LabResultSerializer
from apps.clinical.tasks import LAB_REPORT_QUEUE, generate_lab_report
from apps.core.cache import OptimisticUpdate, query_cache
from apps.core.observability import metrics
from apps.core.observability.events import log_domain_event, log_lab_report_enqueued


def lab_query_key(lab_result_id):
    return ('labs', str(lab_result_id))


def get_lab_result(lab_result_id) -> LabResult:
    """
    Raises:
        LabResult.DoesNotExist: If the lab result does not exist
    """
    return LabResult.objects.select_related('patient').get(id=lab_result_id)


def get_lab_detail(lab_result_id, cache=None) -> Dict[str, Any]:
    """
    Serialized lab result, served from the query cache while fresh.

    Missing or stale entries are refetched from the database and stored.
    """
    cache = cache if cache is not None else query_cache
    key = lab_query_key(lab_result_id)

    data = cache.get_query_data(key)
    if data is not None and not cache.is_stale(key):
        return data

    lab = get_lab_result(lab_result_id)
    return cache.set_query_data(key, dict(LabResultSerializer(lab).data))


def update_lab_status(
    lab: LabResult,
    status: str,
    results: Optional[str] = None,
    remarks: Optional[str] = None,
    cache=None,
) -> LabResult:
    """
    Update a lab result's status, optimistically reflecting it in the cache.

    The cached detail shows the new status before the write commits. If the
    write fails the previous cached value is restored and the error re-raised.
    Either way the cache entry is left stale for the next reader.
    """
    changes = {'status': status}
    if results is not None:
        changes['results'] = results
    if remarks is not None:
        changes['remarks'] = remarks

    def save(variables):
        with transaction.atomic():
            locked = LabResult.objects.select_for_update().get(id=lab.id)
            for field, value in variables.items():
                setattr(locked, field, value)
            if variables['status'] == LabStatusChoices.COMPLETED and locked.report_date is None:
                locked.report_date = timezone.now()
            locked.save()
        return locked

    def optimistic(previous, variables):
        if previous is None:
            return None
        return {**previous, **variables}

    update = OptimisticUpdate(
        mutation_fn=save,
        query_key=lab_query_key(lab.id),
        updater=optimistic,
        cache=cache,
    )
    previous_status = lab.status
    updated = update.mutate(changes)

    log_domain_event(
        'lab_status_updated',
        entity_type='LabResult',
        entity_id=str(lab.id),
        entity_ids={'patient_id': str(lab.patient_id)},
        from_status=previous_status,
        to_status=status,
    )
    return updated


def enqueue_lab_report(lab_result: LabResult):
    """
    Send a generate-report job for the lab result to the lab-reports queue.

    Returns:
        AsyncResult of the dispatched task
    """
    result = generate_lab_report.apply_async(
        kwargs={
            'lab_result_id': str(lab_result.id),
            'patient_id': str(lab_result.patient_id),
            'test_name': lab_result.test_name,
        },
        queue=LAB_REPORT_QUEUE,
    )

    metrics.lab_report_jobs_enqueued_total.inc()
    log_lab_report_enqueued(lab_result, result.id)

    return result
