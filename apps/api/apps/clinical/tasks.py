"""
Celery tasks for lab report generation.

Consumes the lab-reports queue. Report rendering and upload to document
storage are simulated by a short random delay; the durable effect is the
report_generated_at stamp on the lab result.
"""
import random
import time

from celery import shared_task
from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.utils import timezone

from apps.core.observability import get_sanitized_logger, metrics
from apps.core.observability.tracing import trace_span

logger = get_sanitized_logger(__name__)

LAB_REPORT_TASK = 'generate-report'
LAB_REPORT_QUEUE = 'lab-reports'


@shared_task(
    bind=True,
    name=LAB_REPORT_TASK,
    autoretry_for=(Exception,),
    dont_autoretry_for=(ObjectDoesNotExist,),
    retry_backoff=False,
    retry_kwargs={'max_retries': settings.LAB_REPORT_MAX_RETRIES},
)
def generate_lab_report(self, lab_result_id, patient_id, test_name):
    """
    Generate the report document for a lab result.

    Args:
        lab_result_id: LabResult ID
        patient_id: Patient ID
        test_name: Test name, used for the report title

    Returns:
        dict: {'success': True, 'labResultId': lab_result_id}
    """
    from .models import LabResult

    log_extra = {
        'event': 'lab_report_job',
        'lab_result_id': str(lab_result_id),
        'patient_id': str(patient_id),
        'task_id': self.request.id,
        'attempt': self.request.retries + 1,
    }
    logger.info(f'Generating report for lab result {lab_result_id}', extra={**log_extra, 'status': 'started'})

    start_time = time.time()
    try:
        with trace_span('lab_report.generate', kind='consumer', attributes={'lab_result_id': lab_result_id}):
            # Stand-in for PDF rendering and storage upload
            time.sleep(random.uniform(settings.LAB_REPORT_MIN_DELAY, settings.LAB_REPORT_MAX_DELAY))

            updated = LabResult.objects.filter(id=lab_result_id).update(
                report_generated_at=timezone.now()
            )
            if not updated:
                raise LabResult.DoesNotExist(f'LabResult {lab_result_id} not found')
    except Exception as e:
        metrics.lab_report_jobs_total.labels(result='failure').inc()
        logger.error(
            f'Failed to generate report for lab result {lab_result_id}',
            exc_info=True,
            extra={**log_extra, 'status': 'failed', 'error_type': e.__class__.__name__}
        )
        raise
    finally:
        metrics.lab_report_job_duration_seconds.observe(time.time() - start_time)

    metrics.lab_report_jobs_total.labels(result='success').inc()
    logger.info(f'Report generated for lab result {lab_result_id}', extra={**log_extra, 'status': 'completed'})

    return {
        'success': True,
        'labResultId': str(lab_result_id),
    }
