"""
Tests for the generate-report lab job and its dispatch.
"""
from unittest.mock import MagicMock, patch

import pytest
from django.conf import settings

from apps.clinical.models import LabResult
from apps.clinical.services import enqueue_lab_report
from apps.clinical.tasks import LAB_REPORT_QUEUE, LAB_REPORT_TASK, generate_lab_report


def job_kwargs(lab):
    return {
        'lab_result_id': str(lab.id),
        'patient_id': str(lab.patient_id),
        'test_name': lab.test_name,
    }


class TestTaskRegistration:

    def test_name_and_queue(self):
        assert generate_lab_report.name == 'generate-report'
        assert LAB_REPORT_TASK == 'generate-report'
        assert LAB_REPORT_QUEUE == 'lab-reports'
        assert settings.CELERY_TASK_ROUTES['generate-report'] == {'queue': 'lab-reports'}

    def test_retries_without_backoff(self):
        assert generate_lab_report.autoretry_for == (Exception,)
        assert generate_lab_report.retry_kwargs == {'max_retries': settings.LAB_REPORT_MAX_RETRIES}
        assert generate_lab_report.retry_backoff is False


@pytest.mark.django_db
class TestGenerateLabReport:

    def test_success_stamps_report_and_returns_payload(self, patient, make_lab_result):
        lab = make_lab_result(patient)

        result = generate_lab_report(**job_kwargs(lab))

        assert result == {'success': True, 'labResultId': str(lab.id)}
        lab.refresh_from_db()
        assert lab.report_generated_at is not None

    @patch('apps.clinical.tasks.time.sleep')
    @patch('apps.clinical.tasks.random.uniform', return_value=3.5)
    def test_delay_drawn_from_configured_range(self, mock_uniform, mock_sleep, patient, make_lab_result):
        lab = make_lab_result(patient)

        generate_lab_report(**job_kwargs(lab))

        mock_uniform.assert_called_once_with(settings.LAB_REPORT_MIN_DELAY, settings.LAB_REPORT_MAX_DELAY)
        mock_sleep.assert_called_once_with(3.5)

    @patch('apps.clinical.tasks.logger')
    @patch('apps.clinical.tasks.time.sleep', side_effect=OSError('storage unavailable'))
    def test_failure_is_logged_and_reraised(self, mock_sleep, mock_logger, patient, make_lab_result):
        lab = make_lab_result(patient)

        with pytest.raises(OSError, match='storage unavailable'):
            generate_lab_report(**job_kwargs(lab))

        lab.refresh_from_db()
        assert lab.report_generated_at is None
        mock_logger.error.assert_called_once()
        _, log_kwargs = mock_logger.error.call_args
        assert log_kwargs['exc_info'] is True
        assert log_kwargs['extra']['status'] == 'failed'
        assert log_kwargs['extra']['error_type'] == 'OSError'

    def test_missing_lab_result_raises(self, patient, make_lab_result):
        lab = make_lab_result(patient)
        kwargs = job_kwargs(lab)
        lab.delete()

        with pytest.raises(LabResult.DoesNotExist):
            generate_lab_report(**kwargs)


@pytest.mark.django_db
class TestEnqueueLabReport:

    def test_sends_to_lab_reports_queue(self, patient, make_lab_result):
        lab = make_lab_result(patient, test_name='Lipid Profile')

        with patch.object(generate_lab_report, 'apply_async', return_value=MagicMock(id='task-123')) as mock_send:
            result = enqueue_lab_report(lab)

        assert result.id == 'task-123'
        mock_send.assert_called_once_with(
            kwargs={
                'lab_result_id': str(lab.id),
                'patient_id': str(patient.id),
                'test_name': 'Lipid Profile',
            },
            queue='lab-reports',
        )

    def test_eager_run_stamps_lab(self, patient, make_lab_result):
        lab = make_lab_result(patient)

        result = enqueue_lab_report(lab)

        assert result.get() == {'success': True, 'labResultId': str(lab.id)}
        lab.refresh_from_db()
        assert lab.report_generated_at is not None
