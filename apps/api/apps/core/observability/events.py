"""
Domain events logging helpers.

Provides structured event logging for business operations.
"""
from typing import Dict, Optional
from .logging import get_sanitized_logger, sanitize_dict

logger = get_sanitized_logger(__name__)


def log_domain_event(
    event_name: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    entity_ids: Optional[Dict[str, str]] = None,
    result: str = 'success',
    **extra_fields
):
    """
    Log a domain event with structured data.

    Args:
        event_name: Name of the event (e.g., 'report_generated', 'lab_report_enqueued')
        entity_type: Type of entity (e.g., 'LabResult')
        entity_id: ID of primary entity
        entity_ids: Dictionary of related entity IDs
        result: Result of operation (success, failure, etc.)
        **extra_fields: Additional fields to log (will be sanitized)

    Example:
        log_domain_event(
            'lab_report_enqueued',
            entity_type='LabResult',
            entity_id=str(lab.id),
            entity_ids={'patient_id': str(lab.patient_id)},
            task_id=result.id,
        )
    """
    event_data = {
        'event': event_name,
        'result': result,
    }

    if entity_type:
        event_data['entity_type'] = entity_type

    if entity_id:
        event_data['entity_id'] = entity_id

    if entity_ids:
        event_data.update(entity_ids)

    event_data.update(sanitize_dict(extra_fields))

    # Log at appropriate level based on result
    if result in ['failure', 'error']:
        logger.error(f'Domain event: {event_name}', extra=event_data)
    elif result in ['warning', 'blocked', 'rolled_back']:
        logger.warning(f'Domain event: {event_name}', extra=event_data)
    else:
        logger.info(f'Domain event: {event_name}', extra=event_data)


def log_report_generated(report, row_count, duration_ms, **filters):
    """Log a report aggregation with its (non-PHI) filters."""
    log_domain_event(
        'report_generated',
        entity_type='Report',
        entity_id=report,
        result='success',
        row_count=row_count,
        duration_ms=round(duration_ms, 2),
        filters={key: value for key, value in filters.items() if value is not None},
    )


def log_lab_report_enqueued(lab_result, task_id):
    """Log lab report job dispatch to the lab-reports queue."""
    log_domain_event(
        'lab_report_enqueued',
        entity_type='LabResult',
        entity_id=str(lab_result.id),
        entity_ids={'patient_id': str(lab_result.patient_id)},
        task_id=task_id,
    )
