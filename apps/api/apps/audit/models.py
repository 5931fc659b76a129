"""
Audit trail for API access to patient and financial data.
"""
import logging
import uuid

from django.conf import settings
from django.db import DatabaseError, models

from apps.authz.visibility import mask_sensitive_data

logger = logging.getLogger(__name__)


class AuditActionChoices(models.TextChoices):
    CREATE = 'CREATE', 'Create'
    UPDATE = 'UPDATE', 'Update'
    DELETE = 'DELETE', 'Delete'
    READ = 'READ', 'Read'


class AuditStatusChoices(models.TextChoices):
    SUCCESS = 'SUCCESS', 'Success'
    FAILURE = 'FAILURE', 'Failure'


class AuditLog(models.Model):
    """
    One audited API call.

    Fields:
    - user: who made the call (nullable, survives user deletion)
    - user_role: comma-joined role names held at the time of the call
    - action: CREATE|UPDATE|DELETE|READ
    - entity / entity_id: what was touched ('LabResult' + UUID, 'Report' + name)
    - changes: request body with Aadhaar/PAN masked, or the report filters
    - ip_address / user_agent: client details
    - status / error_message: outcome of the call
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    timestamp = models.DateTimeField(auto_now_add=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='audit_logs',
    )
    user_role = models.CharField(max_length=200, blank=True, default='')

    action = models.CharField(max_length=10, choices=AuditActionChoices.choices)
    entity = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=100, blank=True, null=True)

    changes = models.JSONField(blank=True, null=True)

    ip_address = models.CharField(max_length=45, blank=True, null=True)
    user_agent = models.CharField(max_length=200, blank=True, null=True)

    status = models.CharField(
        max_length=10,
        choices=AuditStatusChoices.choices,
        default=AuditStatusChoices.SUCCESS,
    )
    error_message = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'audit_log'
        verbose_name = 'Audit Log'
        verbose_name_plural = 'Audit Logs'
        indexes = [
            models.Index(fields=['timestamp'], name='idx_audit_timestamp'),
            models.Index(fields=['user'], name='idx_audit_user'),
            models.Index(fields=['entity', 'entity_id'], name='idx_audit_entity'),
            models.Index(fields=['action'], name='idx_audit_action'),
        ]
        ordering = ['-timestamp']

    def __str__(self):
        actor = self.user.email if self.user else 'anonymous'
        return f'{self.action} on {self.entity}[{(self.entity_id or "-")[:8]}] by {actor}'


def client_ip(request):
    """First X-Forwarded-For hop, then X-Real-IP, then the socket address."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('HTTP_X_REAL_IP') or request.META.get('REMOTE_ADDR')


def log_audit(
    request,
    action,
    entity,
    entity_id=None,
    changes=None,
    status=AuditStatusChoices.SUCCESS,
    error_message=None,
    user_roles=(),
):
    """
    Write an audit log entry for `request`.

    Args:
        request: Django/DRF request (user, IP and user-agent are taken from it)
        action: AuditActionChoices value
        entity: entity name, e.g. 'LabResult' or 'Report'
        entity_id: id of the touched entity, if any
        changes: request payload; Aadhaar/PAN values are masked before storing
        status: SUCCESS or FAILURE
        error_message: failure detail
        user_roles: role names of the caller

    Returns:
        AuditLog instance, or None when the row could not be written.
        A failed audit write is logged and never fails the audited call.
    """
    user = getattr(request, 'user', None)
    if user is not None and not user.is_authenticated:
        user = None

    try:
        return AuditLog.objects.create(
            user=user,
            user_role=','.join(sorted(user_roles)),
            action=action,
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            changes=mask_sensitive_data(changes) if changes is not None else None,
            ip_address=client_ip(request),
            user_agent=(request.META.get('HTTP_USER_AGENT') or '')[:200] or None,
            status=status,
            error_message=error_message,
        )
    except DatabaseError as e:
        logger.error(
            'Failed to write audit log',
            extra={
                'event': 'audit_log_failed',
                'entity_type': entity,
                'entity_id': str(entity_id) if entity_id is not None else None,
                'error': str(e),
            },
            exc_info=True,
        )
        return None
