"""
Audit logging for DRF views.
"""
from rest_framework.exceptions import ParseError

from apps.authz.permissions import get_request_roles
from .models import AuditActionChoices, AuditStatusChoices, log_audit

METHOD_ACTIONS = {
    'POST': AuditActionChoices.CREATE,
    'PUT': AuditActionChoices.UPDATE,
    'PATCH': AuditActionChoices.UPDATE,
    'DELETE': AuditActionChoices.DELETE,
}


class AuditLogMixin:
    """
    Record authenticated calls to the view in the audit log.

    Mutating methods are always recorded; GET is recorded when the view sets
    `audit_reads = True`. Responses with a 4xx/5xx status are stored as
    FAILURE with the error detail.

    Usage:
        class LabResultViewSet(AuditLogMixin, UserContextMixin, viewsets.GenericViewSet):
            audit_entity = 'LabResult'
    """
    audit_entity = None
    audit_reads = False

    def get_audit_action(self, request):
        if request.method == 'GET' and self.audit_reads:
            return AuditActionChoices.READ
        return METHOD_ACTIONS.get(request.method)

    def get_audit_entity_id(self, request):
        lookup = getattr(self, 'lookup_url_kwarg', None) or getattr(self, 'lookup_field', 'pk')
        return self.kwargs.get(lookup)

    def get_audit_changes(self, request):
        if request.method == 'GET':
            return request.query_params.dict() or None

        try:
            data = request.data
        except ParseError:
            return None
        if hasattr(data, 'dict'):
            data = data.dict()
        return data or None

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)

        action = self.get_audit_action(request)
        user = getattr(request, 'user', None)
        if action is None or user is None or not user.is_authenticated:
            return response

        failed = response.status_code >= 400
        log_audit(
            request,
            action=action,
            entity=self.audit_entity or self.__class__.__name__,
            entity_id=self.get_audit_entity_id(request),
            changes=self.get_audit_changes(request),
            status=AuditStatusChoices.FAILURE if failed else AuditStatusChoices.SUCCESS,
            error_message=_error_message(response) if failed else None,
            user_roles=get_request_roles(request),
        )
        return response


def _error_message(response):
    data = getattr(response, 'data', None)
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail'])
    if data:
        return str(data)
    return f'HTTP {response.status_code}'
