"""
Clinical views - lab result detail, status updates and report jobs.
"""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from apps.audit.mixins import AuditLogMixin
from apps.core.observability.correlation import UserContextMixin
from .models import LabResult
from .permissions import LabResultPermission
from .serializers import LabReportJobSerializer, LabResultSerializer, LabStatusUpdateSerializer
from .services import enqueue_lab_report, get_lab_detail, update_lab_status
from .tasks import LAB_REPORT_QUEUE


class LabResultViewSet(AuditLogMixin, UserContextMixin, viewsets.GenericViewSet):
    """
    Lab results.

    GET   /api/v1/clinical/labs/{id}/                  detail (query cache)
    PATCH /api/v1/clinical/labs/{id}/status/           optimistic status update
    POST  /api/v1/clinical/labs/{id}/generate-report/  enqueue report job

    Status updates and report requests are recorded in the audit log.
    """
    queryset = LabResult.objects.select_related('patient')
    serializer_class = LabResultSerializer
    permission_classes = [LabResultPermission]
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    audit_entity = 'LabResult'

    def retrieve(self, request, pk=None):
        try:
            data = get_lab_detail(pk)
        except LabResult.DoesNotExist:
            raise NotFound('Lab result not found.')
        return Response(data)

    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        """
        PATCH /api/v1/clinical/labs/{id}/status/

        Request body:
        {
            "status": "COMPLETED",
            "results": "Hb 13.2",      (optional)
            "remarks": "Within range"  (optional)
        }
        """
        lab = self.get_object()

        serializer = LabStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = update_lab_status(lab, **serializer.validated_data)

        return Response(LabResultSerializer(updated).data)

    @action(detail=True, methods=['post'], url_path='generate-report')
    def generate_report(self, request, pk=None):
        """
        POST /api/v1/clinical/labs/{id}/generate-report/

        Response (202 Accepted):
        {
            "taskId": "...",
            "labResultId": "...",
            "queue": "lab-reports",
            "status": "queued"
        }
        """
        lab = self.get_object()
        result = enqueue_lab_report(lab)

        serializer = LabReportJobSerializer({
            'taskId': result.id,
            'labResultId': lab.id,
            'queue': LAB_REPORT_QUEUE,
            'status': 'queued',
        })
        return Response(serializer.data, status=status.HTTP_202_ACCEPTED)
