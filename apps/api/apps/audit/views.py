"""
Audit log views (admin only).

GET /api/v1/audit/?userId&userRole&entity&action&status&page&limit&order
GET /api/v1/audit/{id}/
"""
import math

from rest_framework import viewsets
from rest_framework.response import Response

from apps.authz.permissions import IsAdmin
from apps.core.observability.correlation import UserContextMixin
from .models import AuditLog
from .serializers import AuditLogQuerySerializer, AuditLogSerializer


class AuditLogViewSet(UserContextMixin, viewsets.ReadOnlyModelViewSet):
    """
    Audit log entries, newest first unless `order=asc`.

    List response:
    {
        "data": [...],
        "meta": {"total": 120, "page": 1, "limit": 50, "totalPages": 3}
    }
    """
    queryset = AuditLog.objects.select_related('user')
    serializer_class = AuditLogSerializer
    permission_classes = [IsAdmin]
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def list(self, request):
        query = AuditLogQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = query.validated_data['page']
        limit = query.validated_data['limit']
        ordering = 'timestamp' if query.validated_data['order'] == 'asc' else '-timestamp'

        logs = self.get_queryset().filter(**query.to_filters()).order_by(ordering)
        total = logs.count()
        offset = (page - 1) * limit

        return Response({
            'data': self.get_serializer(logs[offset:offset + limit], many=True).data,
            'meta': {
                'total': total,
                'page': page,
                'limit': limit,
                'totalPages': math.ceil(total / limit),
            },
        })
