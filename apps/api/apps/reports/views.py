"""
Report views.

GET /api/v1/reports/dashboard                         view_dashboard
GET /api/v1/reports/patients?startDate&endDate        view_reports
GET /api/v1/reports/revenue?startDate&endDate         view_reports
GET /api/v1/reports/labs?startDate&endDate&status     view_reports
GET /api/v1/reports/encounters?startDate&endDate&type view_reports
"""
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.navigation import Perm
from apps.authz.permissions import HasRolePermission
from apps.audit.mixins import AuditLogMixin
from apps.core.observability.correlation import UserContextMixin
from . import services
from .serializers import (
    DashboardStatsSerializer,
    EncounterReportQuerySerializer,
    EncounterReportSerializer,
    LabReportQuerySerializer,
    LabReportSerializer,
    PatientReportSerializer,
    ReportQuerySerializer,
    RevenueReportSerializer,
)


class ReportView(AuditLogMixin, UserContextMixin, APIView):
    """
    Base report view: validate query params, run the report, serialize.

    Blank query parameters are treated as absent. Every authenticated call
    is recorded in the audit log as a READ of the report.
    """
    permission_classes = [HasRolePermission]
    required_permission = Perm.VIEW_REPORTS
    audit_entity = 'Report'
    audit_reads = True
    report_name = None
    query_serializer_class = ReportQuerySerializer
    serializer_class = None

    def run_report(self, **filters):
        raise NotImplementedError

    def get_audit_entity_id(self, request):
        return self.report_name

    def get_filters(self, request):
        params = {key: value for key, value in request.query_params.items() if value != ''}
        query = self.query_serializer_class(data=params)
        query.is_valid(raise_exception=True)
        return query.to_filters()

    def get(self, request):
        report = self.run_report(**self.get_filters(request))
        serializer = self.serializer_class(report, context={'request': request})
        return Response(serializer.data)


class DashboardStatsView(ReportView):
    report_name = 'dashboard'
    required_permission = Perm.VIEW_DASHBOARD
    serializer_class = DashboardStatsSerializer

    def get_filters(self, request):
        return {}

    def run_report(self):
        return services.get_dashboard_stats()


class PatientReportView(ReportView):
    report_name = 'patients'
    serializer_class = PatientReportSerializer

    def run_report(self, start_date=None, end_date=None):
        return services.get_patient_report(start_date=start_date, end_date=end_date)


class RevenueReportView(ReportView):
    report_name = 'revenue'
    serializer_class = RevenueReportSerializer

    def run_report(self, start_date=None, end_date=None):
        return services.get_revenue_report(start_date=start_date, end_date=end_date)


class LabReportView(ReportView):
    report_name = 'labs'
    query_serializer_class = LabReportQuerySerializer
    serializer_class = LabReportSerializer

    def run_report(self, start_date=None, end_date=None, status=None):
        return services.get_lab_report(start_date=start_date, end_date=end_date, status=status)


class EncounterReportView(ReportView):
    report_name = 'encounters'
    query_serializer_class = EncounterReportQuerySerializer
    serializer_class = EncounterReportSerializer

    def run_report(self, start_date=None, end_date=None, type=None):
        return services.get_encounter_report(start_date=start_date, end_date=end_date, type=type)
