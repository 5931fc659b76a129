"""
Reports URLs.
"""
from django.urls import path

from .views import (
    DashboardStatsView,
    EncounterReportView,
    LabReportView,
    PatientReportView,
    RevenueReportView,
)

urlpatterns = [
    path('dashboard', DashboardStatsView.as_view(), name='report-dashboard'),
    path('patients', PatientReportView.as_view(), name='report-patients'),
    path('revenue', RevenueReportView.as_view(), name='report-revenue'),
    path('labs', LabReportView.as_view(), name='report-labs'),
    path('encounters', EncounterReportView.as_view(), name='report-encounters'),
]
