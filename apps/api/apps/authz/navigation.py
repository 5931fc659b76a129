"""
Role permission matrix and route/navigation configuration for the portal UI.

The SPA asks GET /api/v1/auth/navigation/ for the items the current user
may see; report endpoints reuse the same matrix through HasRolePermission.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from apps.authz.models import RoleChoices


class Perm:
    """Permission names."""
    VIEW_DASHBOARD = 'view_dashboard'
    VIEW_PATIENTS = 'view_patients'
    CREATE_PATIENT = 'create_patient'
    EDIT_PATIENT = 'edit_patient'
    DELETE_PATIENT = 'delete_patient'
    VIEW_ENCOUNTERS = 'view_encounters'
    CREATE_ENCOUNTER = 'create_encounter'
    EDIT_ENCOUNTER = 'edit_encounter'
    VIEW_LABS = 'view_labs'
    CREATE_LAB = 'create_lab'
    EDIT_LAB = 'edit_lab'
    VIEW_PRESCRIPTIONS = 'view_prescriptions'
    CREATE_PRESCRIPTION = 'create_prescription'
    EDIT_PRESCRIPTION = 'edit_prescription'
    VIEW_BILLING = 'view_billing'
    CREATE_BILL = 'create_bill'
    EDIT_BILL = 'edit_bill'
    PROCESS_PAYMENT = 'process_payment'
    VIEW_REPORTS = 'view_reports'
    VIEW_SETTINGS = 'view_settings'
    VIEW_AUDIT_LOG = 'view_audit_log'
    SEARCH_PATIENTS = 'search_patients'


ROLE_PERMISSIONS = {
    RoleChoices.ADMIN: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.CREATE_PATIENT,
        Perm.EDIT_PATIENT,
        Perm.DELETE_PATIENT,
        Perm.VIEW_ENCOUNTERS,
        Perm.CREATE_ENCOUNTER,
        Perm.EDIT_ENCOUNTER,
        Perm.VIEW_LABS,
        Perm.CREATE_LAB,
        Perm.EDIT_LAB,
        Perm.VIEW_PRESCRIPTIONS,
        Perm.CREATE_PRESCRIPTION,
        Perm.EDIT_PRESCRIPTION,
        Perm.VIEW_BILLING,
        Perm.CREATE_BILL,
        Perm.EDIT_BILL,
        Perm.PROCESS_PAYMENT,
        Perm.VIEW_REPORTS,
        Perm.VIEW_SETTINGS,
        Perm.VIEW_AUDIT_LOG,
        Perm.SEARCH_PATIENTS,
    }),
    RoleChoices.DOCTOR: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.CREATE_PATIENT,
        Perm.EDIT_PATIENT,
        Perm.VIEW_ENCOUNTERS,
        Perm.CREATE_ENCOUNTER,
        Perm.EDIT_ENCOUNTER,
        Perm.VIEW_LABS,
        Perm.CREATE_LAB,
        Perm.VIEW_PRESCRIPTIONS,
        Perm.CREATE_PRESCRIPTION,
        Perm.EDIT_PRESCRIPTION,
        Perm.VIEW_BILLING,
        Perm.VIEW_REPORTS,
        Perm.VIEW_SETTINGS,
        Perm.SEARCH_PATIENTS,
    }),
    RoleChoices.NURSE: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.VIEW_ENCOUNTERS,
        Perm.EDIT_ENCOUNTER,
        Perm.VIEW_LABS,
        Perm.VIEW_PRESCRIPTIONS,
        Perm.VIEW_SETTINGS,
        Perm.SEARCH_PATIENTS,
    }),
    RoleChoices.LAB_TECH: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.VIEW_ENCOUNTERS,
        Perm.VIEW_LABS,
        Perm.CREATE_LAB,
        Perm.EDIT_LAB,
        Perm.VIEW_SETTINGS,
        Perm.SEARCH_PATIENTS,
    }),
    RoleChoices.PHARMACIST: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.VIEW_PRESCRIPTIONS,
        Perm.VIEW_SETTINGS,
        Perm.SEARCH_PATIENTS,
    }),
    RoleChoices.BILLING: frozenset({
        Perm.VIEW_DASHBOARD,
        Perm.VIEW_PATIENTS,
        Perm.VIEW_ENCOUNTERS,
        Perm.VIEW_BILLING,
        Perm.CREATE_BILL,
        Perm.EDIT_BILL,
        Perm.PROCESS_PAYMENT,
        Perm.VIEW_REPORTS,
        Perm.VIEW_SETTINGS,
        Perm.SEARCH_PATIENTS,
    }),
}


@dataclass(frozen=True)
class Route:
    path: str
    page: str
    permission: Optional[str] = None
    icon: Optional[str] = None
    label: Optional[str] = None
    in_navigation: bool = True

    def as_nav_item(self):
        return {
            'path': self.path,
            'permission': self.permission,
            'icon': self.icon,
            'label': self.label,
        }


# Centralized route table, organized by feature area
ROUTES: List[Route] = [
    Route('/login', 'LoginPage', in_navigation=False),
    Route('/', 'DashboardPage', Perm.VIEW_DASHBOARD, 'LayoutDashboard', 'nav.dashboard'),
    Route('/patients', 'PatientsPage', Perm.VIEW_PATIENTS, 'Users', 'nav.patients'),
    Route('/patients/search', 'PatientSearchPage', Perm.SEARCH_PATIENTS, 'Search', 'nav.patientSearch'),
    Route('/patients/:id', 'PatientChartPage', Perm.VIEW_PATIENTS, in_navigation=False),
    Route('/encounters', 'EncountersPage', Perm.VIEW_ENCOUNTERS, 'FileText', 'nav.encounters'),
    Route('/labs', 'LabsPage', Perm.VIEW_LABS, 'FlaskConical', 'nav.labs'),
    Route('/prescriptions', 'PrescriptionsPage', Perm.VIEW_PRESCRIPTIONS, 'Pill', 'nav.prescriptions'),
    Route('/billing', 'BillingPage', Perm.VIEW_BILLING, 'Receipt', 'nav.billing'),
    Route('/reports', 'ReportsPage', Perm.VIEW_REPORTS, 'BarChart', 'nav.reports'),
    Route('/settings', 'SettingsPage', Perm.VIEW_SETTINGS, 'Settings', 'nav.settings'),
    Route('/audit', 'AuditLogPage', Perm.VIEW_AUDIT_LOG, 'Shield', 'nav.auditLog'),
]

_ROUTES_BY_PATH = {route.path: route for route in ROUTES}


def has_permission(role, permission):
    """True if `role` grants `permission`. Unknown roles grant nothing."""
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def roles_have_permission(roles: Iterable[str], permission):
    return any(has_permission(role, permission) for role in roles)


def can_access_route(role, path):
    """
    Check if a role can access a route path.

    Unknown routes and routes without a required permission are allowed.
    """
    route = _ROUTES_BY_PATH.get(path)
    if route is None or route.permission is None:
        return True
    return has_permission(role, route.permission)


def get_navigation_items(roles):
    """
    Navigation items visible to the given role(s), in route-table order.

    Accepts a single role name or an iterable of role names; a user holding
    several roles sees the union.
    """
    if isinstance(roles, str):
        roles = [roles]
    roles = list(roles)

    return [
        route.as_nav_item()
        for route in ROUTES
        if route.in_navigation and roles_have_permission(roles, route.permission)
    ]
