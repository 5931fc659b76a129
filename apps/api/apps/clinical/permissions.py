"""
Clinical permissions.

Lab result actions map onto the role permission matrix:
- retrieve: view_labs (admin, doctor, nurse, lab_tech)
- update_status / generate_report: edit_lab (admin, lab_tech)
"""
from apps.authz.navigation import Perm
from apps.authz.permissions import HasRolePermission


class LabResultPermission(HasRolePermission):
    ACTION_PERMISSIONS = {
        'retrieve': Perm.VIEW_LABS,
        'update_status': Perm.EDIT_LAB,
        'generate_report': Perm.EDIT_LAB,
    }

    def has_permission(self, request, view):
        view.required_permission = self.ACTION_PERMISSIONS.get(view.action, Perm.VIEW_LABS)
        return super().has_permission(request, view)
