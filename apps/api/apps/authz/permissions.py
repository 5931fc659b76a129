"""
Authz permissions backed by the role permission matrix.
"""
from rest_framework import permissions
from apps.authz.models import RoleChoices
from apps.authz.navigation import roles_have_permission


def get_user_roles(user):
    """Role names of an authenticated user; empty set otherwise."""
    if not user or not user.is_authenticated:
        return set()
    return set(user.user_roles.values_list('role__name', flat=True))


def get_request_roles(request):
    """
    Role names of the request user, looked up once per request.

    Permission checks and masked serializer fields of the same request share
    the cached set.
    """
    roles = getattr(request, '_authz_roles', None)
    if roles is None:
        roles = get_user_roles(getattr(request, 'user', None))
        request._authz_roles = roles
    return roles


class IsAdmin(permissions.BasePermission):
    """
    Permission class that only allows Admin role users.
    """

    def has_permission(self, request, view):
        return RoleChoices.ADMIN in get_request_roles(request)


class HasRolePermission(permissions.BasePermission):
    """
    Allow access when any of the user's roles grants `required_permission`.

    Views declare the permission name:

        permission_classes = [HasRolePermission]
        required_permission = Perm.VIEW_REPORTS
    """

    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        required = getattr(view, 'required_permission', None)
        if required is None:
            return True

        return roles_have_permission(get_request_roles(request), required)
