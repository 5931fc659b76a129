"""
Tests for the route table, role permission matrix and auth endpoints.
"""
import pytest
from rest_framework import status

from apps.authz.models import RoleChoices
from apps.authz.navigation import (
    ROLE_PERMISSIONS,
    ROUTES,
    Perm,
    can_access_route,
    get_navigation_items,
    has_permission,
)


def nav_paths(roles):
    return [item['path'] for item in get_navigation_items(roles)]


class TestRolePermissions:

    def test_every_role_has_an_entry(self):
        assert set(ROLE_PERMISSIONS) == set(RoleChoices.values)

    def test_admin_holds_every_permission(self):
        for route in ROUTES:
            if route.permission:
                assert has_permission(RoleChoices.ADMIN, route.permission)

    @pytest.mark.parametrize('role,permission,expected', [
        (RoleChoices.DOCTOR, Perm.VIEW_REPORTS, True),
        (RoleChoices.BILLING, Perm.VIEW_REPORTS, True),
        (RoleChoices.NURSE, Perm.VIEW_REPORTS, False),
        (RoleChoices.LAB_TECH, Perm.EDIT_LAB, True),
        (RoleChoices.DOCTOR, Perm.EDIT_LAB, False),
        (RoleChoices.PHARMACIST, Perm.VIEW_PRESCRIPTIONS, True),
        (RoleChoices.PHARMACIST, Perm.VIEW_LABS, False),
        ('unknown', Perm.VIEW_DASHBOARD, False),
    ])
    def test_has_permission(self, role, permission, expected):
        assert has_permission(role, permission) is expected


class TestRouteAccess:

    def test_unknown_route_allowed(self):
        assert can_access_route(RoleChoices.PHARMACIST, '/does-not-exist')

    def test_login_route_needs_no_permission(self):
        assert can_access_route(RoleChoices.PHARMACIST, '/login')

    def test_restricted_route(self):
        assert not can_access_route(RoleChoices.NURSE, '/billing')
        assert can_access_route(RoleChoices.BILLING, '/billing')


class TestNavigationItems:

    def test_pharmacist(self):
        assert nav_paths(RoleChoices.PHARMACIST) == [
            '/', '/patients', '/patients/search', '/prescriptions', '/settings',
        ]

    def test_excludes_hidden_routes(self):
        paths = nav_paths(RoleChoices.ADMIN)
        assert '/login' not in paths
        assert '/patients/:id' not in paths
        assert '/audit' in paths

    def test_multiple_roles_union_in_table_order(self):
        paths = nav_paths([RoleChoices.PHARMACIST, RoleChoices.LAB_TECH])
        assert paths == [
            '/', '/patients', '/patients/search', '/encounters', '/labs', '/prescriptions', '/settings',
        ]

    def test_no_roles(self):
        assert get_navigation_items([]) == []


@pytest.mark.django_db
class TestAuthEndpoints:

    def test_navigation_for_current_user(self, billing_client):
        response = billing_client.get('/api/v1/auth/navigation/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['roles'] == ['billing']
        paths = [item['path'] for item in response.data['items']]
        assert '/billing' in paths
        assert '/reports' in paths
        assert '/labs' not in paths

    def test_navigation_requires_auth(self, api_client):
        response = api_client.get('/api/v1/auth/navigation/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_current_user(self, doctor_client):
        response = doctor_client.get('/api/v1/auth/me/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'doctor@test.com'
        assert response.data['display_name'] == 'Rajesh Kumar'
        assert response.data['roles'] == ['doctor']

    def test_token_obtain_and_use(self, api_client, nurse_user):
        response = api_client.post(
            '/api/v1/auth/token/',
            {'email': 'nurse@test.com', 'password': 'testpass123'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = api_client.get('/api/v1/auth/me/')
        assert me.status_code == status.HTTP_200_OK
        assert me.data['roles'] == ['nurse']

    def test_token_refresh(self, api_client, nurse_user):
        tokens = api_client.post(
            '/api/v1/auth/token/',
            {'email': 'nurse@test.com', 'password': 'testpass123'},
            format='json'
        ).data

        response = api_client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
