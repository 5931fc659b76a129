"""
Authz views: current user profile and role-filtered navigation.
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.navigation import get_navigation_items
from apps.authz.permissions import get_request_roles
from apps.authz.serializers import CurrentUserSerializer, NavigationItemSerializer
from apps.core.observability.correlation import UserContextMixin


class NavigationView(UserContextMixin, APIView):
    """
    GET /api/v1/auth/navigation/

    Navigation items the current user may see. A user holding several
    roles sees the union of their items, in route-table order.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        roles = sorted(get_request_roles(request))
        items = get_navigation_items(roles)
        return Response({
            'roles': roles,
            'items': NavigationItemSerializer(items, many=True).data,
        })


class CurrentUserView(UserContextMixin, APIView):
    """GET /api/v1/auth/me/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(CurrentUserSerializer(request.user).data)
