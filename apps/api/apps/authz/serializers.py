"""
Authz serializers.
"""
from rest_framework import serializers
from apps.authz.models import User


class CurrentUserSerializer(serializers.ModelSerializer):
    """Authenticated user with role names."""
    roles = serializers.SerializerMethodField()
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'display_name', 'roles']
        read_only_fields = fields

    def get_roles(self, obj):
        return sorted(obj.get_role_names())


class NavigationItemSerializer(serializers.Serializer):
    path = serializers.CharField()
    permission = serializers.CharField(allow_null=True)
    icon = serializers.CharField(allow_null=True)
    label = serializers.CharField(allow_null=True)
