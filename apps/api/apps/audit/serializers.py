"""
Audit log serializers.
"""
from rest_framework import serializers

from apps.authz.models import RoleChoices
from .models import AuditActionChoices, AuditLog, AuditStatusChoices


class AuditLogQuerySerializer(serializers.Serializer):
    """?userId&userRole&entity&action&status&page&limit&order"""
    userId = serializers.UUIDField(required=False)
    userRole = serializers.ChoiceField(choices=RoleChoices.choices, required=False)
    entity = serializers.CharField(required=False, max_length=50)
    action = serializers.ChoiceField(choices=AuditActionChoices.choices, required=False)
    status = serializers.ChoiceField(choices=AuditStatusChoices.choices, required=False)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
    order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')

    def to_filters(self):
        data = self.validated_data
        lookups = {}
        if 'userId' in data:
            lookups['user_id'] = data['userId']
        if 'userRole' in data:
            lookups['user_role__contains'] = data['userRole']
        if 'entity' in data:
            lookups['entity'] = data['entity']
        if 'action' in data:
            lookups['action'] = data['action']
        if 'status' in data:
            lookups['status'] = data['status']
        return lookups


class AuditUserSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(source='display_name')
    email = serializers.EmailField()


class AuditLogSerializer(serializers.ModelSerializer):
    user = AuditUserSerializer(allow_null=True)
    userId = serializers.UUIDField(source='user_id', allow_null=True)
    userRole = serializers.CharField(source='user_role')
    entityId = serializers.CharField(source='entity_id', allow_null=True)
    ipAddress = serializers.CharField(source='ip_address', allow_null=True)
    userAgent = serializers.CharField(source='user_agent', allow_null=True)
    errorMessage = serializers.CharField(source='error_message', allow_null=True)

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'timestamp',
            'userId',
            'userRole',
            'user',
            'action',
            'entity',
            'entityId',
            'changes',
            'ipAddress',
            'userAgent',
            'status',
            'errorMessage',
        ]
