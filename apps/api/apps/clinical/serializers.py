"""
Clinical serializers for lab result endpoints.
"""
from rest_framework import serializers
from .models import LabResult, LabStatusChoices


class LabResultSerializer(serializers.ModelSerializer):
    """
    Lab result detail.

    Carries no patient contact data so the rendered payload is the same for
    every role and can be shared through the query cache.
    """
    patientId = serializers.UUIDField(source='patient_id', read_only=True)
    patientName = serializers.CharField(source='patient.full_name', read_only=True)
    encounterId = serializers.UUIDField(source='encounter_id', read_only=True, allow_null=True)
    orderedById = serializers.UUIDField(source='ordered_by_id', read_only=True)
    testName = serializers.CharField(source='test_name', read_only=True)
    testCategory = serializers.CharField(source='test_category', read_only=True)
    orderedDate = serializers.DateTimeField(source='ordered_date', read_only=True)
    reportDate = serializers.DateTimeField(source='report_date', read_only=True, allow_null=True)
    normalRange = serializers.CharField(source='normal_range', read_only=True, allow_null=True)
    reportGeneratedAt = serializers.DateTimeField(source='report_generated_at', read_only=True, allow_null=True)

    class Meta:
        model = LabResult
        fields = [
            'id',
            'patientId',
            'patientName',
            'encounterId',
            'orderedById',
            'testName',
            'testCategory',
            'orderedDate',
            'reportDate',
            'status',
            'results',
            'normalRange',
            'unit',
            'remarks',
            'reportGeneratedAt',
        ]
        read_only_fields = fields


class LabStatusUpdateSerializer(serializers.Serializer):
    """Payload for PATCH /clinical/labs/{id}/status/."""
    status = serializers.ChoiceField(choices=LabStatusChoices.choices)
    results = serializers.CharField(required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)


class LabReportJobSerializer(serializers.Serializer):
    """Response for an enqueued lab report job."""
    taskId = serializers.CharField()
    labResultId = serializers.UUIDField()
    queue = serializers.CharField()
    status = serializers.CharField()
