"""
Report serializers.

Query serializers validate report filters (400 on malformed dates or enum
values). Response serializers render camelCase payloads; patient contact
fields go through role-based masking using the request in context.
"""
from rest_framework import serializers

from apps.authz.visibility import FieldType, SensitiveFieldSerializerField
from apps.billing.models import Bill
from apps.clinical.models import (
    Encounter,
    EncounterTypeChoices,
    LabResult,
    LabStatusChoices,
    Patient,
)


def _money(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False, **kwargs)


# ============================================================================
# Query parameters
# ============================================================================

class ReportQuerySerializer(serializers.Serializer):
    """?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD (both optional, inclusive)"""
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)

    def to_filters(self):
        return {
            'start_date': self.validated_data.get('startDate'),
            'end_date': self.validated_data.get('endDate'),
        }


class LabReportQuerySerializer(ReportQuerySerializer):
    status = serializers.ChoiceField(choices=LabStatusChoices.choices, required=False)

    def to_filters(self):
        return {**super().to_filters(), 'status': self.validated_data.get('status')}


class EncounterReportQuerySerializer(ReportQuerySerializer):
    type = serializers.ChoiceField(choices=EncounterTypeChoices.choices, required=False)

    def to_filters(self):
        return {**super().to_filters(), 'type': self.validated_data.get('type')}


# ============================================================================
# Related records
# ============================================================================

class PatientSummarySerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    phone = SensitiveFieldSerializerField(field_type=FieldType.PHONE)

    class Meta:
        model = Patient
        fields = ['id', 'firstName', 'lastName', 'gender', 'phone']


class UserSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(source='display_name')
    email = serializers.EmailField()


class EncounterSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Encounter
        fields = ['id', 'date', 'type', 'status']


# ============================================================================
# Report rows
# ============================================================================

class PatientActivityCountsSerializer(serializers.Serializer):
    encounters = serializers.IntegerField(source='encounter_count')
    labResults = serializers.IntegerField(source='lab_result_count')
    prescriptions = serializers.IntegerField(source='prescription_count')
    bills = serializers.IntegerField(source='bill_count')


class PatientReportRowSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    dateOfBirth = serializers.DateField(source='date_of_birth')
    phone = SensitiveFieldSerializerField(field_type=FieldType.PHONE)
    email = SensitiveFieldSerializerField(field_type=FieldType.EMAIL)
    aadhaar = SensitiveFieldSerializerField(field_type=FieldType.AADHAAR)
    address = SensitiveFieldSerializerField(field_type=FieldType.ADDRESS)
    bloodGroup = serializers.CharField(source='blood_group', allow_null=True)
    registrationDate = serializers.DateTimeField(source='registration_date')
    counts = PatientActivityCountsSerializer(source='*')

    class Meta:
        model = Patient
        fields = [
            'id',
            'firstName',
            'lastName',
            'dateOfBirth',
            'gender',
            'phone',
            'email',
            'aadhaar',
            'address',
            'city',
            'state',
            'pincode',
            'bloodGroup',
            'registrationDate',
            'counts',
        ]


class BillReportRowSerializer(serializers.ModelSerializer):
    patient = PatientSummarySerializer()
    encounter = EncounterSummarySerializer(allow_null=True)
    subtotal = _money()
    tax = _money()
    discount = _money()
    total = _money()
    paymentMethod = serializers.CharField(source='payment_method', allow_null=True)
    paymentStatus = serializers.CharField(source='payment_status')

    class Meta:
        model = Bill
        fields = [
            'id',
            'patient',
            'encounter',
            'date',
            'items',
            'subtotal',
            'tax',
            'discount',
            'total',
            'currency',
            'paymentMethod',
            'paymentStatus',
            'notes',
        ]


class LabReportRowSerializer(serializers.ModelSerializer):
    patient = PatientSummarySerializer()
    orderedBy = UserSummarySerializer(source='ordered_by')
    encounter = EncounterSummarySerializer(allow_null=True)
    testName = serializers.CharField(source='test_name')
    testCategory = serializers.CharField(source='test_category')
    orderedDate = serializers.DateTimeField(source='ordered_date')
    reportDate = serializers.DateTimeField(source='report_date', allow_null=True)
    normalRange = serializers.CharField(source='normal_range', allow_null=True)
    reportGeneratedAt = serializers.DateTimeField(source='report_generated_at', allow_null=True)

    class Meta:
        model = LabResult
        fields = [
            'id',
            'patient',
            'orderedBy',
            'encounter',
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


class EncounterReportRowSerializer(serializers.ModelSerializer):
    patient = PatientSummarySerializer()
    doctor = UserSummarySerializer()
    chiefComplaint = serializers.CharField(source='chief_complaint')
    diagnosisCode = serializers.CharField(source='diagnosis_code', allow_null=True)

    class Meta:
        model = Encounter
        fields = [
            'id',
            'patient',
            'doctor',
            'date',
            'type',
            'status',
            'chiefComplaint',
            'diagnosis',
            'diagnosisCode',
        ]


# ============================================================================
# Report payloads
# ============================================================================

class StatusCountSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class TypeCountSerializer(serializers.Serializer):
    type = serializers.CharField()
    count = serializers.IntegerField()


class DashboardStatsSerializer(serializers.Serializer):
    totalPatients = serializers.IntegerField()
    totalEncounters = serializers.IntegerField()
    pendingLabs = serializers.IntegerField()
    totalRevenue = _money()
    todayEncounters = serializers.IntegerField()


class PatientReportSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    patients = PatientReportRowSerializer(many=True)


class RevenueReportSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    totalRevenue = _money()
    totalTax = _money()
    totalDiscount = _money()
    bills = BillReportRowSerializer(many=True)


class LabReportSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    statusCounts = StatusCountSerializer(many=True)
    labs = LabReportRowSerializer(many=True)


class EncounterReportSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    typeCounts = TypeCountSerializer(many=True)
    statusCounts = StatusCountSerializer(many=True)
    encounters = EncounterReportRowSerializer(many=True)
