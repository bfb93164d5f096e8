from decimal import Decimal

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from apps.core.serializers import EmployeeSummarySerializer, UserSummarySerializer
from apps.employees.models import Employee
from .models import (
    MONTH_CHOICES, PayrollProcessing, SalarySlip, SalaryStructure, SalaryStructureItem,
)


# ---------------------------------------------------------------------------
# Salary structures
# ---------------------------------------------------------------------------

class SalaryStructureItemSerializer(serializers.ModelSerializer):
    value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))

    class Meta:
        model = SalaryStructureItem
        fields = ['id', 'structure_type', 'value', 'category', 'is_default']
        read_only_fields = ['id']

    def validate_structure_type(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Structure type is required')
        return value


class SalaryStructureSerializer(serializers.ModelSerializer):
    """Salary structure with its line items; items are replaced as a whole on update."""

    employee_detail = EmployeeSummarySerializer(source='employee', read_only=True)
    structure_items = SalaryStructureItemSerializer(source='items', many=True)
    total_earnings = serializers.SerializerMethodField()
    total_deductions = serializers.SerializerMethodField()

    class Meta:
        model = SalaryStructure
        fields = [
            'id', 'employee', 'employee_detail', 'start_date', 'end_date', 'status',
            'structure_items', 'total_earnings', 'total_deductions',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    @extend_schema_field(OpenApiTypes.DECIMAL)
    def get_total_earnings(self, obj):
        return obj.total_for(SalaryStructureItem.CATEGORY_EARNINGS)

    @extend_schema_field(OpenApiTypes.DECIMAL)
    def get_total_deductions(self, obj):
        return obj.total_for(SalaryStructureItem.CATEGORY_DEDUCTIONS)

    def validate_structure_items(self, value):
        if not value:
            raise serializers.ValidationError('At least one structure item is required')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date cannot be earlier than start date'})
        return attrs


# ---------------------------------------------------------------------------
# Payroll processing
# ---------------------------------------------------------------------------

class SalarySlipSerializer(serializers.ModelSerializer):
    employee_detail = EmployeeSummarySerializer(source='employee', read_only=True)

    class Meta:
        model = SalarySlip
        fields = [
            'id', 'payroll', 'employee', 'employee_detail', 'payroll_month', 'payroll_year',
            'basic_salary', 'total_earnings', 'total_deductions', 'leave_days',
            'leave_deductions', 'net_salary', 'status', 'processed_date', 'paid_date',
            'remarks', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'payroll', 'employee', 'payroll_month', 'payroll_year',
            'basic_salary', 'total_earnings', 'total_deductions', 'leave_days',
            'leave_deductions', 'net_salary', 'processed_date', 'created_at', 'updated_at',
        ]


class PayrollProcessingSerializer(serializers.ModelSerializer):
    processed_by_detail = UserSummarySerializer(source='processed_by', read_only=True)

    class Meta:
        model = PayrollProcessing
        fields = [
            'id', 'payroll_month', 'payroll_year', 'processing_date', 'status',
            'total_employees', 'total_earnings', 'total_deductions',
            'total_leave_deductions', 'total_net_salary',
            'processed_by', 'processed_by_detail', 'remarks', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PayrollProcessingDetailSerializer(PayrollProcessingSerializer):
    salary_slips = SalarySlipSerializer(many=True, read_only=True)

    class Meta(PayrollProcessingSerializer.Meta):
        fields = PayrollProcessingSerializer.Meta.fields + ['salary_slips']
        read_only_fields = fields


class PayrollProcessSerializer(serializers.Serializer):
    """
    Input for a payroll run.

    ``async`` queues the run on the Celery worker instead of processing it
    inside the request.
    """

    payroll_month = serializers.CharField(max_length=2)
    payroll_year = serializers.IntegerField(min_value=2000, max_value=2100)
    employee_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    process_all = serializers.BooleanField(required=False, default=False)
    remarks = serializers.CharField(required=False, allow_blank=True, default='')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # "async" is a keyword, so it cannot be declared as a class attribute
        self.fields['async'] = serializers.BooleanField(required=False, default=False)

    def validate_payroll_month(self, value):
        value = value.strip().zfill(2)
        if value not in dict(MONTH_CHOICES):
            raise serializers.ValidationError('Payroll month must be between 01 and 12')
        return value

    def validate_employee_ids(self, value):
        found = set(Employee.objects.filter(pk__in=value).values_list('pk', flat=True))
        missing = [str(pk) for pk in value if pk not in found]
        if missing:
            raise serializers.ValidationError(f"Unknown employees: {', '.join(missing)}")
        return value

    def validate(self, attrs):
        if not attrs.get('process_all') and not attrs.get('employee_ids'):
            raise serializers.ValidationError({'employee_ids': 'Select employees or set process_all'})
        return attrs


class PayrollUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = PayrollProcessing
        fields = ['status', 'remarks']
