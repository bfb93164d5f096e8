"""
Leave Serializers
"""

from django.utils import timezone
from rest_framework import serializers

from apps.core.exceptions import ValidationException
from apps.core.serializers import EmployeeSummarySerializer, UniqueFieldsMixin, UserSummarySerializer
from apps.employees.models import Employee
from .models import LeaveApplication, LeaveBalance, LeaveType


class LeaveTypeSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    """Leave type serializer"""
    unique_fields = ('name', 'code')
    resource_label = 'Leave type'

    class Meta:
        model = LeaveType
        fields = [
            'id', 'name', 'code', 'description', 'max_days_per_year',
            'is_paid', 'requires_approval', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_code(self, value):
        return value.strip().upper()


class LeaveBalanceSerializer(serializers.ModelSerializer):
    """
    Leave balance serializer.

    ``used_days`` and ``balance_days`` are maintained by the leave service;
    ``allocated_days`` defaults to the leave type's yearly allocation.
    """

    employee_detail = EmployeeSummarySerializer(source='employee', read_only=True)
    leave_type_name = serializers.CharField(source='leave_type.name', read_only=True)
    leave_type_code = serializers.CharField(source='leave_type.code', read_only=True)
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    allocated_days = serializers.DecimalField(max_digits=5, decimal_places=1, min_value=0, required=False)

    class Meta:
        model = LeaveBalance
        fields = [
            'id', 'employee', 'employee_detail', 'leave_type', 'leave_type_name', 'leave_type_code',
            'year', 'allocated_days', 'used_days', 'balance_days',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'used_days', 'balance_days', 'created_at', 'updated_at']
        # uniqueness is checked in validate() with a readable message
        validators = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # a balance row stays on its employee, leave type and year
        if self.instance is not None:
            for field in ('employee', 'leave_type', 'year'):
                self.fields[field].read_only = True

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if self.instance is None:
            attrs.setdefault('year', timezone.localdate().year)

        employee = attrs.get('employee', getattr(self.instance, 'employee', None))
        leave_type = attrs.get('leave_type', getattr(self.instance, 'leave_type', None))
        year = attrs.get('year', getattr(self.instance, 'year', None))

        clashes = LeaveBalance.objects.filter(employee=employee, leave_type=leave_type, year=year)
        if self.instance is not None:
            clashes = clashes.exclude(pk=self.instance.pk)
        if clashes.exists():
            raise ValidationException(
                'Leave balance already exists for this employee, leave type and year',
                field='leave_type',
            )
        return attrs


class LeaveApplicationSerializer(serializers.ModelSerializer):
    """
    Leave application serializer.

    ``employee`` may be omitted, in which case the application is filed for the
    employee linked to the requesting user.
    """

    employee = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all(), required=False)
    employee_detail = EmployeeSummarySerializer(source='employee', read_only=True)
    leave_type_name = serializers.CharField(source='leave_type.name', read_only=True)
    approved_by_detail = UserSummarySerializer(source='approved_by', read_only=True)

    class Meta:
        model = LeaveApplication
        fields = [
            'id', 'employee', 'employee_detail', 'leave_type', 'leave_type_name',
            'start_date', 'end_date', 'total_days', 'reason',
            'approval_status', 'approved_by', 'approved_by_detail', 'approved_date',
            'rejection_reason', 'cancelled_date', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'total_days', 'approval_status', 'approved_by', 'approved_date',
            'rejection_reason', 'cancelled_date', 'created_at', 'updated_at',
        ]

    def validate_reason(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Reason is required')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date cannot be earlier than start date'})
        if self.instance is not None and 'employee' in attrs and attrs['employee'] != self.instance.employee:
            raise serializers.ValidationError({'employee': 'Employee cannot be changed'})
        return attrs


class LeaveRejectSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')
