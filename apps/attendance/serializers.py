"""
Attendance Serializers
"""

from rest_framework import serializers

from apps.core.serializers import EmployeeSummarySerializer, UniqueFieldsMixin
from .models import AttendanceHistory, AttendanceRecord, Shift


class ShiftSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    """Shift serializer"""
    unique_fields = ('name', 'code')
    resource_label = 'Shift'

    start_time = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    end_time = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    is_night_shift = serializers.BooleanField(read_only=True)
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = Shift
        fields = [
            'id', 'name', 'code', 'description', 'start_time', 'end_time',
            'break_duration', 'grace_minutes', 'half_day_hours', 'is_night_shift',
            'employee_count', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_employee_count(self, obj):
        return obj.employees.filter(is_active=True).count()

    def validate_code(self, value):
        return value.strip().upper()

    def validate(self, attrs):
        attrs = super().validate(attrs)
        start = attrs.get('start_time', getattr(self.instance, 'start_time', None))
        end = attrs.get('end_time', getattr(self.instance, 'end_time', None))
        if start is not None and start == end:
            raise serializers.ValidationError({'end_time': 'Shift start and end time cannot be the same'})
        return attrs


class AttendanceHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = AttendanceHistory
        fields = [
            'id', 'action_type', 'action_time', 'latitude', 'longitude',
            'address', 'device_info', 'old_data', 'new_data', 'remarks',
        ]


class AttendanceRecordSerializer(serializers.ModelSerializer):
    employee_detail = EmployeeSummarySerializer(source='employee', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = [
            'id', 'employee', 'employee_detail', 'attendance_date',
            'punch_in_time', 'punch_out_time', 'total_hours',
            'punch_status', 'status', 'work_type',
            'punch_in_latitude', 'punch_in_longitude', 'punch_in_address',
            'punch_out_latitude', 'punch_out_longitude', 'punch_out_address',
            'device_info', 'remarks', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class AttendanceRecordDetailSerializer(AttendanceRecordSerializer):
    history = AttendanceHistorySerializer(many=True, read_only=True)

    class Meta(AttendanceRecordSerializer.Meta):
        fields = AttendanceRecordSerializer.Meta.fields + ['history']
        read_only_fields = fields


class PunchSerializer(serializers.Serializer):
    """Punch in/out request payload"""
    action_type = serializers.ChoiceField(
        choices=AttendanceRecord.PUNCH_STATUS_CHOICES,
        error_messages={
            'required': 'action_type is required. Valid values: punch_in, punch_out',
            'invalid_choice': 'Invalid action_type. Valid values: punch_in, punch_out',
        },
    )
    latitude = serializers.DecimalField(
        max_digits=10, decimal_places=8, min_value=-90, max_value=90, required=False, allow_null=True
    )
    longitude = serializers.DecimalField(
        max_digits=11, decimal_places=8, min_value=-180, max_value=180, required=False, allow_null=True
    )
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
    work_type = serializers.ChoiceField(
        choices=AttendanceRecord.WORK_TYPE_CHOICES, required=False, default='office'
    )
    device_info = serializers.DictField(required=False)
    remarks = serializers.CharField(required=False, allow_blank=True)


class PunchStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    attendance_date = serializers.DateField()
    attendance = AttendanceRecordSerializer(allow_null=True)
