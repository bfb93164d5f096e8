"""Attendance app filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import AttendanceRecord, Shift


class ShiftFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = Shift
        fields = ['name', 'code', 'is_active']


class AttendanceRecordFilter(django_filters.FilterSet):
    attendance_date = django_filters.DateFilter()
    date_from = django_filters.DateFilter(field_name='attendance_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='attendance_date', lookup_expr='lte')
    employee = django_filters.UUIDFilter()
    employee_id = django_filters.UUIDFilter(field_name='employee')
    department = django_filters.UUIDFilter(field_name='employee__department')
    status = django_filters.ChoiceFilter(choices=AttendanceRecord.STATUS_CHOICES)
    punch_status = django_filters.ChoiceFilter(choices=AttendanceRecord.PUNCH_STATUS_CHOICES)
    work_type = django_filters.ChoiceFilter(choices=AttendanceRecord.WORK_TYPE_CHOICES)

    class Meta:
        model = AttendanceRecord
        fields = ['attendance_date', 'employee', 'status', 'punch_status', 'work_type']
