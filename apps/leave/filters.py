"""Leave app filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import LeaveApplication, LeaveBalance, LeaveType


class LeaveTypeFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    code = django_filters.CharFilter(lookup_expr='iexact')

    class Meta:
        model = LeaveType
        fields = ['name', 'code', 'is_paid', 'requires_approval', 'is_active']


class LeaveBalanceFilter(ActiveFilterSet):
    employee = django_filters.UUIDFilter()
    leave_type = django_filters.UUIDFilter()
    year = django_filters.NumberFilter()
    department = django_filters.UUIDFilter(field_name='employee__department')

    class Meta:
        model = LeaveBalance
        fields = ['employee', 'leave_type', 'year', 'is_active']


class LeaveApplicationFilter(ActiveFilterSet):
    approval_status = django_filters.ChoiceFilter(choices=LeaveApplication.STATUS_CHOICES)
    leave_type = django_filters.UUIDFilter()
    employee = django_filters.UUIDFilter()
    department = django_filters.UUIDFilter(field_name='employee__department')
    # Applications overlapping [date_from, date_to]
    date_from = django_filters.DateFilter(field_name='end_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='start_date', lookup_expr='lte')

    class Meta:
        model = LeaveApplication
        fields = ['approval_status', 'leave_type', 'employee', 'is_active']
