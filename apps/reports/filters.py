"""Report query-string filters."""
import django_filters

from apps.attendance.models import AttendanceRecord
from apps.employees.models import Employee
from apps.leave.models import LeaveApplication
from apps.payroll.models import PayrollProcessing, SalarySlip
from apps.recruitment.models import Candidate


class AttendanceReportFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name='attendance_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='attendance_date', lookup_expr='lte')
    department = django_filters.UUIDFilter(field_name='employee__department')
    employee = django_filters.UUIDFilter()
    status = django_filters.ChoiceFilter(choices=AttendanceRecord.STATUS_CHOICES)

    class Meta:
        model = AttendanceRecord
        fields = ['employee', 'status']


class LeaveReportFilter(django_filters.FilterSet):
    # Applications overlapping [date_from, date_to]
    date_from = django_filters.DateFilter(field_name='end_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='start_date', lookup_expr='lte')
    department = django_filters.UUIDFilter(field_name='employee__department')
    employee = django_filters.UUIDFilter()
    leave_type = django_filters.UUIDFilter()
    approval_status = django_filters.ChoiceFilter(choices=LeaveApplication.STATUS_CHOICES)

    class Meta:
        model = LeaveApplication
        fields = ['employee', 'leave_type', 'approval_status']


class PayrollReportFilter(django_filters.FilterSet):
    month = django_filters.CharFilter(method='filter_month')
    year = django_filters.NumberFilter(field_name='payroll_year')
    department = django_filters.UUIDFilter(field_name='employee__department')
    employee = django_filters.UUIDFilter()
    status = django_filters.ChoiceFilter(choices=PayrollProcessing.STATUS_CHOICES)

    class Meta:
        model = SalarySlip
        fields = ['employee', 'status']

    def filter_month(self, queryset, name, value):
        return queryset.filter(payroll_month=value.strip().zfill(2))


class HiringReportFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name='application_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='application_date', lookup_expr='lte')
    job_posting = django_filters.UUIDFilter()
    stage = django_filters.UUIDFilter(field_name='current_hiring_stage')
    status = django_filters.ChoiceFilter(choices=Candidate.STATUS_CHOICES)

    class Meta:
        model = Candidate
        fields = ['job_posting', 'status']


class EmployeeReportFilter(django_filters.FilterSet):
    department = django_filters.UUIDFilter()
    designation = django_filters.UUIDFilter()
    employment_status = django_filters.ChoiceFilter(choices=Employee.STATUS_CHOICES)
    is_active = django_filters.BooleanFilter()
    joined_from = django_filters.DateFilter(field_name='date_of_joining', lookup_expr='gte')
    joined_to = django_filters.DateFilter(field_name='date_of_joining', lookup_expr='lte')

    class Meta:
        model = Employee
        fields = ['department', 'designation', 'employment_status', 'is_active']
