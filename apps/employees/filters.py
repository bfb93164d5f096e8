"""Employee app filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import Employee, Department, Designation


class EmployeeFilter(ActiveFilterSet):
    employee_id = django_filters.CharFilter(lookup_expr='icontains')
    department = django_filters.UUIDFilter()
    designation = django_filters.UUIDFilter()
    reporting_manager = django_filters.UUIDFilter()
    shift = django_filters.UUIDFilter()
    employment_type = django_filters.ChoiceFilter(choices=Employee.TYPE_CHOICES)
    employment_status = django_filters.ChoiceFilter(choices=Employee.STATUS_CHOICES)
    joined_after = django_filters.DateFilter(field_name='date_of_joining', lookup_expr='gte')
    joined_before = django_filters.DateFilter(field_name='date_of_joining', lookup_expr='lte')

    class Meta:
        model = Employee
        fields = [
            'department', 'designation', 'employment_type', 'employment_status', 'is_active',
        ]


class DepartmentFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    parent = django_filters.CharFilter(method='filter_parent')
    manager = django_filters.UUIDFilter()

    class Meta:
        model = Department
        fields = ['name', 'parent', 'manager', 'is_active']

    def filter_parent(self, queryset, name, value):
        if value == 'null':
            return queryset.filter(parent__isnull=True)
        return queryset.filter(parent_id=value)


class DesignationFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    department = django_filters.UUIDFilter()

    class Meta:
        model = Designation
        fields = ['name', 'department', 'is_active']
