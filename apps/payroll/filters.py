"""Payroll app filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import MONTH_CHOICES, PayrollProcessing, SalarySlip, SalaryStructure


class SalaryStructureFilter(ActiveFilterSet):
    employee = django_filters.UUIDFilter()
    status = django_filters.ChoiceFilter(choices=SalaryStructure.STATUS_CHOICES)
    effective_on = django_filters.DateFilter(method='filter_effective_on')

    class Meta:
        model = SalaryStructure
        fields = ['employee', 'status', 'is_active']

    def filter_effective_on(self, queryset, name, value):
        return queryset.filter(start_date__lte=value, end_date__gte=value)


class PayrollProcessingFilter(ActiveFilterSet):
    payroll_month = django_filters.ChoiceFilter(choices=MONTH_CHOICES)
    payroll_year = django_filters.NumberFilter()
    status = django_filters.ChoiceFilter(choices=PayrollProcessing.STATUS_CHOICES)

    class Meta:
        model = PayrollProcessing
        fields = ['payroll_month', 'payroll_year', 'status', 'is_active']


class SalarySlipFilter(django_filters.FilterSet):
    employee = django_filters.UUIDFilter()
    payroll = django_filters.UUIDFilter()
    month = django_filters.ChoiceFilter(field_name='payroll_month', choices=MONTH_CHOICES)
    year = django_filters.NumberFilter(field_name='payroll_year')
    department = django_filters.UUIDFilter(field_name='employee__department')
    status = django_filters.ChoiceFilter(choices=PayrollProcessing.STATUS_CHOICES)

    class Meta:
        model = SalarySlip
        fields = ['employee', 'payroll', 'status']
