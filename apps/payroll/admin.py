"""
Payroll Admin
"""

from django.contrib import admin
from .models import PayrollProcessing, SalarySlip, SalaryStructure, SalaryStructureItem


class SalaryStructureItemInline(admin.TabularInline):
    model = SalaryStructureItem
    extra = 1
    fields = ['structure_type', 'category', 'value', 'is_default']


@admin.register(SalaryStructure)
class SalaryStructureAdmin(admin.ModelAdmin):
    list_display = ['employee', 'start_date', 'end_date', 'status', 'is_active']
    list_filter = ['status', 'is_active']
    search_fields = ['employee__employee_id', 'employee__first_name', 'employee__last_name']
    raw_id_fields = ['employee']
    inlines = [SalaryStructureItemInline]


class SalarySlipInline(admin.TabularInline):
    model = SalarySlip
    extra = 0
    fields = ['employee', 'total_earnings', 'total_deductions', 'leave_deductions', 'net_salary', 'status']
    readonly_fields = fields
    can_delete = False


@admin.register(PayrollProcessing)
class PayrollProcessingAdmin(admin.ModelAdmin):
    list_display = ['payroll_month', 'payroll_year', 'status', 'total_employees', 'total_net_salary', 'processing_date']
    list_filter = ['status', 'payroll_year']
    readonly_fields = [
        'total_employees', 'total_earnings', 'total_deductions',
        'total_leave_deductions', 'total_net_salary', 'processed_by', 'processing_date',
    ]
    inlines = [SalarySlipInline]


@admin.register(SalarySlip)
class SalarySlipAdmin(admin.ModelAdmin):
    list_display = ['employee', 'payroll_month', 'payroll_year', 'net_salary', 'status', 'paid_date']
    list_filter = ['status', 'payroll_year', 'payroll_month']
    search_fields = ['employee__employee_id', 'employee__first_name', 'employee__last_name']
    raw_id_fields = ['employee', 'payroll']
