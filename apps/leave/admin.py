"""
Leave Admin
"""

from django.contrib import admin
from .models import LeaveApplication, LeaveBalance, LeaveType


@admin.register(LeaveType)
class LeaveTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'max_days_per_year', 'is_paid', 'requires_approval', 'is_active']
    list_filter = ['is_paid', 'requires_approval', 'is_active']
    search_fields = ['name', 'code']


@admin.register(LeaveBalance)
class LeaveBalanceAdmin(admin.ModelAdmin):
    list_display = ['employee', 'leave_type', 'year', 'allocated_days', 'used_days', 'balance_days']
    list_filter = ['year', 'leave_type']
    search_fields = ['employee__employee_id', 'employee__first_name', 'employee__last_name']
    raw_id_fields = ['employee']
    readonly_fields = ['used_days', 'balance_days']


@admin.register(LeaveApplication)
class LeaveApplicationAdmin(admin.ModelAdmin):
    list_display = ['employee', 'leave_type', 'start_date', 'end_date', 'total_days', 'approval_status']
    list_filter = ['approval_status', 'leave_type']
    search_fields = ['employee__employee_id', 'employee__first_name', 'reason']
    raw_id_fields = ['employee', 'approved_by']
    date_hierarchy = 'start_date'
    readonly_fields = ['total_days', 'approval_status', 'approved_by', 'approved_date', 'cancelled_date']
