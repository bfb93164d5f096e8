"""
Attendance Admin
"""

from django.contrib import admin
from .models import AttendanceHistory, AttendanceRecord, Shift


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'start_time', 'end_time', 'break_duration', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'code']


class AttendanceHistoryInline(admin.TabularInline):
    model = AttendanceHistory
    extra = 0
    fields = ['action_type', 'action_time', 'address', 'remarks']
    readonly_fields = fields


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ['employee', 'attendance_date', 'punch_in_time', 'punch_out_time', 'total_hours', 'status', 'punch_status']
    list_filter = ['status', 'punch_status', 'work_type', 'attendance_date']
    search_fields = ['employee__employee_id', 'employee__first_name', 'employee__last_name']
    raw_id_fields = ['employee']
    date_hierarchy = 'attendance_date'
    inlines = [AttendanceHistoryInline]
