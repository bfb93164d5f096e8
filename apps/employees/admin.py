"""
Employee Admin
"""

from django.contrib import admin
from .models import Employee, Department, Designation


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'full_name', 'email', 'department', 'designation', 'employment_status', 'is_active']
    list_filter = ['employment_status', 'employment_type', 'department', 'is_active']
    search_fields = ['employee_id', 'first_name', 'last_name', 'email']
    raw_id_fields = ['user', 'reporting_manager', 'department', 'designation', 'shift']


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'parent', 'manager', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'code']
    raw_id_fields = ['parent', 'manager']


@admin.register(Designation)
class DesignationAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'department', 'level', 'is_active']
    list_filter = ['is_active', 'department']
    search_fields = ['name', 'code']
