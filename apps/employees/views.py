"""
Employee Views
"""

import logging

from django.db.models import Count, Q
from rest_framework.decorators import action

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet, active_stats
from .filters import DepartmentFilter, DesignationFilter, EmployeeFilter
from .models import Department, Designation, Employee
from .serializers import (
    DepartmentSerializer,
    DesignationSerializer,
    EmployeeListSerializer,
    EmployeeSerializer,
)

logger = logging.getLogger(__name__)


class EmployeeViewSet(HRMSModelViewSet):
    """
    Employee Management API

    - GET /api/v1/employees/: List employees (filtered, paginated, with stats)
    - POST /api/v1/employees/: Create employee
    - GET /api/v1/employees/{id}/: Retrieve employee details
    - PUT/PATCH /api/v1/employees/{id}/: Update employee
    - DELETE /api/v1/employees/{id}/: Delete employee
    - GET /api/v1/employees/{id}/team/: Direct reports
    """

    queryset = Employee.objects.select_related(
        'department', 'designation', 'reporting_manager', 'shift', 'user'
    )
    serializer_class = EmployeeSerializer
    list_serializer_class = EmployeeListSerializer
    filterset_class = EmployeeFilter
    search_fields = ['employee_id', 'first_name', 'last_name', 'email']
    ordering_fields = ['employee_id', 'first_name', 'date_of_joining', 'employment_status', 'created_at']
    ordering = ['employee_id']
    permission_module = 'employee'
    action_permissions = {'team': 'read'}
    resource_name = 'Employee'

    def get_stats(self, queryset):
        return active_stats(queryset, 'employees')

    @action(detail=True, methods=['get'])
    def team(self, request, pk=None):
        employee = self.get_object()
        serializer = EmployeeListSerializer(employee.get_team_members(), many=True)
        return success_response(data=serializer.data)


class DepartmentViewSet(HRMSModelViewSet):
    queryset = Department.objects.select_related('parent', 'manager')
    serializer_class = DepartmentSerializer
    filterset_class = DepartmentFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['name', 'code', 'created_at']
    ordering = ['name']
    permission_module = 'department'
    resource_name = 'Department'

    def get_stats(self, queryset):
        stats = active_stats(queryset, 'departments')
        stats['departments_with_employees'] = queryset.annotate(
            active_employees=Count('employees', filter=Q(employees__is_active=True))
        ).filter(active_employees__gt=0).count()
        return stats


class DesignationViewSet(HRMSModelViewSet):
    """ViewSet for designations"""

    queryset = Designation.objects.select_related('department')
    serializer_class = DesignationSerializer
    filterset_class = DesignationFilter
    search_fields = ['name', 'code']
    ordering_fields = ['name', 'level', 'created_at']
    ordering = ['level', 'name']
    permission_module = 'designation'
    resource_name = 'Designation'

    def get_stats(self, queryset):
        return active_stats(queryset, 'designations')
