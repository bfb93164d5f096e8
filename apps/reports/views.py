"""
Reports ViewSet - Read-only cross-module reports

    GET /api/v1/reports/attendance/
    GET /api/v1/reports/leave/
    GET /api/v1/reports/payroll/
    GET /api/v1/reports/hiring/
    GET /api/v1/reports/employees/

Each report lists the filtered rows (paginated) and adds a ``summary`` block
computed over the whole filtered set.
"""

import logging

from django_filters.utils import translate_validation
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from apps.attendance.models import AttendanceRecord
from apps.attendance.serializers import AttendanceRecordSerializer
from apps.core.pagination import StandardResultsPagination
from apps.core.permissions import HasModulePermission
from apps.employees.models import Employee
from apps.employees.serializers import EmployeeListSerializer
from apps.leave.models import LeaveApplication
from apps.leave.serializers import LeaveApplicationSerializer
from apps.payroll.models import SalarySlip
from apps.payroll.serializers import SalarySlipSerializer
from apps.recruitment.models import Candidate
from apps.recruitment.serializers import CandidateSerializer
from .filters import (
    AttendanceReportFilter,
    EmployeeReportFilter,
    HiringReportFilter,
    LeaveReportFilter,
    PayrollReportFilter,
)
from .services import ReportService

logger = logging.getLogger(__name__)


class ReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, HasModulePermission]
    permission_module = 'report'
    pagination_class = StandardResultsPagination

    def _report(self, request, queryset, filterset_class, serializer_class, summarize, message):
        filterset = filterset_class(request.query_params, queryset=queryset, request=request)
        if not filterset.is_valid():
            raise translate_validation(filterset.errors)
        queryset = filterset.qs

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        response = paginator.get_paginated_response(serializer_class(page, many=True).data)
        response.data['message'] = message
        response.data['summary'] = summarize(queryset)
        logger.debug("Report %s generated rows=%s", self.action, response.data['meta']['total'])
        return response

    @extend_schema(responses=AttendanceRecordSerializer(many=True))
    @action(detail=False, methods=['get'])
    def attendance(self, request):
        return self._report(
            request,
            AttendanceRecord.objects.select_related('employee').order_by('-attendance_date'),
            AttendanceReportFilter,
            AttendanceRecordSerializer,
            ReportService.attendance_summary,
            'Attendance report generated successfully',
        )

    @extend_schema(responses=LeaveApplicationSerializer(many=True))
    @action(detail=False, methods=['get'])
    def leave(self, request):
        return self._report(
            request,
            LeaveApplication.objects.select_related('employee', 'leave_type', 'approved_by').order_by('-start_date'),
            LeaveReportFilter,
            LeaveApplicationSerializer,
            ReportService.leave_summary,
            'Leave report generated successfully',
        )

    @extend_schema(responses=SalarySlipSerializer(many=True))
    @action(detail=False, methods=['get'])
    def payroll(self, request):
        return self._report(
            request,
            SalarySlip.objects.select_related('employee', 'payroll').order_by(
                '-payroll_year', '-payroll_month', 'employee__employee_id'
            ),
            PayrollReportFilter,
            SalarySlipSerializer,
            ReportService.payroll_summary,
            'Payroll report generated successfully',
        )

    @extend_schema(responses=CandidateSerializer(many=True))
    @action(detail=False, methods=['get'])
    def hiring(self, request):
        return self._report(
            request,
            Candidate.objects.select_related('job_posting', 'current_hiring_stage').order_by('-application_date'),
            HiringReportFilter,
            CandidateSerializer,
            ReportService.hiring_summary,
            'Hiring report generated successfully',
        )

    @extend_schema(responses=EmployeeListSerializer(many=True))
    @action(detail=False, methods=['get'])
    def employees(self, request):
        return self._report(
            request,
            Employee.objects.select_related('department', 'designation').order_by('employee_id'),
            EmployeeReportFilter,
            EmployeeListSerializer,
            ReportService.employee_summary,
            'Employee report generated successfully',
        )
