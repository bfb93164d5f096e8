"""
Attendance Views
"""

import logging

from django.db.models import Count, Q
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet, active_stats
from apps.employees.utils import get_request_employee
from .filters import AttendanceRecordFilter, ShiftFilter
from .models import AttendanceRecord, Shift
from .serializers import (
    AttendanceHistorySerializer,
    AttendanceRecordDetailSerializer,
    AttendanceRecordSerializer,
    PunchSerializer,
    PunchStatusSerializer,
    ShiftSerializer,
)
from .services import AttendanceService

logger = logging.getLogger(__name__)


class ShiftViewSet(HRMSModelViewSet):
    queryset = Shift.objects.all()
    serializer_class = ShiftSerializer
    filterset_class = ShiftFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['name', 'code', 'start_time', 'created_at']
    ordering = ['name']
    permission_module = 'shift'
    resource_name = 'Shift'

    def get_stats(self, queryset):
        return active_stats(queryset, 'shifts')


class AttendanceViewSet(HRMSModelViewSet):
    """
    Attendance records (read-only).

    Records are written through the punch endpoint only.
    """

    queryset = AttendanceRecord.objects.select_related('employee')
    serializer_class = AttendanceRecordSerializer
    detail_serializer_class = AttendanceRecordDetailSerializer
    filterset_class = AttendanceRecordFilter
    search_fields = ['employee__first_name', 'employee__last_name', 'employee__employee_id', 'remarks']
    ordering_fields = ['attendance_date', 'punch_in_time', 'total_hours']
    ordering = ['-attendance_date', '-punch_in_time']
    http_method_names = ['get', 'head', 'options']
    permission_module = 'attendance'
    action_permissions = {'history': 'read'}
    resource_name = 'Attendance'

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_records=Count('id'),
            present=Count('id', filter=Q(status=AttendanceRecord.STATUS_PRESENT)),
            late=Count('id', filter=Q(status=AttendanceRecord.STATUS_LATE)),
            half_day=Count('id', filter=Q(status=AttendanceRecord.STATUS_HALF_DAY)),
            absent=Count('id', filter=Q(status=AttendanceRecord.STATUS_ABSENT)),
        )

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        attendance = self.get_object()
        serializer = AttendanceHistorySerializer(attendance.history.all(), many=True)
        return success_response(data=serializer.data)


class PunchView(APIView):
    """
    POST /api/v1/attendance/punch/

    ``action_type`` is ``punch_in`` or ``punch_out``; the punch is recorded
    for the employee linked to the authenticated user.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = PunchSerializer

    def post(self, request):
        serializer = PunchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data['ip_address'] = request.META.get('REMOTE_ADDR')
        data['user_agent'] = request.META.get('HTTP_USER_AGENT', '')[:500]

        employee = get_request_employee(request)
        if data['action_type'] == AttendanceRecord.PUNCH_IN:
            attendance = AttendanceService.punch_in(employee, data, user=request.user)
            return success_response(
                data=AttendanceRecordSerializer(attendance).data,
                message='Punched in successfully',
                http_status=status.HTTP_201_CREATED,
            )

        attendance = AttendanceService.punch_out(employee, data, user=request.user)
        return success_response(
            data=AttendanceRecordSerializer(attendance).data,
            message='Punched out successfully',
        )


class PunchStatusView(APIView):
    """GET /api/v1/attendance/punch-status/"""

    permission_classes = [IsAuthenticated]
    serializer_class = PunchStatusSerializer

    def get(self, request):
        employee = get_request_employee(request)
        result = AttendanceService.punch_status(employee)
        return success_response(
            data=PunchStatusSerializer(result).data,
            message='Punch status retrieved successfully',
        )
