"""
Leave Views
"""

import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum
from rest_framework.decorators import action

from apps.core.permissions import permission_code
from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet, active_stats
from apps.employees.utils import get_request_employee
from .filters import LeaveApplicationFilter, LeaveBalanceFilter, LeaveTypeFilter
from .models import LeaveApplication, LeaveBalance, LeaveType
from .serializers import (
    LeaveApplicationSerializer,
    LeaveBalanceSerializer,
    LeaveRejectSerializer,
    LeaveTypeSerializer,
)
from .services import LeaveApplicationService, LeaveBalanceService

logger = logging.getLogger(__name__)


class LeaveTypeViewSet(HRMSModelViewSet):
    queryset = LeaveType.objects.all()
    serializer_class = LeaveTypeSerializer
    filterset_class = LeaveTypeFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['name', 'code', 'max_days_per_year', 'created_at']
    ordering = ['name']
    permission_module = 'leave_type'
    resource_name = 'Leave type'

    def get_stats(self, queryset):
        return active_stats(queryset, 'leave_types')


class LeaveBalanceViewSet(HRMSModelViewSet):
    queryset = LeaveBalance.objects.select_related('employee', 'leave_type')
    serializer_class = LeaveBalanceSerializer
    filterset_class = LeaveBalanceFilter
    search_fields = ['employee__first_name', 'employee__last_name', 'employee__employee_id', 'leave_type__name']
    ordering_fields = ['year', 'allocated_days', 'used_days', 'balance_days', 'created_at']
    ordering = ['-year', 'leave_type__name']
    permission_module = 'leave_balance'
    resource_name = 'Leave balance'

    def get_stats(self, queryset):
        totals = queryset.aggregate(
            total_balances=Count('id'),
            total_allocated=Sum('allocated_days'),
            total_used=Sum('used_days'),
            total_remaining=Sum('balance_days'),
        )
        for key in ('total_allocated', 'total_used', 'total_remaining'):
            totals[key] = totals[key] or Decimal('0')
        return totals

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = LeaveBalanceService.allocate(
            data['employee'],
            data['leave_type'],
            data['year'],
            allocated_days=data.get('allocated_days'),
            user=self.request.user,
        )

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        allocated_days = data.pop('allocated_days', serializer.instance.allocated_days)
        serializer.instance = LeaveBalanceService.update_allocation(
            serializer.instance, allocated_days, user=self.request.user, **data
        )


class LeaveApplicationViewSet(HRMSModelViewSet):
    """
    Leave applications.

    - POST /api/v1/leave/applications/{id}/approve/
    - POST /api/v1/leave/applications/{id}/reject/   {"reason": "..."}
    - POST /api/v1/leave/applications/{id}/cancel/
    """

    queryset = LeaveApplication.objects.select_related('employee', 'leave_type', 'approved_by')
    serializer_class = LeaveApplicationSerializer
    filterset_class = LeaveApplicationFilter
    search_fields = ['reason', 'employee__first_name', 'employee__last_name', 'employee__employee_id']
    ordering_fields = ['start_date', 'end_date', 'total_days', 'approval_status', 'created_at']
    permission_module = 'leave_application'
    # Applicants withdraw their own leave; the service checks ownership
    action_permissions = {'cancel': 'read'}
    resource_name = 'Leave application'

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_applications=Count('id'),
            pending_applications=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_PENDING)),
            approved_applications=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_APPROVED)),
            rejected_applications=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_REJECTED)),
            cancelled_applications=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_CANCELLED)),
        )

    def perform_create(self, serializer):
        data = serializer.validated_data
        employee = data.get('employee') or get_request_employee(self.request)
        serializer.instance = LeaveApplicationService.create(
            employee,
            data['leave_type'],
            data['start_date'],
            data['end_date'],
            data['reason'],
            user=self.request.user,
        )

    def perform_update(self, serializer):
        serializer.instance = LeaveApplicationService.update(
            serializer.instance, serializer.validated_data, user=self.request.user
        )

    def perform_destroy(self, instance):
        LeaveApplicationService.delete(instance)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        application = LeaveApplicationService.approve(self.get_object(), request.user)
        return success_response(
            data=self.get_serializer(application).data,
            message='Leave application approved successfully',
        )

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        serializer = LeaveRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        application = LeaveApplicationService.reject(
            self.get_object(), request.user, reason=serializer.validated_data['reason']
        )
        return success_response(
            data=self.get_serializer(application).data,
            message='Leave application rejected successfully',
        )

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        can_manage = request.user.has_permission_for(permission_code(self.permission_module, 'update'))
        application = LeaveApplicationService.cancel(self.get_object(), request.user, can_manage=can_manage)
        return success_response(
            data=self.get_serializer(application).data,
            message='Leave application cancelled successfully',
        )
