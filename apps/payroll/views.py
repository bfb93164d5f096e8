"""
Payroll Views
"""

import logging

from django.db.models import Count, Q
from drf_spectacular.utils import extend_schema
from rest_framework import status

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet
from .filters import PayrollProcessingFilter, SalarySlipFilter, SalaryStructureFilter
from .models import PayrollProcessing, SalarySlip, SalaryStructure
from .serializers import (
    PayrollProcessingDetailSerializer,
    PayrollProcessingSerializer,
    PayrollProcessSerializer,
    PayrollUpdateSerializer,
    SalarySlipSerializer,
    SalaryStructureSerializer,
)
from .services import PayrollProcessingService, SalarySlipService, SalaryStructureService
from .tasks import process_payroll_task

logger = logging.getLogger(__name__)


class SalaryStructureViewSet(HRMSModelViewSet):
    queryset = SalaryStructure.objects.select_related('employee').prefetch_related('items')
    serializer_class = SalaryStructureSerializer
    filterset_class = SalaryStructureFilter
    search_fields = ['employee__first_name', 'employee__last_name', 'employee__email', 'employee__employee_id']
    ordering_fields = ['start_date', 'end_date', 'status', 'created_at']
    permission_module = 'salary_structure'
    resource_name = 'Salary structure'

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_structures=Count('id'),
            active_structures=Count('id', filter=Q(status=SalaryStructure.STATUS_ACTIVE)),
            inactive_structures=Count('id', filter=Q(status=SalaryStructure.STATUS_INACTIVE)),
        )

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        items = data.pop('items')
        serializer.instance = SalaryStructureService.create(
            data.pop('employee'),
            data.pop('start_date'),
            data.pop('end_date'),
            items,
            user=self.request.user,
            **data,
        )

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        items = data.pop('items', None)
        serializer.instance = SalaryStructureService.update(
            serializer.instance, data, items=items, user=self.request.user
        )


class PayrollProcessingViewSet(HRMSModelViewSet):
    """
    Payroll runs.

    - POST creates a run for (payroll_month, payroll_year) and computes every
      slip; ``async: true`` queues it instead (202).
    - PUT/PATCH change ``status`` and ``remarks`` only; Paid marks all slips paid.
    - DELETE is refused for Paid runs.
    """

    queryset = PayrollProcessing.objects.select_related('processed_by')
    serializer_class = PayrollProcessingSerializer
    detail_serializer_class = PayrollProcessingDetailSerializer
    filterset_class = PayrollProcessingFilter
    search_fields = ['remarks']
    ordering_fields = ['payroll_year', 'payroll_month', 'processing_date', 'total_net_salary']
    ordering = ['-payroll_year', '-payroll_month']
    permission_module = 'payroll_processing'
    resource_name = 'Payroll processing record'

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related('salary_slips__employee')
        return queryset

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_payrolls=Count('id'),
            total_processed=Count('id', filter=Q(status=PayrollProcessing.STATUS_PROCESSED)),
            total_paid=Count('id', filter=Q(status=PayrollProcessing.STATUS_PAID)),
            total_draft=Count('id', filter=Q(status=PayrollProcessing.STATUS_DRAFT)),
        )

    @extend_schema(request=PayrollProcessSerializer, responses=PayrollProcessingDetailSerializer)
    def create(self, request, *args, **kwargs):
        serializer = PayrollProcessSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data['async']:
            PayrollProcessingService.ensure_not_processed(data['payroll_month'], data['payroll_year'])
            result = process_payroll_task.delay(
                data['payroll_month'],
                data['payroll_year'],
                employee_ids=[str(pk) for pk in data['employee_ids']],
                process_all=data['process_all'],
                user_id=str(request.user.pk),
                remarks=data['remarks'],
            )
            logger.info("Payroll %s/%s queued task=%s", data['payroll_month'], data['payroll_year'], result.id)
            return success_response(
                data={'task_id': result.id},
                message='Payroll processing queued',
                http_status=status.HTTP_202_ACCEPTED,
            )

        payroll = PayrollProcessingService.process(
            data['payroll_month'],
            data['payroll_year'],
            employee_ids=data['employee_ids'],
            process_all=data['process_all'],
            user=request.user,
            remarks=data['remarks'],
        )
        payroll = self.get_queryset().prefetch_related('salary_slips__employee').get(pk=payroll.pk)
        return success_response(
            data=PayrollProcessingDetailSerializer(payroll).data,
            message='Payroll processed successfully',
            http_status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=PayrollUpdateSerializer, responses=PayrollProcessingSerializer)
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = PayrollUpdateSerializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        payroll = PayrollProcessingService.update(
            instance,
            status=serializer.validated_data.get('status'),
            remarks=serializer.validated_data.get('remarks'),
            user=request.user,
        )
        return success_response(
            data=PayrollProcessingSerializer(payroll).data,
            message='Payroll processing record updated successfully',
        )

    def perform_destroy(self, instance):
        PayrollProcessingService.delete(instance)


class SalarySlipViewSet(HRMSModelViewSet):
    """Salary slips are produced by payroll runs; only status, paid_date and remarks change."""

    queryset = SalarySlip.objects.select_related('employee', 'payroll')
    serializer_class = SalarySlipSerializer
    filterset_class = SalarySlipFilter
    search_fields = ['employee__first_name', 'employee__last_name', 'employee__email', 'employee__employee_id']
    ordering_fields = ['payroll_year', 'payroll_month', 'net_salary', 'status', 'created_at']
    ordering = ['-payroll_year', '-payroll_month']
    http_method_names = ['get', 'put', 'patch', 'head', 'options']
    permission_module = 'salary_slip'
    resource_name = 'Salary slip'

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_slips=Count('id'),
            total_paid=Count('id', filter=Q(status=PayrollProcessing.STATUS_PAID)),
            total_processed=Count('id', filter=Q(status=PayrollProcessing.STATUS_PROCESSED)),
            total_draft=Count('id', filter=Q(status=PayrollProcessing.STATUS_DRAFT)),
        )

    def perform_update(self, serializer):
        serializer.instance = SalarySlipService.update(
            serializer.instance, serializer.validated_data, user=self.request.user
        )
