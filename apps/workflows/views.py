"""Workflow Views"""
import logging

from django.db.models import Count, Q, Prefetch
from rest_framework.decorators import action

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet
from .filters import ApprovalWorkflowFilter
from .models import ApprovalWorkflow, WorkflowStep
from .serializers import (
    ApprovalWorkflowListSerializer,
    ApprovalWorkflowSerializer,
    WorkflowDecisionSerializer,
)
from .services import WorkflowService

logger = logging.getLogger(__name__)


class ApprovalWorkflowViewSet(HRMSModelViewSet):
    """
    Approval workflows.

    - POST /api/v1/workflows/{id}/approve/  {"remarks": "..."}
    - POST /api/v1/workflows/{id}/reject/   {"reason": "..."}

    Step assignees may decide with read access only; everyone else needs
    ``approval_workflow_update``.
    """

    queryset = ApprovalWorkflow.objects.select_related(
        'requested_by', 'final_approved_by', 'rejected_by'
    ).prefetch_related(
        Prefetch('steps', queryset=WorkflowStep.objects.select_related('assigned_role', 'assigned_user', 'processed_by'))
    )
    serializer_class = ApprovalWorkflowSerializer
    list_serializer_class = ApprovalWorkflowListSerializer
    filterset_class = ApprovalWorkflowFilter
    search_fields = ['reference_number', 'reference_type', 'requested_by__email']
    ordering_fields = ['request_date', 'priority', 'status', 'created_at']
    ordering = ['-request_date']
    permission_module = 'approval_workflow'
    action_permissions = {'approve': 'read', 'reject': 'read'}
    resource_name = 'Workflow'

    def get_stats(self, queryset):
        return queryset.aggregate(
            total_workflows=Count('id'),
            pending_workflows=Count('id', filter=Q(status=ApprovalWorkflow.STATUS_PENDING)),
            approved_workflows=Count('id', filter=Q(status=ApprovalWorkflow.STATUS_APPROVED)),
            rejected_workflows=Count('id', filter=Q(status=ApprovalWorkflow.STATUS_REJECTED)),
        )

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        steps = data.pop('steps', [])
        serializer.instance = WorkflowService.open(
            workflow_type=data['workflow_type'],
            reference_type=data.get('reference_type', ''),
            reference_id=data.get('reference_id'),
            reference_number=data.get('reference_number', ''),
            requested_by=self.request.user,
            request_data=data.get('request_data'),
            steps=steps,
            priority=data.get('priority', 'medium'),
        )

    def perform_update(self, serializer):
        serializer.instance = WorkflowService.update(
            serializer.instance, serializer.validated_data, user=self.request.user
        )

    def _decided(self, workflow):
        workflow = self.get_queryset().get(pk=workflow.pk)
        return ApprovalWorkflowSerializer(workflow, context=self.get_serializer_context()).data

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        serializer = WorkflowDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        workflow = WorkflowService.approve(
            self.get_object(), request.user, remarks=serializer.validated_data['remarks']
        )
        message = 'Workflow approved successfully' if workflow.status == ApprovalWorkflow.STATUS_APPROVED \
            else 'Workflow step approved successfully'
        return success_response(data=self._decided(workflow), message=message)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        serializer = WorkflowDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reason = serializer.validated_data['reason'] or serializer.validated_data['remarks']
        workflow = WorkflowService.reject(self.get_object(), request.user, reason=reason)
        return success_response(data=self._decided(workflow), message='Workflow rejected successfully')
