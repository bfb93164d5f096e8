"""Approval workflow lifecycle"""

import logging
from typing import Callable, Dict, Iterable, Optional

from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import (
    InvalidStateException,
    PermissionDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from apps.core.permissions import permission_code

logger = logging.getLogger(__name__)

WORKFLOW_PERMISSION_MODULE = 'approval_workflow'


def _resolve_leave_application(workflow, approved: bool, user, reason: str = ''):
    from apps.leave.models import LeaveApplication
    from apps.leave.services import LeaveApplicationService

    application = LeaveApplication.objects.filter(pk=workflow.reference_id).first()
    if application is None:
        raise ResourceNotFoundException('Leave application', workflow.reference_id)
    if approved:
        LeaveApplicationService.approve(application, user, close_workflow=False)
    else:
        LeaveApplicationService.reject(application, user, reason=reason, close_workflow=False)


# workflow_type -> callable(workflow, approved, user, reason) run on final decision
WORKFLOW_HANDLERS: Dict[str, Callable] = {
    'LEAVE_APPROVAL': _resolve_leave_application,
}


class WorkflowService:
    """
    Opens, advances and closes approval workflows.

    Steps are processed in ``step_number`` order; the workflow is finalised
    when its last step is approved or any step is rejected.
    """

    @staticmethod
    def can_process(step, user) -> bool:
        if user.is_superuser:
            return True
        if step is not None and step.is_assigned_to(user):
            return True
        return user.has_permission_for(permission_code(WORKFLOW_PERMISSION_MODULE, 'update'))

    @staticmethod
    def _lock(workflow):
        from apps.workflows.models import ApprovalWorkflow

        return ApprovalWorkflow.objects.select_for_update().get(pk=workflow.pk)

    @classmethod
    @transaction.atomic
    def open(cls, workflow_type: str, reference_type: str = '', reference_id=None,
             reference_number: str = '', requested_by=None, request_data: Optional[Dict] = None,
             steps: Optional[Iterable[Dict]] = None, priority: str = 'medium'):
        """
        Create a pending workflow.

        ``steps`` is a list of ``{'step_name', 'assigned_role'?, 'assigned_user'?}``;
        an empty list gives a single unassigned approval step.
        """
        from apps.workflows.models import ApprovalWorkflow, WorkflowStep

        steps = list(steps or []) or [{'step_name': 'Approval'}]
        workflow = ApprovalWorkflow.objects.create(
            workflow_type=workflow_type,
            reference_type=reference_type,
            reference_id=reference_id,
            reference_number=reference_number,
            requested_by=requested_by,
            request_data=request_data or {},
            priority=priority,
            current_step=1,
            total_steps=len(steps),
            created_by=requested_by,
            updated_by=requested_by,
        )
        WorkflowStep.objects.bulk_create([
            WorkflowStep(
                workflow=workflow,
                step_number=number,
                step_name=step['step_name'],
                assigned_role=step.get('assigned_role'),
                assigned_user=step.get('assigned_user'),
                created_by=requested_by,
                updated_by=requested_by,
            )
            for number, step in enumerate(steps, start=1)
        ])
        logger.info(
            "Workflow opened id=%s type=%s reference=%s:%s steps=%s",
            workflow.pk, workflow_type, reference_type, reference_id, len(steps),
        )
        return workflow

    @classmethod
    @transaction.atomic
    def approve(cls, workflow, user, remarks: str = ''):
        from apps.workflows.models import ApprovalWorkflow, WorkflowStep

        workflow = cls._lock(workflow)
        if not workflow.is_pending:
            raise InvalidStateException('Workflow is already processed')

        step = workflow.get_current_step()
        if not cls.can_process(step, user):
            raise PermissionDeniedException('You are not assigned to the current workflow step')

        now = timezone.now()
        if step is not None:
            step.status = WorkflowStep.STATUS_APPROVED
            step.processed_by = user
            step.processed_at = now
            step.remarks = remarks
            step.updated_by = user
            step.save()

        if workflow.current_step < workflow.total_steps:
            workflow.current_step += 1
            workflow.updated_by = user
            workflow.save(update_fields=['current_step', 'updated_by', 'updated_at'])
            logger.info("Workflow advanced id=%s step=%s/%s", workflow.pk, workflow.current_step, workflow.total_steps)
            return workflow

        workflow.status = ApprovalWorkflow.STATUS_APPROVED
        workflow.final_approved_by = user
        workflow.final_approved_at = now
        workflow.updated_by = user
        workflow.save()

        handler = WORKFLOW_HANDLERS.get(workflow.workflow_type)
        if handler is not None and workflow.reference_id:
            handler(workflow, True, user, remarks)

        logger.info("Workflow approved id=%s type=%s by=%s", workflow.pk, workflow.workflow_type, user)
        return workflow

    @classmethod
    @transaction.atomic
    def reject(cls, workflow, user, reason: str = ''):
        from apps.workflows.models import ApprovalWorkflow

        workflow = cls._lock(workflow)
        if not workflow.is_pending:
            raise InvalidStateException('Workflow is already processed')

        step = workflow.get_current_step()
        if not cls.can_process(step, user):
            raise PermissionDeniedException('You are not assigned to the current workflow step')

        cls._close(workflow, ApprovalWorkflow.STATUS_REJECTED, user, reason)

        handler = WORKFLOW_HANDLERS.get(workflow.workflow_type)
        if handler is not None and workflow.reference_id:
            handler(workflow, False, user, reason)

        logger.info("Workflow rejected id=%s type=%s by=%s", workflow.pk, workflow.workflow_type, user)
        return workflow

    @classmethod
    def _close(cls, workflow, status: str, user, reason: str = ''):
        """Finalise without running the reference handler."""
        from apps.workflows.models import ApprovalWorkflow, WorkflowStep

        now = timezone.now()
        step_status = WorkflowStep.STATUS_APPROVED if status == ApprovalWorkflow.STATUS_APPROVED \
            else WorkflowStep.STATUS_REJECTED

        workflow.steps.filter(step_number=workflow.current_step, status=WorkflowStep.STATUS_PENDING).update(
            status=step_status, processed_by=user, processed_at=now, remarks=reason, updated_at=now,
        )
        workflow.steps.filter(step_number__gt=workflow.current_step, status=WorkflowStep.STATUS_PENDING).update(
            status=WorkflowStep.STATUS_SKIPPED, updated_at=now,
        )

        workflow.status = status
        if status == ApprovalWorkflow.STATUS_APPROVED:
            workflow.final_approved_by = user
            workflow.final_approved_at = now
        else:
            workflow.rejected_by = user
            workflow.rejected_at = now
            workflow.rejection_reason = reason or ''
        workflow.updated_by = user
        workflow.save()
        return workflow

    @classmethod
    @transaction.atomic
    def close_for_reference(cls, reference_type: str, reference_id, approved: bool, user, reason: str = ''):
        """Close pending workflows of a record decided outside the workflow."""
        from apps.workflows.models import ApprovalWorkflow

        status = ApprovalWorkflow.STATUS_APPROVED if approved else ApprovalWorkflow.STATUS_REJECTED
        pending = ApprovalWorkflow.objects.select_for_update().filter(
            reference_type=reference_type,
            reference_id=reference_id,
            status=ApprovalWorkflow.STATUS_PENDING,
        )
        closed = 0
        for workflow in pending:
            cls._close(workflow, status, user, reason)
            closed += 1
        return closed

    @classmethod
    @transaction.atomic
    def discard_for_reference(cls, reference_type: str, reference_id):
        from apps.workflows.models import ApprovalWorkflow

        deleted, _ = ApprovalWorkflow.objects.filter(
            reference_type=reference_type,
            reference_id=reference_id,
            status=ApprovalWorkflow.STATUS_PENDING,
        ).delete()
        return deleted

    @classmethod
    @transaction.atomic
    def update(cls, workflow, data: Dict, user=None):
        workflow = cls._lock(workflow)
        if not workflow.is_pending:
            raise InvalidStateException('Workflow is already processed')
        if 'steps' in data:
            raise ValidationException('Workflow steps cannot be changed after creation', field='steps')
        for field, value in data.items():
            setattr(workflow, field, value)
        workflow.updated_by = user
        workflow.save()
        return workflow
