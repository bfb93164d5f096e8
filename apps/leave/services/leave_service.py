"""
Leave Services - Balance management and application lifecycle
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import (
    InvalidStateException,
    PermissionDeniedException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

LEAVE_REFERENCE_TYPE = 'leave_application'


class LeaveBalanceService:
    """
    Keeps ``balance_days = allocated_days - used_days`` on every balance row.
    """

    @staticmethod
    def get_balance(employee, leave_type, year: int, lock: bool = False):
        from apps.leave.models import LeaveBalance

        queryset = LeaveBalance.objects.filter(employee=employee, leave_type=leave_type, year=year)
        if lock:
            queryset = queryset.select_for_update()
        return queryset.first()

    @classmethod
    def check_balance(cls, employee, leave_type, year: int, days: Decimal):
        """Return the balance row for the year, or raise when it cannot cover ``days``."""
        balance = cls.get_balance(employee, leave_type, year)
        if balance is None:
            raise ResourceNotFoundException(
                'Leave balance', message='No leave balance found for this leave type'
            )
        if balance.balance_days < days:
            raise ValidationException(
                f"Insufficient leave balance. Available: {balance.balance_days} days, "
                f"Requested: {days} days",
                field='total_days',
            )
        return balance

    @classmethod
    @transaction.atomic
    def allocate(cls, employee, leave_type, year: int, allocated_days: Optional[Decimal] = None, user=None):
        """Create a balance row with nothing used yet."""
        from apps.leave.models import LeaveBalance

        if allocated_days is None:
            allocated_days = leave_type.max_days_per_year
        return LeaveBalance.objects.create(
            employee=employee,
            leave_type=leave_type,
            year=year,
            allocated_days=allocated_days,
            used_days=Decimal('0'),
            balance_days=allocated_days,
            created_by=user,
            updated_by=user,
        )

    @classmethod
    @transaction.atomic
    def update_allocation(cls, balance, allocated_days: Decimal, user=None, **changes):
        from apps.leave.models import LeaveBalance

        balance = LeaveBalance.objects.select_for_update().get(pk=balance.pk)
        if allocated_days < balance.used_days:
            raise ValidationException(
                f"Allocated days cannot be less than used days ({balance.used_days})",
                field='allocated_days',
            )
        for field, value in changes.items():
            setattr(balance, field, value)
        balance.allocated_days = allocated_days
        balance.recalculate()
        balance.updated_by = user
        balance.save()
        return balance

    @classmethod
    @transaction.atomic
    def deduct(cls, employee, leave_type, year: int, days: Decimal):
        balance = cls.get_balance(employee, leave_type, year, lock=True)
        if balance is None:
            raise ResourceNotFoundException(
                'Leave balance', message='No leave balance found for this leave type'
            )
        if balance.balance_days < days:
            raise ValidationException(
                f"Insufficient leave balance. Available: {balance.balance_days} days, "
                f"Requested: {days} days"
            )
        balance.used_days += days
        balance.recalculate()
        balance.save(update_fields=['used_days', 'balance_days', 'updated_at'])
        return balance

    @classmethod
    @transaction.atomic
    def restore(cls, employee, leave_type, year: int, days: Decimal):
        balance = cls.get_balance(employee, leave_type, year, lock=True)
        if balance is None:
            raise ResourceNotFoundException(
                'Leave balance', message='No leave balance found for this leave type'
            )
        balance.used_days = max(Decimal('0'), balance.used_days - days)
        balance.recalculate()
        balance.save(update_fields=['used_days', 'balance_days', 'updated_at'])
        return balance


class LeaveApplicationService:
    """
    Leave application lifecycle.

    Pending -> Approved | Rejected | Cancelled, and Approved -> Cancelled.
    Balance mutations happen in the same transaction as the status change.
    """

    @staticmethod
    def _validate_range(start_date: date, end_date: date):
        if end_date < start_date:
            raise ValidationException('End date cannot be earlier than start date', field='end_date')

    @staticmethod
    def _check_overlap(employee, start_date: date, end_date: date, exclude_id=None):
        from apps.leave.models import LeaveApplication

        overlapping = LeaveApplication.objects.filter(
            employee=employee,
            approval_status__in=LeaveApplication.BLOCKING_STATUSES,
            start_date__lte=end_date,
            end_date__gte=start_date,
        )
        if exclude_id is not None:
            overlapping = overlapping.exclude(pk=exclude_id)
        if overlapping.exists():
            raise ValidationException(
                'Leave application overlaps with an existing pending or approved application',
                field='start_date',
            )

    @staticmethod
    def _lock(application):
        from apps.leave.models import LeaveApplication

        return (
            LeaveApplication.objects.select_for_update()
            .select_related('employee', 'leave_type')
            .get(pk=application.pk)
        )

    @staticmethod
    def _notify(application):
        from apps.leave.tasks import send_leave_status_email

        application_id = str(application.pk)
        status = application.approval_status
        transaction.on_commit(lambda: send_leave_status_email.delay(application_id, status))

    @classmethod
    def _open_workflow(cls, application, user):
        from apps.workflows.models import ApprovalWorkflow
        from apps.workflows.services import WorkflowService

        steps = []
        manager = application.employee.reporting_manager
        if manager is not None and manager.user_id:
            steps.append({'step_name': 'Reporting manager approval', 'assigned_user': manager.user})
        steps.append({'step_name': 'HR approval'})

        return WorkflowService.open(
            workflow_type=ApprovalWorkflow.TYPE_LEAVE_APPROVAL,
            reference_type=LEAVE_REFERENCE_TYPE,
            reference_id=application.pk,
            reference_number=f"LV-{application.start_date:%Y%m%d}-{application.employee.employee_id}",
            requested_by=user,
            request_data={
                'employee': str(application.employee_id),
                'leave_type': application.leave_type.code,
                'start_date': application.start_date.isoformat(),
                'end_date': application.end_date.isoformat(),
                'total_days': str(application.total_days),
                'reason': application.reason,
            },
            steps=steps,
        )

    @classmethod
    @transaction.atomic
    def create(cls, employee, leave_type, start_date: date, end_date: date, reason: str, user=None):
        from apps.leave.models import LeaveApplication

        cls._validate_range(start_date, end_date)
        total_days = LeaveApplication.count_days(start_date, end_date)
        cls._check_overlap(employee, start_date, end_date)
        LeaveBalanceService.check_balance(employee, leave_type, start_date.year, total_days)

        application = LeaveApplication.objects.create(
            employee=employee,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=total_days,
            reason=reason,
            created_by=user,
            updated_by=user,
        )
        if leave_type.requires_approval:
            cls._open_workflow(application, user)

        logger.info(
            "Leave application created employee=%s type=%s days=%s",
            employee.employee_id, leave_type.code, total_days,
        )
        return application

    @classmethod
    @transaction.atomic
    def update(cls, application, data: Dict, user=None):
        application = cls._lock(application)
        if not application.is_pending:
            raise InvalidStateException('Only pending leave applications can be updated')

        leave_type = data.get('leave_type', application.leave_type)
        start_date = data.get('start_date', application.start_date)
        end_date = data.get('end_date', application.end_date)

        cls._validate_range(start_date, end_date)
        total_days = application.count_days(start_date, end_date)
        cls._check_overlap(application.employee, start_date, end_date, exclude_id=application.pk)
        LeaveBalanceService.check_balance(application.employee, leave_type, start_date.year, total_days)

        application.leave_type = leave_type
        application.start_date = start_date
        application.end_date = end_date
        application.total_days = total_days
        application.reason = data.get('reason', application.reason)
        application.updated_by = user
        application.save()

        # approvers restart on the edited figures
        from apps.workflows.services import WorkflowService
        WorkflowService.discard_for_reference(LEAVE_REFERENCE_TYPE, application.pk)
        if leave_type.requires_approval:
            cls._open_workflow(application, user)
        return application

    @classmethod
    @transaction.atomic
    def approve(cls, application, user, close_workflow: bool = True):
        """
        Approve a pending application and consume its days.

        A missing balance row raises before anything is saved, so the
        application stays pending.
        """
        from apps.leave.models import LeaveApplication

        application = cls._lock(application)
        if not application.is_pending:
            raise InvalidStateException('Leave application is already processed')

        LeaveBalanceService.deduct(
            application.employee,
            application.leave_type,
            application.start_date.year,
            application.total_days,
        )

        application.approval_status = LeaveApplication.STATUS_APPROVED
        application.approved_by = user
        application.approved_date = timezone.now()
        application.rejection_reason = ''
        application.updated_by = user
        application.save()

        if close_workflow:
            from apps.workflows.services import WorkflowService
            WorkflowService.close_for_reference(LEAVE_REFERENCE_TYPE, application.pk, approved=True, user=user)

        cls._notify(application)
        logger.info(
            "Leave approved id=%s employee=%s days=%s by=%s",
            application.pk, application.employee.employee_id, application.total_days, user,
        )
        return application

    @classmethod
    @transaction.atomic
    def reject(cls, application, user, reason: str = '', close_workflow: bool = True):
        from apps.leave.models import LeaveApplication

        application = cls._lock(application)
        if not application.is_pending:
            raise InvalidStateException('Leave application is already processed')

        application.approval_status = LeaveApplication.STATUS_REJECTED
        application.approved_by = user
        application.approved_date = timezone.now()
        application.rejection_reason = reason or ''
        application.updated_by = user
        application.save()

        if close_workflow:
            from apps.workflows.services import WorkflowService
            WorkflowService.close_for_reference(
                LEAVE_REFERENCE_TYPE, application.pk, approved=False, user=user, reason=reason
            )

        cls._notify(application)
        logger.info("Leave rejected id=%s employee=%s by=%s", application.pk, application.employee.employee_id, user)
        return application

    @classmethod
    @transaction.atomic
    def cancel(cls, application, user, can_manage: bool = False):
        """
        Cancel an application.

        Applicants may withdraw their own pending applications; cancelling an
        approved application needs ``can_manage`` and gives the days back.
        """
        from apps.leave.models import LeaveApplication
        from apps.workflows.services import WorkflowService

        application = cls._lock(application)
        is_owner = application.employee.user_id is not None and application.employee.user_id == user.pk

        if application.approval_status == LeaveApplication.STATUS_PENDING:
            if not (is_owner or can_manage):
                raise PermissionDeniedException('Only the applicant can cancel this leave application')
            WorkflowService.close_for_reference(
                LEAVE_REFERENCE_TYPE, application.pk, approved=False, user=user,
                reason='Leave application cancelled',
            )
        elif application.approval_status == LeaveApplication.STATUS_APPROVED:
            if not can_manage:
                raise PermissionDeniedException('You do not have permission to cancel an approved leave application')
            LeaveBalanceService.restore(
                application.employee,
                application.leave_type,
                application.start_date.year,
                application.total_days,
            )
        else:
            raise InvalidStateException('Leave application is already processed')

        application.approval_status = LeaveApplication.STATUS_CANCELLED
        application.cancelled_date = timezone.now()
        application.updated_by = user
        application.save()

        cls._notify(application)
        logger.info("Leave cancelled id=%s employee=%s by=%s", application.pk, application.employee.employee_id, user)
        return application

    @classmethod
    @transaction.atomic
    def delete(cls, application):
        from apps.leave.models import LeaveApplication
        from apps.workflows.services import WorkflowService

        if application.approval_status == LeaveApplication.STATUS_APPROVED:
            raise InvalidStateException('Cannot delete an approved leave application')
        WorkflowService.discard_for_reference(LEAVE_REFERENCE_TYPE, application.pk)
        application.delete()
