"""Workflow Models - Multi-step approval envelopes"""
from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import HRMSModel


class ApprovalWorkflow(HRMSModel):
    """
    A sign-off process for some other record.

    The record is identified by ``reference_type`` / ``reference_id``; final
    approval or rejection of known workflow types is pushed back to it.
    """

    TYPE_LEAVE_APPROVAL = 'LEAVE_APPROVAL'
    TYPE_PAYROLL_APPROVAL = 'PAYROLL_APPROVAL'
    TYPE_HIRING_APPROVAL = 'HIRING_APPROVAL'
    TYPE_GENERAL = 'GENERAL'

    WORKFLOW_TYPE_CHOICES = [
        (TYPE_LEAVE_APPROVAL, 'Leave Approval'),
        (TYPE_PAYROLL_APPROVAL, 'Payroll Approval'),
        (TYPE_HIRING_APPROVAL, 'Hiring Approval'),
        (TYPE_GENERAL, 'General'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    workflow_type = models.CharField(max_length=30, choices=WORKFLOW_TYPE_CHOICES, db_index=True)
    reference_type = models.CharField(max_length=50, blank=True)
    reference_id = models.UUIDField(null=True, blank=True)
    reference_number = models.CharField(max_length=100, blank=True)

    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='requested_workflows'
    )
    request_date = models.DateTimeField(default=timezone.now)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)

    current_step = models.PositiveSmallIntegerField(default=1)
    total_steps = models.PositiveSmallIntegerField(default=1)
    request_data = models.JSONField(default=dict, blank=True)

    final_approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='final_approved_workflows'
    )
    final_approved_at = models.DateTimeField(null=True, blank=True)
    rejected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rejected_workflows'
    )
    rejected_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)

    class Meta:
        db_table = 'approval_workflows'
        ordering = ['-request_date']
        indexes = [
            models.Index(fields=['reference_type', 'reference_id'], name='wf_reference_idx'),
        ]

    def __str__(self):
        return f"{self.get_workflow_type_display()} {self.reference_number or self.pk} ({self.status})"

    @property
    def is_pending(self):
        return self.status == self.STATUS_PENDING

    def get_current_step(self):
        return self.steps.filter(step_number=self.current_step).first()


class WorkflowStep(HRMSModel):
    """One sign-off within a workflow"""

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_SKIPPED = 'skipped'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_SKIPPED, 'Skipped'),
    ]

    workflow = models.ForeignKey(ApprovalWorkflow, on_delete=models.CASCADE, related_name='steps')
    step_number = models.PositiveSmallIntegerField()
    step_name = models.CharField(max_length=100)

    assigned_role = models.ForeignKey(
        'authentication.Role',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='workflow_steps'
    )
    assigned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_workflow_steps'
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_workflow_steps'
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    remarks = models.TextField(blank=True)

    class Meta:
        db_table = 'workflow_steps'
        ordering = ['workflow', 'step_number']
        unique_together = ['workflow', 'step_number']

    def __str__(self):
        return f"Step {self.step_number}: {self.step_name} ({self.status})"

    def is_assigned_to(self, user):
        if self.assigned_user_id:
            return self.assigned_user_id == user.pk
        if self.assigned_role_id:
            return user.role_id == self.assigned_role_id
        return False
