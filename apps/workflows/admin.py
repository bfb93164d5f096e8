"""Workflows Admin"""
from django.contrib import admin

from .models import ApprovalWorkflow, WorkflowStep


class WorkflowStepInline(admin.TabularInline):
    model = WorkflowStep
    extra = 0
    fields = ['step_number', 'step_name', 'assigned_role', 'assigned_user', 'status', 'processed_by', 'processed_at']
    raw_id_fields = ['assigned_user', 'processed_by']


@admin.register(ApprovalWorkflow)
class ApprovalWorkflowAdmin(admin.ModelAdmin):
    list_display = ['workflow_type', 'reference_number', 'requested_by', 'priority', 'status', 'current_step', 'total_steps']
    list_filter = ['workflow_type', 'status', 'priority']
    search_fields = ['reference_number', 'reference_type', 'requested_by__email']
    raw_id_fields = ['requested_by', 'final_approved_by', 'rejected_by']
    inlines = [WorkflowStepInline]
