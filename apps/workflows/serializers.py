"""Workflow Serializers"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.authentication.models import Role
from apps.core.serializers import UserSummarySerializer
from .models import ApprovalWorkflow, WorkflowStep

User = get_user_model()


class WorkflowStepSerializer(serializers.ModelSerializer):
    assigned_role_name = serializers.CharField(source='assigned_role.name', read_only=True, default=None)
    assigned_user_detail = UserSummarySerializer(source='assigned_user', read_only=True)
    processed_by_detail = UserSummarySerializer(source='processed_by', read_only=True)

    class Meta:
        model = WorkflowStep
        fields = [
            'id', 'step_number', 'step_name', 'assigned_role', 'assigned_role_name',
            'assigned_user', 'assigned_user_detail', 'status',
            'processed_by', 'processed_by_detail', 'processed_at', 'remarks',
        ]
        read_only_fields = fields


class WorkflowStepInputSerializer(serializers.Serializer):
    step_name = serializers.CharField(max_length=100)
    assigned_role = serializers.PrimaryKeyRelatedField(queryset=Role.objects.all(), required=False, allow_null=True)
    assigned_user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)


class ApprovalWorkflowListSerializer(serializers.ModelSerializer):
    requested_by_detail = UserSummarySerializer(source='requested_by', read_only=True)

    class Meta:
        model = ApprovalWorkflow
        fields = [
            'id', 'workflow_type', 'reference_type', 'reference_id', 'reference_number',
            'requested_by', 'requested_by_detail', 'request_date', 'priority', 'status',
            'current_step', 'total_steps', 'is_active', 'created_at',
        ]


class ApprovalWorkflowSerializer(serializers.ModelSerializer):
    """
    Approval workflow with its steps.

    ``steps`` is write-once: it is accepted on create and returned read-only
    afterwards.
    """

    requested_by_detail = UserSummarySerializer(source='requested_by', read_only=True)
    final_approved_by_detail = UserSummarySerializer(source='final_approved_by', read_only=True)
    rejected_by_detail = UserSummarySerializer(source='rejected_by', read_only=True)
    steps = WorkflowStepInputSerializer(many=True, required=False, write_only=True)
    step_details = WorkflowStepSerializer(source='steps', many=True, read_only=True)

    class Meta:
        model = ApprovalWorkflow
        fields = [
            'id', 'workflow_type', 'reference_type', 'reference_id', 'reference_number',
            'requested_by', 'requested_by_detail', 'request_date', 'priority', 'status',
            'current_step', 'total_steps', 'request_data', 'steps', 'step_details',
            'final_approved_by', 'final_approved_by_detail', 'final_approved_at',
            'rejected_by', 'rejected_by_detail', 'rejected_at', 'rejection_reason',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'requested_by', 'request_date', 'status', 'current_step', 'total_steps',
            'final_approved_by', 'final_approved_at', 'rejected_by', 'rejected_at',
            'rejection_reason', 'created_at', 'updated_at',
        ]

    def validate_request_data(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Request data must be an object')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if attrs.get('reference_id') and not attrs.get('reference_type', getattr(self.instance, 'reference_type', '')):
            raise serializers.ValidationError({'reference_type': 'Reference type is required with a reference id'})
        return attrs


class WorkflowDecisionSerializer(serializers.Serializer):
    remarks = serializers.CharField(required=False, allow_blank=True, default='')
    reason = serializers.CharField(required=False, allow_blank=True, default='')
