"""Workflows app filters."""
import django_filters
from django.db.models import F, Q

from apps.core.filters import ActiveFilterSet
from .models import ApprovalWorkflow


class ApprovalWorkflowFilter(ActiveFilterSet):
    workflow_type = django_filters.ChoiceFilter(choices=ApprovalWorkflow.WORKFLOW_TYPE_CHOICES)
    status = django_filters.ChoiceFilter(choices=ApprovalWorkflow.STATUS_CHOICES)
    priority = django_filters.ChoiceFilter(choices=ApprovalWorkflow.PRIORITY_CHOICES)
    reference_type = django_filters.CharFilter()
    reference_id = django_filters.UUIDFilter()
    requested_by = django_filters.UUIDFilter()
    # Workflows waiting on the requesting user
    assigned_to_me = django_filters.BooleanFilter(method='filter_assigned_to_me')
    requested_after = django_filters.DateTimeFilter(field_name='request_date', lookup_expr='gte')
    requested_before = django_filters.DateTimeFilter(field_name='request_date', lookup_expr='lte')

    class Meta:
        model = ApprovalWorkflow
        fields = ['workflow_type', 'status', 'priority', 'reference_type', 'is_active']

    def filter_assigned_to_me(self, queryset, name, value):
        if not value:
            return queryset
        user = self.request.user
        assigned = Q(steps__assigned_user=user)
        if user.role_id:
            assigned |= Q(steps__assigned_user__isnull=True, steps__assigned_role=user.role_id)
        return queryset.filter(
            assigned,
            status=ApprovalWorkflow.STATUS_PENDING,
            steps__step_number=F('current_step'),
        ).distinct()
