"""Recruitment app filters."""
import django_filters

from apps.core.filters import ActiveFilterSet
from .models import AttachmentType, Candidate, HiringStage, JobPosting


class AttachmentTypeFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    code = django_filters.CharFilter(lookup_expr='iexact')

    class Meta:
        model = AttachmentType
        fields = ['name', 'code', 'is_active']


class HiringStageFilter(ActiveFilterSet):
    name = django_filters.CharFilter(lookup_expr='icontains')
    code = django_filters.CharFilter(lookup_expr='iexact')

    class Meta:
        model = HiringStage
        fields = ['name', 'code', 'is_active']


class JobPostingFilter(ActiveFilterSet):
    job_title = django_filters.CharFilter(lookup_expr='icontains')
    department = django_filters.UUIDFilter()
    designation = django_filters.UUIDFilter()
    reporting_manager = django_filters.UUIDFilter()
    closing_date_from = django_filters.DateFilter(field_name='closing_date', lookup_expr='gte')
    closing_date_to = django_filters.DateFilter(field_name='closing_date', lookup_expr='lte')

    class Meta:
        model = JobPosting
        fields = ['department', 'designation', 'is_internal_job', 'is_active']


class CandidateFilter(ActiveFilterSet):
    job_posting = django_filters.UUIDFilter()
    status = django_filters.ChoiceFilter(choices=Candidate.STATUS_CHOICES)
    stage = django_filters.UUIDFilter(field_name='current_hiring_stage')
    application_date_from = django_filters.DateFilter(field_name='application_date', lookup_expr='gte')
    application_date_to = django_filters.DateFilter(field_name='application_date', lookup_expr='lte')

    class Meta:
        model = Candidate
        fields = ['job_posting', 'status', 'is_active']
