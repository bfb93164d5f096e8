"""
Recruitment Views
"""

import logging

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action

from apps.core.response import success_response
from apps.core.viewsets import HRMSModelViewSet, active_stats
from .filters import AttachmentTypeFilter, CandidateFilter, HiringStageFilter, JobPostingFilter
from .models import AttachmentType, Candidate, HiringStage, JobPosting
from .serializers import (
    AttachmentTypeSerializer,
    CandidateMoveStageSerializer,
    CandidateSerializer,
    HiringStageSerializer,
    JobPostingDropdownSerializer,
    JobPostingSerializer,
)
from .services import CandidateService, JobPostingService

logger = logging.getLogger(__name__)

DROPDOWN_LIMIT = 100


class AttachmentTypeViewSet(HRMSModelViewSet):
    queryset = AttachmentType.objects.all()
    serializer_class = AttachmentTypeSerializer
    filterset_class = AttachmentTypeFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['name', 'code', 'created_at']
    ordering = ['name']
    permission_module = 'attachment_type'
    resource_name = 'Attachment type'

    def get_stats(self, queryset):
        return active_stats(queryset, 'attachment_types')


class HiringStageViewSet(HRMSModelViewSet):
    queryset = HiringStage.objects.all()
    serializer_class = HiringStageSerializer
    filterset_class = HiringStageFilter
    search_fields = ['name', 'code', 'description']
    ordering_fields = ['sequence_order', 'name', 'created_at']
    ordering = ['sequence_order', 'name']
    permission_module = 'hiring_stage'
    resource_name = 'Hiring stage'

    def get_stats(self, queryset):
        return active_stats(queryset, 'hiring_stages')


class JobPostingViewSet(HRMSModelViewSet):
    """
    Job postings with nested ``hiring_stages`` and ``attachments_required``.

    GET /api/v1/recruitment/job-postings/dropdown/?search=...
    """

    queryset = JobPosting.objects.select_related(
        'department', 'designation', 'reporting_manager'
    ).prefetch_related('posting_stages__hiring_stage', 'posting_attachments__attachment_type')
    serializer_class = JobPostingSerializer
    filterset_class = JobPostingFilter
    search_fields = ['job_title', 'description']
    ordering_fields = ['job_title', 'posting_date', 'closing_date', 'due_date', 'created_at']
    permission_module = 'job_posting'
    resource_name = 'Job posting'

    def get_stats(self, queryset):
        return active_stats(queryset, 'job_postings')

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        stages = data.pop('posting_stages', None)
        attachments = data.pop('posting_attachments', None)
        serializer.instance = JobPostingService.create(
            data, stages=stages, attachments=attachments, user=self.request.user
        )

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        stages = data.pop('posting_stages', None)
        attachments = data.pop('posting_attachments', None)
        serializer.instance = JobPostingService.update(
            serializer.instance, data, stages=stages, attachments=attachments, user=self.request.user
        )

    @extend_schema(responses=JobPostingDropdownSerializer(many=True))
    @action(detail=False, methods=['get'])
    def dropdown(self, request):
        queryset = JobPosting.objects.filter(is_active=True).order_by('job_title')
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(job_title__icontains=search)
        return success_response(
            data=JobPostingDropdownSerializer(queryset[:DROPDOWN_LIMIT], many=True).data,
            message='Job postings retrieved successfully',
        )


class CandidateViewSet(HRMSModelViewSet):
    """
    Candidates.

    - POST /api/v1/recruitment/candidates/{id}/move-stage/  {"hiring_stage": "<uuid>"}
    """

    queryset = Candidate.objects.select_related('job_posting', 'current_hiring_stage')
    serializer_class = CandidateSerializer
    filterset_class = CandidateFilter
    search_fields = ['name', 'email', 'phone', 'skills']
    ordering_fields = ['name', 'application_date', 'status', 'experience_years', 'created_at']
    permission_module = 'candidate'
    resource_name = 'Candidate'

    def get_stats(self, queryset):
        stats = active_stats(queryset, 'candidates')
        counts = dict(
            queryset.values_list('status').annotate(total=Count('id')).order_by()
        )
        stats['by_status'] = {value: counts.get(value, 0) for value, _ in Candidate.STATUS_CHOICES}
        return stats

    @extend_schema(request=CandidateMoveStageSerializer, responses=CandidateSerializer)
    @action(detail=True, methods=['post'], url_path='move-stage')
    def move_stage(self, request, pk=None):
        serializer = CandidateMoveStageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        candidate = CandidateService.move_stage(
            self.get_object(),
            data['hiring_stage'],
            user=request.user,
            status=data.get('status'),
            notes=data['notes'],
        )
        return success_response(
            data=self.get_serializer(candidate).data,
            message='Candidate moved to the next stage successfully',
        )
