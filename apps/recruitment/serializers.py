from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from apps.core.serializers import UniqueFieldsMixin
from .models import AttachmentType, Candidate, HiringStage, JobPosting, JobPostingAttachment, JobPostingStage


class AttachmentTypeSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    unique_fields = ('name', 'code')
    resource_label = 'Attachment type'

    class Meta:
        model = AttachmentType
        fields = ['id', 'name', 'code', 'description', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_code(self, value):
        return value.strip().upper()


class HiringStageSerializer(UniqueFieldsMixin, serializers.ModelSerializer):
    unique_fields = ('name', 'code')
    resource_label = 'Hiring stage'

    candidate_count = serializers.SerializerMethodField()

    class Meta:
        model = HiringStage
        fields = [
            'id', 'name', 'code', 'description', 'sequence_order', 'candidate_count',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_candidate_count(self, obj):
        return obj.candidates.count()

    def validate_code(self, value):
        return value.strip().upper()


class JobPostingStageSerializer(serializers.ModelSerializer):
    hiring_stage_name = serializers.CharField(source='hiring_stage.name', read_only=True)
    hiring_stage_code = serializers.CharField(source='hiring_stage.code', read_only=True)

    class Meta:
        model = JobPostingStage
        fields = ['id', 'hiring_stage', 'hiring_stage_name', 'hiring_stage_code', 'sequence']
        read_only_fields = ['id']


class JobPostingAttachmentSerializer(serializers.ModelSerializer):
    attachment_type_name = serializers.CharField(source='attachment_type.name', read_only=True)

    class Meta:
        model = JobPostingAttachment
        fields = ['id', 'attachment_type', 'attachment_type_name', 'sequence']
        read_only_fields = ['id']


class JobPostingSerializer(serializers.ModelSerializer):
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    designation_name = serializers.CharField(source='designation.name', read_only=True, default=None)
    reporting_manager_name = serializers.CharField(source='reporting_manager.full_name', read_only=True, default=None)
    hiring_stages = JobPostingStageSerializer(source='posting_stages', many=True, required=False)
    attachments_required = JobPostingAttachmentSerializer(source='posting_attachments', many=True, required=False)
    candidate_count = serializers.SerializerMethodField()

    class Meta:
        model = JobPosting
        fields = [
            'id', 'job_title', 'description',
            'department', 'department_name', 'designation', 'designation_name',
            'reporting_manager', 'reporting_manager_name',
            'due_date', 'annual_salary_from', 'annual_salary_to', 'currency_code', 'experience',
            'posting_date', 'closing_date', 'is_internal_job',
            'hiring_stages', 'attachments_required', 'candidate_count',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_candidate_count(self, obj):
        return obj.candidates.count()

    def _check_unique(self, items, key, message):
        seen = set()
        for item in items:
            value = item[key].pk
            if value in seen:
                raise serializers.ValidationError(message)
            seen.add(value)

    def validate_hiring_stages(self, value):
        self._check_unique(value, 'hiring_stage', 'Each hiring stage can appear only once')
        return value

    def validate_attachments_required(self, value):
        self._check_unique(value, 'attachment_type', 'Each attachment type can appear only once')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        salary_from = attrs.get('annual_salary_from', getattr(self.instance, 'annual_salary_from', None))
        salary_to = attrs.get('annual_salary_to', getattr(self.instance, 'annual_salary_to', None))
        if salary_from is not None and salary_to is not None and salary_from > salary_to:
            raise serializers.ValidationError(
                {'annual_salary_to': 'Annual salary to must be greater than or equal to annual salary from'}
            )
        for field in ('annual_salary_from', 'annual_salary_to'):
            if attrs.get(field) is not None and attrs[field] < 0:
                raise serializers.ValidationError({field: 'Salary must be a positive number'})

        posting_date = attrs.get('posting_date', getattr(self.instance, 'posting_date', None))
        closing_date = attrs.get('closing_date', getattr(self.instance, 'closing_date', None))
        if posting_date and closing_date and closing_date < posting_date:
            raise serializers.ValidationError({'closing_date': 'Closing date cannot be before posting date'})
        return attrs


class JobPostingDropdownSerializer(serializers.ModelSerializer):
    class Meta:
        model = JobPosting
        fields = ['id', 'job_title', 'department', 'designation']


class CandidateSerializer(serializers.ModelSerializer):
    job_posting_title = serializers.CharField(source='job_posting.job_title', read_only=True, default=None)
    hiring_stage = serializers.SerializerMethodField()

    class Meta:
        model = Candidate
        fields = [
            'id', 'name', 'email', 'phone', 'job_posting', 'job_posting_title',
            'current_hiring_stage', 'hiring_stage', 'resume_url', 'cover_letter_url',
            'application_date', 'status', 'notes', 'experience_years', 'skills',
            'expected_salary', 'current_salary', 'notice_period', 'availability_date',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    @extend_schema_field(OpenApiTypes.OBJECT)
    def get_hiring_stage(self, obj):
        stage = obj.current_hiring_stage
        if stage is None:
            return None
        return {'id': str(stage.pk), 'name': stage.name, 'code': stage.code}

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name is required')
        return value

    def validate_notes(self, value):
        if len(value) > 2000:
            raise serializers.ValidationError('Notes must not exceed 2000 characters')
        return value

    def validate_experience_years(self, value):
        if value is not None and not 0 <= value <= 50:
            raise serializers.ValidationError('Experience years must be between 0 and 50')
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        from .services import CandidateService

        if 'current_hiring_stage' in attrs or 'job_posting' in attrs:
            CandidateService.validate_stage(
                attrs.get('job_posting', getattr(self.instance, 'job_posting', None)),
                attrs.get('current_hiring_stage', getattr(self.instance, 'current_hiring_stage', None)),
            )
        return attrs


class CandidateMoveStageSerializer(serializers.Serializer):
    hiring_stage = serializers.PrimaryKeyRelatedField(queryset=HiringStage.objects.filter(is_active=True))
    status = serializers.ChoiceField(choices=Candidate.STATUS_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
