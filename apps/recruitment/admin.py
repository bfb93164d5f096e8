"""Recruitment Admin"""
from django.contrib import admin
from .models import AttachmentType, Candidate, HiringStage, JobPosting, JobPostingAttachment, JobPostingStage


@admin.register(AttachmentType)
class AttachmentTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'is_active']
    search_fields = ['name', 'code']


@admin.register(HiringStage)
class HiringStageAdmin(admin.ModelAdmin):
    list_display = ['sequence_order', 'name', 'code', 'is_active']
    search_fields = ['name', 'code']
    ordering = ['sequence_order']


class JobPostingStageInline(admin.TabularInline):
    model = JobPostingStage
    extra = 0


class JobPostingAttachmentInline(admin.TabularInline):
    model = JobPostingAttachment
    extra = 0


@admin.register(JobPosting)
class JobPostingAdmin(admin.ModelAdmin):
    list_display = ['job_title', 'department', 'designation', 'posting_date', 'closing_date', 'is_internal_job', 'is_active']
    list_filter = ['is_internal_job', 'is_active', 'department']
    search_fields = ['job_title', 'description']
    raw_id_fields = ['department', 'designation', 'reporting_manager']
    inlines = [JobPostingStageInline, JobPostingAttachmentInline]


@admin.register(Candidate)
class CandidateAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'job_posting', 'current_hiring_stage', 'status', 'application_date']
    list_filter = ['status', 'current_hiring_stage']
    search_fields = ['name', 'email', 'phone', 'skills']
    raw_id_fields = ['job_posting']
