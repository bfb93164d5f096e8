"""Recruitment Models - Job postings, hiring pipeline and candidates"""
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import HRMSModel


class AttachmentType(HRMSModel):
    """Document a job posting can ask candidates for"""
    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'attachment_types'
        ordering = ['name']

    def __str__(self):
        return self.name


class HiringStage(HRMSModel):
    """Step of the hiring funnel"""
    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)
    sequence_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'hiring_stages'
        ordering = ['sequence_order', 'name']

    def __str__(self):
        return f"{self.sequence_order}. {self.name}"


class JobPosting(HRMSModel):
    """Job posting"""
    job_title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    department = models.ForeignKey('employees.Department', on_delete=models.SET_NULL, null=True, blank=True, related_name='job_postings')
    designation = models.ForeignKey('employees.Designation', on_delete=models.SET_NULL, null=True, blank=True, related_name='job_postings')
    reporting_manager = models.ForeignKey('employees.Employee', on_delete=models.SET_NULL, null=True, blank=True, related_name='managed_job_postings')

    due_date = models.DateField(null=True, blank=True)
    annual_salary_from = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    annual_salary_to = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency_code = models.CharField(max_length=10, default='INR')
    experience = models.CharField(max_length=100, blank=True)

    posting_date = models.DateField(null=True, blank=True)
    closing_date = models.DateField(null=True, blank=True)
    is_internal_job = models.BooleanField(default=False)

    hiring_stages = models.ManyToManyField(HiringStage, through='JobPostingStage', related_name='job_postings')
    attachments_required = models.ManyToManyField(AttachmentType, through='JobPostingAttachment', related_name='job_postings')

    class Meta:
        db_table = 'job_postings'
        ordering = ['-created_at']

    def __str__(self):
        return self.job_title



class JobPostingStage(models.Model):
    job_posting = models.ForeignKey(JobPosting, on_delete=models.CASCADE, related_name='posting_stages')
    hiring_stage = models.ForeignKey(HiringStage, on_delete=models.PROTECT, related_name='posting_stages')
    sequence = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'job_posting_stages'
        ordering = ['sequence']
        unique_together = ['job_posting', 'hiring_stage']

    def __str__(self):
        return f"{self.job_posting} - {self.hiring_stage.name} ({self.sequence})"


class JobPostingAttachment(models.Model):
    job_posting = models.ForeignKey(JobPosting, on_delete=models.CASCADE, related_name='posting_attachments')
    attachment_type = models.ForeignKey(AttachmentType, on_delete=models.PROTECT, related_name='posting_attachments')
    sequence = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'job_posting_attachments'
        ordering = ['sequence']
        unique_together = ['job_posting', 'attachment_type']

    def __str__(self):
        return f"{self.job_posting} - {self.attachment_type.name} ({self.sequence})"


class Candidate(HRMSModel):
    """Applicant for a job posting"""

    STATUS_APPLIED = 'applied'
    STATUS_SCREENING = 'screening'
    STATUS_INTERVIEW = 'interview'
    STATUS_OFFER = 'offer'
    STATUS_HIRED = 'hired'
    STATUS_REJECTED = 'rejected'
    STATUS_WITHDRAWN = 'withdrawn'

    STATUS_CHOICES = [
        (STATUS_APPLIED, 'Applied'),
        (STATUS_SCREENING, 'Screening'),
        (STATUS_INTERVIEW, 'Interview'),
        (STATUS_OFFER, 'Offer'),
        (STATUS_HIRED, 'Hired'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_WITHDRAWN, 'Withdrawn'),
    ]

    # Candidates in these states no longer move through the pipeline
    CLOSED_STATUSES = [STATUS_HIRED, STATUS_REJECTED, STATUS_WITHDRAWN]

    name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=20, blank=True)

    job_posting = models.ForeignKey(JobPosting, on_delete=models.SET_NULL, null=True, blank=True, related_name='candidates')
    current_hiring_stage = models.ForeignKey(HiringStage, on_delete=models.SET_NULL, null=True, blank=True, related_name='candidates')

    resume_url = models.URLField(max_length=500, blank=True)
    cover_letter_url = models.URLField(max_length=500, blank=True)
    application_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_APPLIED, db_index=True)
    notes = models.TextField(blank=True)

    experience_years = models.DecimalField(
        max_digits=4, decimal_places=1, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(50)]
    )
    skills = models.TextField(blank=True)
    expected_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    current_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    # Days
    notice_period = models.PositiveSmallIntegerField(null=True, blank=True)
    availability_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'candidates'
        ordering = ['-application_date', '-created_at']
        indexes = [
            models.Index(fields=['job_posting', 'status'], name='cand_posting_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"
