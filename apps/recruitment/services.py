"""
Recruitment Services - Job posting pipelines and candidate movement
"""

import logging
from typing import Dict, List, Optional

from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import InvalidStateException, ValidationException
from .models import Candidate, JobPosting, JobPostingAttachment, JobPostingStage

logger = logging.getLogger(__name__)


class JobPostingService:
    """
    Job postings with their ordered hiring stages and required attachments.

    Nested lists are replaced wholesale when supplied.
    """

    @staticmethod
    def _set_stages(posting, stages: List[Dict]):
        posting.posting_stages.all().delete()
        JobPostingStage.objects.bulk_create([
            JobPostingStage(
                job_posting=posting,
                hiring_stage=stage['hiring_stage'],
                sequence=stage.get('sequence', index),
            )
            for index, stage in enumerate(stages, start=1)
        ])

    @staticmethod
    def _set_attachments(posting, attachments: List[Dict]):
        posting.posting_attachments.all().delete()
        JobPostingAttachment.objects.bulk_create([
            JobPostingAttachment(
                job_posting=posting,
                attachment_type=attachment['attachment_type'],
                sequence=attachment.get('sequence', index),
            )
            for index, attachment in enumerate(attachments, start=1)
        ])

    @classmethod
    @transaction.atomic
    def create(cls, data: Dict, stages: Optional[List[Dict]] = None,
               attachments: Optional[List[Dict]] = None, user=None):
        data.setdefault('posting_date', timezone.localdate())
        posting = JobPosting.objects.create(created_by=user, updated_by=user, **data)
        if stages:
            cls._set_stages(posting, stages)
        if attachments:
            cls._set_attachments(posting, attachments)
        logger.info("Job posting created id=%s title=%s", posting.pk, posting.job_title)
        return posting

    @classmethod
    @transaction.atomic
    def update(cls, posting, data: Dict, stages: Optional[List[Dict]] = None,
               attachments: Optional[List[Dict]] = None, user=None):
        for field, value in data.items():
            setattr(posting, field, value)
        posting.updated_by = user
        posting.save()
        if stages is not None:
            cls._set_stages(posting, stages)
        if attachments is not None:
            cls._set_attachments(posting, attachments)
        return posting


class CandidateService:

    @staticmethod
    def validate_stage(job_posting, stage):
        """A posting with a pipeline only accepts its own stages."""
        if job_posting is None or stage is None:
            return
        pipeline = job_posting.posting_stages.values_list('hiring_stage_id', flat=True)
        if pipeline and stage.pk not in set(pipeline):
            raise ValidationException(
                'Hiring stage is not part of this job posting', field='current_hiring_stage'
            )

    @classmethod
    @transaction.atomic
    def move_stage(cls, candidate, stage, user=None, status: Optional[str] = None, notes: str = ''):
        candidate = Candidate.objects.select_for_update().get(pk=candidate.pk)
        if candidate.status in Candidate.CLOSED_STATUSES:
            raise InvalidStateException(
                f"Cannot move a candidate with status {candidate.get_status_display()}"
            )
        cls.validate_stage(candidate.job_posting, stage)

        previous = candidate.current_hiring_stage
        candidate.current_hiring_stage = stage
        if status:
            candidate.status = status
        elif candidate.status == Candidate.STATUS_APPLIED:
            candidate.status = Candidate.STATUS_SCREENING
        if notes:
            stamp = timezone.localdate().isoformat()
            candidate.notes = f"{candidate.notes}\n[{stamp}] {notes}".strip()
        candidate.updated_by = user
        candidate.save()

        logger.info(
            "Candidate %s moved %s -> %s",
            candidate.pk, previous.code if previous else None, stage.code,
        )
        return candidate
