"""
Leave Celery Tasks - Status notifications
"""

import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


@shared_task
def send_leave_status_email(leave_application_id, status=None):
    """Email the applicant after their leave is approved, rejected or cancelled."""
    from apps.leave.models import LeaveApplication

    application = (
        LeaveApplication.objects.select_related('employee', 'leave_type')
        .filter(id=leave_application_id)
        .first()
    )
    if not application or not application.employee.email:
        return 'No recipient'

    resolved_status = status or application.approval_status
    employee = application.employee
    subject = f"Leave {resolved_status.title()}"
    message = (
        f"Hi {employee.full_name},\n\n"
        f"Your {application.leave_type.name} application from {application.start_date} "
        f"to {application.end_date} has been {resolved_status}."
    )
    if application.rejection_reason:
        message += f"\n\nReason: {application.rejection_reason}"

    send_mail(subject, message, settings.DEFAULT_FROM_EMAIL, [employee.email], fail_silently=True)
    logger.info("Leave status email sent application=%s status=%s", leave_application_id, resolved_status)
    return f"leave-email:{leave_application_id}:{resolved_status}"
