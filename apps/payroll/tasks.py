"""
Payroll Background Tasks
"""

import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_kwargs={'max_retries': 3},
    retry_backoff=True
)
def process_payroll_task(self, payroll_month: str, payroll_year: int, employee_ids=None,
                         process_all: bool = False, user_id=None, remarks: str = ''):
    """
    Run payroll processing outside the request cycle.

    Returns the id of the created PayrollProcessing record. A second run for
    the same month is a business error and is not retried.
    """
    from django.contrib.auth import get_user_model
    from apps.core.exceptions import APIException
    from .services import PayrollProcessingService

    user = get_user_model().objects.filter(pk=user_id).first() if user_id else None
    try:
        payroll = PayrollProcessingService.process(
            payroll_month,
            payroll_year,
            employee_ids=employee_ids,
            process_all=process_all,
            user=user,
            remarks=remarks,
        )
    except APIException as exc:
        logger.warning("Payroll task %s/%s rejected: %s", payroll_month, payroll_year, exc.message)
        return {'status': 'rejected', 'message': exc.message}

    return {'status': 'processed', 'payroll_id': str(payroll.pk)}
