"""Employee lookups shared by other apps."""

from apps.core.exceptions import ValidationException
from .models import Employee


def get_request_employee(request):
    """Employee profile linked to the authenticated user."""
    employee = (
        Employee.objects.select_related('shift', 'reporting_manager')
        .filter(user=request.user, is_active=True)
        .first()
    )
    if employee is None:
        raise ValidationException('No employee profile found for current user')
    return employee
