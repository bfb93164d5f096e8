"""Leave task package exports."""

from .leave_tasks import send_leave_status_email  # noqa: F401

__all__ = ['send_leave_status_email']
