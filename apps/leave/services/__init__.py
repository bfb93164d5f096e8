"""Leave service exports."""

from .leave_service import LEAVE_REFERENCE_TYPE, LeaveApplicationService, LeaveBalanceService

__all__ = ['LEAVE_REFERENCE_TYPE', 'LeaveApplicationService', 'LeaveBalanceService']
