from .attendance_service import AttendanceService, NOT_PUNCHED

__all__ = ['AttendanceService', 'NOT_PUNCHED']
