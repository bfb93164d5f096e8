"""
Attendance Services - punch in/out and daily status
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import ValidationException

logger = logging.getLogger(__name__)

NOT_PUNCHED = 'not_punch'


class AttendanceService:
    """
    Core attendance service for punch operations.
    """

    @staticmethod
    def _hours_between(start: datetime, end: datetime) -> Decimal:
        seconds = Decimal(str((end - start).total_seconds()))
        return (seconds / Decimal('3600')).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    @staticmethod
    def _is_late(shift, punch_time: datetime) -> bool:
        if not shift:
            return False
        local = timezone.localtime(punch_time)
        shift_start = datetime.combine(local.date(), shift.start_time)
        cutoff = shift_start + timedelta(minutes=shift.grace_minutes)
        return local.replace(tzinfo=None) > cutoff

    @classmethod
    def _punch_in_status(cls, employee, punch_time: datetime) -> str:
        from apps.attendance.models import AttendanceRecord

        if cls._is_late(employee.shift, punch_time):
            return AttendanceRecord.STATUS_LATE
        return AttendanceRecord.STATUS_PRESENT

    @classmethod
    def _punch_out_status(cls, attendance, total_hours: Decimal) -> str:
        from apps.attendance.models import AttendanceRecord

        shift = attendance.employee.shift
        if shift and total_hours < Decimal(str(shift.half_day_hours)):
            return AttendanceRecord.STATUS_HALF_DAY
        return attendance.status

    @staticmethod
    def _log_history(attendance, action_type, punch_data: Dict, action_time, user,
                     old_data=None, new_data=None, remarks=''):
        from apps.attendance.models import AttendanceHistory

        return AttendanceHistory.objects.create(
            attendance=attendance,
            action_type=action_type,
            action_time=action_time,
            latitude=punch_data.get('latitude'),
            longitude=punch_data.get('longitude'),
            address=punch_data.get('address') or '',
            device_info=punch_data.get('device_info') or {},
            ip_address=punch_data.get('ip_address'),
            user_agent=punch_data.get('user_agent') or '',
            old_data=old_data,
            new_data=new_data,
            remarks=remarks,
            created_by=user,
        )

    @classmethod
    @transaction.atomic
    def punch_in(cls, employee, punch_data: Dict, user=None):
        """
        Record today's punch-in.

        Args:
            employee: Employee instance
            punch_data: {
                'latitude', 'longitude', 'address', 'work_type',
                'device_info', 'remarks', 'ip_address', 'user_agent'
            }
        """
        from apps.attendance.models import AttendanceRecord
        from apps.employees.models import Employee

        # Serialize punches per employee
        Employee.objects.select_for_update().filter(pk=employee.pk).first()

        today = timezone.localdate()
        if AttendanceRecord.objects.filter(employee=employee, attendance_date=today).exists():
            raise ValidationException('You have already punched in today')

        punch_time = timezone.now()
        attendance = AttendanceRecord.objects.create(
            employee=employee,
            attendance_date=today,
            punch_in_time=punch_time,
            punch_in_latitude=punch_data.get('latitude'),
            punch_in_longitude=punch_data.get('longitude'),
            punch_in_address=punch_data.get('address') or '',
            device_info=punch_data.get('device_info') or {},
            work_type=punch_data.get('work_type') or 'office',
            punch_status=AttendanceRecord.PUNCH_IN,
            status=cls._punch_in_status(employee, punch_time),
            remarks=punch_data.get('remarks') or '',
            created_by=user,
            updated_by=user,
        )

        cls._log_history(
            attendance,
            AttendanceRecord.PUNCH_IN,
            punch_data,
            punch_time,
            user,
            new_data={
                'punch_in_time': punch_time.isoformat(),
                'work_type': attendance.work_type,
                'status': attendance.status,
            },
            remarks=f"Punched in at {punch_data.get('address') or 'unknown location'}",
        )
        logger.info("Punch in employee=%s date=%s status=%s", employee.employee_id, today, attendance.status)
        return attendance

    @classmethod
    @transaction.atomic
    def punch_out(cls, employee, punch_data: Dict, user=None):
        """Record today's punch-out and compute worked hours."""
        from apps.attendance.models import AttendanceRecord

        today = timezone.localdate()
        attendance = (
            AttendanceRecord.objects.select_for_update()
            .select_related('employee__shift')
            .filter(employee=employee, attendance_date=today)
            .first()
        )
        if attendance is None or not attendance.punch_in_time:
            raise ValidationException('No punch-in found for today. Please punch in first.')
        if attendance.punch_status == AttendanceRecord.PUNCH_OUT:
            raise ValidationException('You have already punched out today')

        old_data = {
            'punch_out_time': None,
            'total_hours': None,
            'status': attendance.status,
            'remarks': attendance.remarks,
        }

        punch_time = timezone.now()
        total_hours = cls._hours_between(attendance.punch_in_time, punch_time)

        attendance.punch_out_time = punch_time
        attendance.punch_out_latitude = punch_data.get('latitude')
        attendance.punch_out_longitude = punch_data.get('longitude')
        attendance.punch_out_address = punch_data.get('address') or ''
        attendance.total_hours = total_hours
        attendance.punch_status = AttendanceRecord.PUNCH_OUT
        attendance.status = cls._punch_out_status(attendance, total_hours)
        attendance.remarks = punch_data.get('remarks') or attendance.remarks
        attendance.updated_by = user
        attendance.save()

        cls._log_history(
            attendance,
            AttendanceRecord.PUNCH_OUT,
            punch_data,
            punch_time,
            user,
            old_data=old_data,
            new_data={
                'punch_out_time': punch_time.isoformat(),
                'total_hours': str(total_hours),
                'status': attendance.status,
                'remarks': attendance.remarks,
            },
            remarks=f"Punched out. Total hours: {total_hours:.2f}",
        )
        logger.info("Punch out employee=%s date=%s hours=%s", employee.employee_id, today, total_hours)
        return attendance

    @classmethod
    def punch_status(cls, employee) -> Dict:
        """Today's punch state: ``not_punch``, ``punch_in`` or ``punch_out``."""
        from apps.attendance.models import AttendanceRecord

        today = timezone.localdate()
        attendance: Optional[AttendanceRecord] = AttendanceRecord.objects.filter(
            employee=employee, attendance_date=today
        ).first()
        if attendance is None:
            return {'status': NOT_PUNCHED, 'attendance_date': today, 'attendance': None}
        return {
            'status': attendance.punch_status,
            'attendance_date': today,
            'attendance': attendance,
        }
