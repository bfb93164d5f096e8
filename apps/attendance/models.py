"""
Attendance Models - Shifts, daily punch records and punch history
"""

from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import models

from apps.core.models import HRMSModel


class Shift(HRMSModel):
    """Work shift definitions"""

    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)

    start_time = models.TimeField()
    end_time = models.TimeField()

    # Break in minutes
    break_duration = models.PositiveSmallIntegerField(default=60)

    # Grace period before a punch-in counts as late
    grace_minutes = models.PositiveSmallIntegerField(default=15)

    # Below this many hours a day is marked half day
    half_day_hours = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('4.00'))

    class Meta:
        db_table = 'shifts'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.start_time:%H:%M} - {self.end_time:%H:%M})"

    @property
    def is_night_shift(self):
        return self.end_time <= self.start_time


class AttendanceRecord(HRMSModel):
    """Daily attendance record, one per employee per day"""

    PUNCH_IN = 'punch_in'
    PUNCH_OUT = 'punch_out'

    PUNCH_STATUS_CHOICES = [
        (PUNCH_IN, 'Punched In'),
        (PUNCH_OUT, 'Punched Out'),
    ]

    STATUS_PRESENT = 'present'
    STATUS_ABSENT = 'absent'
    STATUS_HALF_DAY = 'half_day'
    STATUS_LATE = 'late'
    STATUS_ON_LEAVE = 'on_leave'

    STATUS_CHOICES = [
        (STATUS_PRESENT, 'Present'),
        (STATUS_ABSENT, 'Absent'),
        (STATUS_HALF_DAY, 'Half Day'),
        (STATUS_LATE, 'Late'),
        (STATUS_ON_LEAVE, 'On Leave'),
    ]

    WORK_TYPE_CHOICES = [
        ('office', 'Office'),
        ('remote', 'Remote'),
        ('field', 'Field'),
        ('hybrid', 'Hybrid'),
    ]

    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.CASCADE,
        related_name='attendance_records'
    )
    attendance_date = models.DateField(db_index=True)

    punch_in_time = models.DateTimeField(null=True, blank=True)
    punch_out_time = models.DateTimeField(null=True, blank=True)
    total_hours = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)

    punch_status = models.CharField(max_length=20, choices=PUNCH_STATUS_CHOICES, default=PUNCH_IN)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PRESENT)
    work_type = models.CharField(max_length=20, choices=WORK_TYPE_CHOICES, default='office')

    # Location data
    punch_in_latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    punch_in_longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    punch_in_address = models.CharField(max_length=500, blank=True)
    punch_out_latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    punch_out_longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    punch_out_address = models.CharField(max_length=500, blank=True)

    device_info = models.JSONField(default=dict, blank=True)
    remarks = models.TextField(blank=True)

    class Meta:
        db_table = 'attendance_records'
        unique_together = ['employee', 'attendance_date']
        ordering = ['-attendance_date']
        indexes = [
            models.Index(fields=['attendance_date', 'status'], name='att_date_status_idx'),
        ]

    def __str__(self):
        return f"{self.employee.employee_id} - {self.attendance_date}"

    def clean(self):
        super().clean()
        if self.punch_in_time and self.punch_out_time and self.punch_out_time < self.punch_in_time:
            raise ValidationError({'punch_out_time': 'Punch-out cannot be before punch-in.'})


class AttendanceHistory(HRMSModel):
    """Audit trail of every punch action"""

    ACTION_CHOICES = AttendanceRecord.PUNCH_STATUS_CHOICES

    attendance = models.ForeignKey(
        AttendanceRecord,
        on_delete=models.CASCADE,
        related_name='history'
    )
    action_type = models.CharField(max_length=20, choices=ACTION_CHOICES)
    action_time = models.DateTimeField()

    latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    address = models.CharField(max_length=500, blank=True)
    device_info = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True)

    old_data = models.JSONField(null=True, blank=True)
    new_data = models.JSONField(null=True, blank=True)
    remarks = models.TextField(blank=True)

    class Meta:
        db_table = 'attendance_history'
        ordering = ['-action_time']

    def __str__(self):
        return f"{self.attendance} - {self.action_type} at {self.action_time}"
