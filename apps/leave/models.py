"""
Leave Management Models - Leave types, yearly balances and applications
"""

from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import HRMSModel


class LeaveType(HRMSModel):
    """Leave type configuration"""

    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)

    # Default yearly allocation
    max_days_per_year = models.DecimalField(
        max_digits=5, decimal_places=1, default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))]
    )

    is_paid = models.BooleanField(default=True)
    requires_approval = models.BooleanField(default=True)

    class Meta:
        db_table = 'leave_types'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"


class LeaveBalance(HRMSModel):
    """Per-employee, per-leave-type, per-year allocation"""

    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.CASCADE,
        related_name='leave_balances'
    )
    leave_type = models.ForeignKey(
        LeaveType,
        on_delete=models.PROTECT,
        related_name='balances'
    )
    year = models.PositiveSmallIntegerField()

    allocated_days = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal('0'))
    used_days = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal('0'))
    balance_days = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal('0'))

    class Meta:
        db_table = 'leave_balances'
        unique_together = ['employee', 'leave_type', 'year']
        ordering = ['-year', 'leave_type__name']

    def __str__(self):
        return f"{self.employee} - {self.leave_type.code} {self.year}: {self.balance_days}"

    def clean(self):
        super().clean()
        if self.allocated_days is not None and self.used_days is not None \
                and self.allocated_days < self.used_days:
            raise ValidationError({'allocated_days': 'Allocated days cannot be less than used days'})

    def recalculate(self):
        self.balance_days = self.allocated_days - self.used_days
        return self.balance_days


class LeaveApplication(HRMSModel):
    """Leave application for a date range"""

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    # Statuses that hold days on the calendar
    BLOCKING_STATUSES = [STATUS_PENDING, STATUS_APPROVED]

    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.PROTECT,
        related_name='leave_applications'
    )
    leave_type = models.ForeignKey(
        LeaveType,
        on_delete=models.PROTECT,
        related_name='applications'
    )

    start_date = models.DateField()
    end_date = models.DateField()
    total_days = models.DecimalField(max_digits=5, decimal_places=1)
    reason = models.TextField()

    approval_status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_leave_applications'
    )
    approved_date = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    cancelled_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'leave_applications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['employee', 'approval_status'], name='leave_emp_status_idx'),
            models.Index(fields=['start_date', 'end_date'], name='leave_range_idx'),
        ]

    def __str__(self):
        return f"{self.employee} - {self.leave_type.code} ({self.start_date} to {self.end_date})"

    @staticmethod
    def count_days(start_date, end_date):
        return Decimal((end_date - start_date).days + 1)

    @property
    def is_pending(self):
        return self.approval_status == self.STATUS_PENDING
