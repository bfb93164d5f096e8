"""
Employee Management Models
"""

from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from decimal import Decimal

from apps.core.models import HRMSModel


class Employee(HRMSModel):
    """
    Employee master record.
    Optionally linked to a User for login; carries the salary baseline.
    """

    # Employment Status
    STATUS_ACTIVE = 'active'
    STATUS_PROBATION = 'probation'
    STATUS_NOTICE = 'notice_period'
    STATUS_INACTIVE = 'inactive'
    STATUS_TERMINATED = 'terminated'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_PROBATION, 'Probation'),
        (STATUS_NOTICE, 'Notice Period'),
        (STATUS_INACTIVE, 'Inactive'),
        (STATUS_TERMINATED, 'Terminated'),
    ]

    # Employment Type
    TYPE_FULL_TIME = 'full_time'
    TYPE_PART_TIME = 'part_time'
    TYPE_CONTRACT = 'contract'
    TYPE_INTERN = 'intern'

    TYPE_CHOICES = [
        (TYPE_FULL_TIME, 'Full Time'),
        (TYPE_PART_TIME, 'Part Time'),
        (TYPE_CONTRACT, 'Contract'),
        (TYPE_INTERN, 'Intern'),
    ]

    # Link to User
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employee'
    )

    employee_id = models.CharField(max_length=50, unique=True)

    # Personal Information
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)

    # Organization
    department = models.ForeignKey(
        'Department',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees'
    )
    designation = models.ForeignKey(
        'Designation',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees'
    )

    # Reporting
    reporting_manager = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='direct_reports'
    )

    # Employment Details
    employment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_FULL_TIME)
    employment_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    date_of_joining = models.DateField()
    date_of_exit = models.DateField(null=True, blank=True)

    # Work Details
    shift = models.ForeignKey(
        'attendance.Shift',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees'
    )

    # Salary baseline
    basic_salary = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )

    class Meta:
        db_table = 'employees'
        ordering = ['employee_id']
        indexes = [
            models.Index(fields=['department', 'employment_status'], name='emp_dept_status_idx'),
            models.Index(fields=['reporting_manager'], name='emp_manager_idx'),
        ]

    def __str__(self):
        return f"{self.employee_id} - {self.full_name}"

    def clean(self):
        super().clean()
        if self.reporting_manager_id and self.pk and self.reporting_manager_id == self.pk:
            raise ValidationError({"reporting_manager": "Employee cannot report to themselves"})
        if self.date_of_exit and self.date_of_joining and self.date_of_exit < self.date_of_joining:
            raise ValidationError({"date_of_exit": "Exit date cannot be before joining date"})

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_team_members(self):
        """Get all direct reports"""
        return Employee.objects.filter(reporting_manager=self, is_active=True)


class Department(HRMSModel):
    """Department/Business Unit"""

    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)

    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sub_departments'
    )

    manager = models.ForeignKey(
        'Employee',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='managed_departments'
    )

    class Meta:
        db_table = 'departments'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        if self.parent_id and self.pk and self.parent_id == self.pk:
            raise ValidationError({"parent": "Department cannot be its own parent"})


class Designation(HRMSModel):
    """Job Title/Designation"""

    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='designations'
    )

    # Level for hierarchy
    level = models.PositiveSmallIntegerField(default=1)
    grade = models.CharField(max_length=20, blank=True)

    class Meta:
        db_table = 'designations'
        ordering = ['name']

    def __str__(self):
        return self.name
