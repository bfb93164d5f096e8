"""
Payroll Models - Salary structures, processing runs and salary slips
"""

from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.core.models import HRMSModel


MONTH_CHOICES = [(f'{month:02d}', f'{month:02d}') for month in range(1, 13)]


class SalaryStructure(HRMSModel):
    """Versioned pay composition for an employee"""

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    ]

    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.CASCADE,
        related_name='salary_structures'
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)

    class Meta:
        db_table = 'salary_structures'
        ordering = ['-start_date']

    def __str__(self):
        return f"{self.employee} ({self.start_date} to {self.end_date}, {self.status})"

    def total_for(self, category):
        return sum(
            (item.value for item in self.items.all() if item.category == category),
            Decimal('0.00'),
        )

    @property
    def basic_amount(self):
        for item in self.items.all():
            if item.structure_type == SalaryStructureItem.BASIC_SALARY:
                return item.value
        return None


class SalaryStructureItem(HRMSModel):
    """Earning or deduction line of a salary structure"""

    BASIC_SALARY = 'Basic Salary'

    CATEGORY_EARNINGS = 'earnings'
    CATEGORY_DEDUCTIONS = 'deductions'

    CATEGORY_CHOICES = [
        (CATEGORY_EARNINGS, 'Earnings'),
        (CATEGORY_DEDUCTIONS, 'Deductions'),
    ]

    salary_structure = models.ForeignKey(
        SalaryStructure,
        on_delete=models.CASCADE,
        related_name='items'
    )
    structure_type = models.CharField(max_length=100)
    value = models.DecimalField(
        max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = 'salary_structure_items'
        ordering = ['category', 'structure_type']

    def __str__(self):
        return f"{self.structure_type}: {self.value} ({self.category})"


class PayrollProcessing(HRMSModel):
    """One payroll run per month"""

    STATUS_DRAFT = 'draft'
    STATUS_PROCESSED = 'processed'
    STATUS_PAID = 'paid'

    STATUS_CHOICES = [
        (STATUS_DRAFT, 'Draft'),
        (STATUS_PROCESSED, 'Processed'),
        (STATUS_PAID, 'Paid'),
    ]

    payroll_month = models.CharField(max_length=2, choices=MONTH_CHOICES)
    payroll_year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(2000), MaxValueValidator(2100)]
    )
    processing_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT, db_index=True)

    # Totals
    total_employees = models.PositiveIntegerField(default=0)
    total_earnings = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    total_deductions = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    total_leave_deductions = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    total_net_salary = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))

    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_payrolls'
    )
    remarks = models.TextField(blank=True)

    class Meta:
        db_table = 'payroll_processing'
        ordering = ['-payroll_year', '-payroll_month']
        unique_together = ['payroll_month', 'payroll_year']

    def __str__(self):
        return f"Payroll {self.payroll_month}/{self.payroll_year} ({self.status})"


class SalarySlip(HRMSModel):
    """Per-employee outcome of a payroll run"""

    employee = models.ForeignKey(
        'employees.Employee',
        on_delete=models.PROTECT,
        related_name='salary_slips'
    )
    payroll = models.ForeignKey(
        PayrollProcessing,
        on_delete=models.CASCADE,
        related_name='salary_slips'
    )
    payroll_month = models.CharField(max_length=2, choices=MONTH_CHOICES)
    payroll_year = models.PositiveSmallIntegerField()

    basic_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_earnings = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_deductions = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    leave_deductions = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    net_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # Deductible leave days inside the month
    leave_days = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal('0'))

    status = models.CharField(
        max_length=20,
        choices=PayrollProcessing.STATUS_CHOICES,
        default=PayrollProcessing.STATUS_PROCESSED,
        db_index=True
    )
    processed_date = models.DateTimeField(null=True, blank=True)
    paid_date = models.DateField(null=True, blank=True)
    remarks = models.TextField(blank=True)

    class Meta:
        db_table = 'salary_slips'
        ordering = ['-payroll_year', '-payroll_month', 'employee__employee_id']
        unique_together = ['payroll', 'employee']
        indexes = [
            models.Index(fields=['payroll_year', 'payroll_month'], name='slip_period_idx'),
        ]

    def __str__(self):
        return f"{self.employee} - {self.payroll_month}/{self.payroll_year}"
