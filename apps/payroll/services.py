"""
Payroll Services - Salary structure management and the payroll calculation engine
"""

import calendar
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Prefetch, Q
from django.utils import timezone

from apps.core.exceptions import InvalidStateException, ValidationException

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class SalaryStructureService:
    """
    Salary structures with their line items.

    An employee has at most one Active structure: activating one moves the
    previous Active structure to Inactive.
    """

    @staticmethod
    def _replace_items(structure, items: Iterable[Dict], user=None):
        from .models import SalaryStructureItem

        structure.items.all().delete()
        SalaryStructureItem.objects.bulk_create([
            SalaryStructureItem(
                salary_structure=structure,
                structure_type=item['structure_type'],
                value=item['value'],
                category=item['category'],
                is_default=item.get('is_default', False),
                created_by=user,
                updated_by=user,
            )
            for item in items
        ])

    @staticmethod
    def _deactivate_others(structure, user=None):
        from .models import SalaryStructure

        return SalaryStructure.objects.filter(
            employee=structure.employee,
            status=SalaryStructure.STATUS_ACTIVE,
        ).exclude(pk=structure.pk).update(
            status=SalaryStructure.STATUS_INACTIVE,
            updated_by=user,
            updated_at=timezone.now(),
        )

    @classmethod
    @transaction.atomic
    def create(cls, employee, start_date: date, end_date: date, items: List[Dict],
               status: Optional[str] = None, is_active: bool = True, user=None):
        from .models import SalaryStructure

        if not items:
            raise ValidationException('At least one structure item is required', field='structure_items')
        if end_date < start_date:
            raise ValidationException('End date cannot be earlier than start date', field='end_date')

        structure = SalaryStructure.objects.create(
            employee=employee,
            start_date=start_date,
            end_date=end_date,
            status=status or SalaryStructure.STATUS_ACTIVE,
            is_active=is_active,
            created_by=user,
            updated_by=user,
        )
        cls._replace_items(structure, items, user)
        if structure.status == SalaryStructure.STATUS_ACTIVE:
            cls._deactivate_others(structure, user)

        logger.info("Salary structure created employee=%s items=%s", employee.employee_id, len(items))
        return structure

    @classmethod
    @transaction.atomic
    def update(cls, structure, data: Dict, items: Optional[List[Dict]] = None, user=None):
        from .models import SalaryStructure

        for field, value in data.items():
            setattr(structure, field, value)
        if structure.end_date < structure.start_date:
            raise ValidationException('End date cannot be earlier than start date', field='end_date')
        structure.updated_by = user
        structure.save()

        if items is not None:
            if not items:
                raise ValidationException('At least one structure item is required', field='structure_items')
            cls._replace_items(structure, items, user)
        if structure.status == SalaryStructure.STATUS_ACTIVE:
            cls._deactivate_others(structure, user)
        return structure


class PayrollProcessingService:
    """
    Monthly payroll engine.

    For every included employee with an Active salary structure::

        earnings        = sum of Earnings items
        deductions      = sum of Deductions items
        leave_deduction = round(basic / PAYROLL_WORKING_DAYS * leave_days, 2)
        net             = earnings - deductions - leave_deduction

    ``leave_days`` counts the days of approved leave of deductible types that
    fall inside the payroll month.
    """

    @staticmethod
    def period(month: str, year: int):
        month_number = int(month)
        _, last_day = calendar.monthrange(year, month_number)
        return date(year, month_number, 1), date(year, month_number, last_day)

    @staticmethod
    def working_days() -> Decimal:
        return Decimal(str(getattr(settings, 'PAYROLL_WORKING_DAYS', 30)))

    @staticmethod
    def deductible_leave_filter() -> Q:
        codes = [code.upper() for code in getattr(settings, 'PAYROLL_DEDUCTIBLE_LEAVE_CODES', [])]
        condition = Q(leave_type__is_paid=False)
        if codes:
            condition |= Q(leave_type__code__in=codes)
        return condition

    @classmethod
    def qualifying_leave_days(cls, employee, period_start: date, period_end: date) -> Decimal:
        from apps.leave.models import LeaveApplication

        applications = LeaveApplication.objects.filter(
            cls.deductible_leave_filter(),
            employee=employee,
            approval_status=LeaveApplication.STATUS_APPROVED,
            start_date__lte=period_end,
            end_date__gte=period_start,
        ).select_related('leave_type')

        total = Decimal('0')
        for application in applications:
            overlap_start = max(period_start, application.start_date)
            overlap_end = min(period_end, application.end_date)
            total += Decimal((overlap_end - overlap_start).days + 1)
        return total

    @classmethod
    def calculate_slip(cls, employee, structure, period_start: date, period_end: date) -> Dict:
        from .models import SalaryStructureItem

        earnings = _money(structure.total_for(SalaryStructureItem.CATEGORY_EARNINGS))
        deductions = _money(structure.total_for(SalaryStructureItem.CATEGORY_DEDUCTIONS))

        basic = structure.basic_amount
        if basic is None:
            basic = employee.basic_salary or Decimal('0.00')
        basic = _money(basic)

        leave_days = cls.qualifying_leave_days(employee, period_start, period_end)
        leave_deduction = _money(basic / cls.working_days() * leave_days)

        return {
            'basic_salary': basic,
            'total_earnings': earnings,
            'total_deductions': deductions,
            'leave_days': leave_days,
            'leave_deductions': leave_deduction,
            'net_salary': earnings - deductions - leave_deduction,
        }

    @staticmethod
    def _validate_period(month: str, year: int):
        if month not in {f'{number:02d}' for number in range(1, 13)}:
            raise ValidationException('Payroll month must be between 01 and 12', field='payroll_month')
        if not 2000 <= int(year) <= 2100:
            raise ValidationException('Payroll year must be between 2000 and 2100', field='payroll_year')

    @classmethod
    def ensure_not_processed(cls, month: str, year: int):
        from .models import PayrollProcessing

        if PayrollProcessing.objects.filter(payroll_month=month, payroll_year=year).exists():
            raise ValidationException('Payroll for this month and year already exists', field='payroll_month')

    @classmethod
    def eligible_employees(cls, employee_ids: Optional[Iterable] = None, process_all: bool = False):
        from apps.employees.models import Employee
        from .models import SalaryStructure

        if not process_all and not employee_ids:
            raise ValidationException('Select employees or set process_all', field='employee_ids')

        queryset = Employee.objects.filter(is_active=True)
        if not process_all:
            queryset = queryset.filter(pk__in=list(employee_ids))
        return queryset.prefetch_related(
            Prefetch(
                'salary_structures',
                queryset=SalaryStructure.objects.filter(
                    status=SalaryStructure.STATUS_ACTIVE, is_active=True
                ).prefetch_related('items').order_by('-start_date'),
                to_attr='active_structures',
            )
        ).order_by('employee_id')

    @classmethod
    @transaction.atomic
    def process(cls, month: str, year: int, employee_ids: Optional[Iterable] = None,
                process_all: bool = False, user=None, remarks: str = ''):
        """Run payroll for a month; one PayrollProcessing plus one SalarySlip per employee."""
        from .models import PayrollProcessing, SalarySlip

        cls._validate_period(month, year)
        cls.ensure_not_processed(month, year)
        period_start, period_end = cls.period(month, year)
        now = timezone.now()

        slips = []
        for employee in cls.eligible_employees(employee_ids, process_all):
            if not employee.active_structures:
                logger.info("Payroll skip employee=%s: no active salary structure", employee.employee_id)
                continue
            figures = cls.calculate_slip(employee, employee.active_structures[0], period_start, period_end)
            slips.append(SalarySlip(
                employee=employee,
                payroll_month=month,
                payroll_year=year,
                status=PayrollProcessing.STATUS_PROCESSED,
                processed_date=now,
                created_by=user,
                updated_by=user,
                **figures,
            ))

        total_earnings = sum((slip.total_earnings for slip in slips), Decimal('0.00'))
        total_deductions = sum((slip.total_deductions for slip in slips), Decimal('0.00'))
        total_leave_deductions = sum((slip.leave_deductions for slip in slips), Decimal('0.00'))

        try:
            payroll = PayrollProcessing.objects.create(
                payroll_month=month,
                payroll_year=year,
                processing_date=now,
                status=PayrollProcessing.STATUS_PROCESSED,
                total_employees=len(slips),
                total_earnings=total_earnings,
                total_deductions=total_deductions,
                total_leave_deductions=total_leave_deductions,
                total_net_salary=total_earnings - total_deductions - total_leave_deductions,
                processed_by=user,
                remarks=remarks or '',
                created_by=user,
                updated_by=user,
            )
        except IntegrityError:
            # Lost a race with a concurrent run for the same month
            raise ValidationException('Payroll for this month and year already exists', field='payroll_month')

        for slip in slips:
            slip.payroll = payroll
        SalarySlip.objects.bulk_create(slips)

        logger.info(
            "Payroll processed %s/%s employees=%s net=%s",
            month, year, payroll.total_employees, payroll.total_net_salary,
        )
        return payroll

    @classmethod
    @transaction.atomic
    def update(cls, payroll, status: Optional[str] = None, remarks: Optional[str] = None, user=None):
        """Only status and remarks change after processing; Paid is final."""
        from .models import PayrollProcessing, SalarySlip

        payroll = PayrollProcessing.objects.select_for_update().get(pk=payroll.pk)
        if status and status != payroll.status:
            if payroll.status == PayrollProcessing.STATUS_PAID:
                raise InvalidStateException('Paid payroll cannot change status')
            payroll.status = status
            if status == PayrollProcessing.STATUS_PAID:
                SalarySlip.objects.filter(payroll=payroll).update(
                    status=PayrollProcessing.STATUS_PAID,
                    paid_date=timezone.localdate(),
                    updated_by=user,
                    updated_at=timezone.now(),
                )
                logger.info("Payroll %s/%s marked paid", payroll.payroll_month, payroll.payroll_year)
        if remarks is not None:
            payroll.remarks = remarks
        payroll.updated_by = user
        payroll.save()
        return payroll

    @classmethod
    @transaction.atomic
    def delete(cls, payroll):
        from .models import PayrollProcessing

        if payroll.status == PayrollProcessing.STATUS_PAID:
            raise InvalidStateException('Cannot delete paid payroll')
        logger.info("Payroll %s/%s deleted", payroll.payroll_month, payroll.payroll_year)
        payroll.delete()


class SalarySlipService:

    @classmethod
    @transaction.atomic
    def update(cls, slip, data: Dict, user=None):
        from .models import PayrollProcessing

        if (
            slip.payroll.status == PayrollProcessing.STATUS_PAID
            and 'status' in data
            and data['status'] != slip.status
        ):
            raise InvalidStateException('Slips of a paid payroll cannot be changed')

        if 'status' in data:
            slip.status = data['status']
            if slip.status == PayrollProcessing.STATUS_PAID and not data.get('paid_date') and not slip.paid_date:
                slip.paid_date = timezone.localdate()
        if 'paid_date' in data:
            slip.paid_date = data['paid_date']
        if 'remarks' in data:
            slip.remarks = data['remarks']
        slip.updated_by = user
        slip.save()
        return slip
