from datetime import date
from decimal import Decimal

from django.test import override_settings

from apps.leave.services import LeaveApplicationService
from apps.payroll.models import PayrollProcessing, SalarySlip, SalaryStructure, SalaryStructureItem
from apps.payroll.services import PayrollProcessingService
from tests.base import APITestCase
from tests.factories import (
    EmployeeFactory,
    LeaveBalanceFactory,
    LeaveTypeFactory,
    SalaryStructureFactory,
    SalaryStructureItemFactory,
)

PROCESSING_URL = '/api/v1/payroll/processing/'
STRUCTURES_URL = '/api/v1/payroll/salary-structures/'
SLIPS_URL = '/api/v1/payroll/salary-slips/'
EMPLOYEES_URL = '/api/v1/employees/'


class PayrollTestCase(APITestCase):

    def setUp(self):
        super().setUp()
        self.employee = EmployeeFactory()
        self.structure = SalaryStructureFactory(employee=self.employee)
        SalaryStructureItemFactory(salary_structure=self.structure)
        SalaryStructureItemFactory(
            salary_structure=self.structure, structure_type='HRA', value=Decimal('10000.00')
        )
        SalaryStructureItemFactory(
            salary_structure=self.structure,
            structure_type='Provident Fund',
            value=Decimal('1800.00'),
            category=SalaryStructureItem.CATEGORY_DEDUCTIONS,
        )

    def approved_leave(self, code, start, end, is_paid=True):
        leave_type = LeaveTypeFactory(code=code, is_paid=is_paid, max_days_per_year=Decimal('30'))
        LeaveBalanceFactory(
            employee=self.employee, leave_type=leave_type, year=start.year, allocated_days=Decimal('30')
        )
        application = LeaveApplicationService.create(self.employee, leave_type, start, end, 'Personal')
        return LeaveApplicationService.approve(application, self.admin)

    def run_payroll(self, month='03', year=2024, **kwargs):
        payload = {'payroll_month': month, 'payroll_year': year, 'employee_ids': [str(self.employee.pk)]}
        payload.update(kwargs)
        return self.post(PROCESSING_URL, payload)


class PayrollProcessingTests(PayrollTestCase):

    def test_process_without_leave(self):
        response = self.run_payroll()

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['message'], 'Payroll processed successfully')
        self.assertEqual(body['data']['total_employees'], 1)
        self.assertEqual(body['data']['status'], PayrollProcessing.STATUS_PROCESSED)

        slip = SalarySlip.objects.get(employee=self.employee)
        self.assertEqual(slip.total_earnings, Decimal('40000.00'))
        self.assertEqual(slip.total_deductions, Decimal('1800.00'))
        self.assertEqual(slip.leave_deductions, Decimal('0.00'))
        self.assertEqual(slip.net_salary, Decimal('38200.00'))

    def test_unpaid_leave_is_deducted_per_day_of_basic(self):
        self.approved_leave('LOP', date(2024, 3, 4), date(2024, 3, 5), is_paid=False)

        self.run_payroll()

        slip = SalarySlip.objects.get(employee=self.employee)
        self.assertEqual(slip.leave_days, Decimal('2'))
        self.assertEqual(slip.leave_deductions, Decimal('2000.00'))
        self.assertEqual(
            slip.net_salary, slip.total_earnings - slip.total_deductions - slip.leave_deductions
        )
        self.assertEqual(slip.net_salary, Decimal('36200.00'))

        payroll = slip.payroll
        self.assertEqual(payroll.total_leave_deductions, Decimal('2000.00'))
        self.assertEqual(payroll.total_net_salary, Decimal('36200.00'))

    def test_only_days_inside_the_month_count(self):
        # Feb 28 - Mar 2 2024: two of the four days fall in March
        self.approved_leave('CL', date(2024, 2, 28), date(2024, 3, 2))

        self.run_payroll()

        slip = SalarySlip.objects.get(employee=self.employee)
        self.assertEqual(slip.leave_days, Decimal('2'))
        self.assertEqual(slip.leave_deductions, Decimal('2000.00'))

    def test_paid_non_deductible_leave_is_ignored(self):
        self.approved_leave('EL', date(2024, 3, 4), date(2024, 3, 8))

        self.run_payroll()

        slip = SalarySlip.objects.get(employee=self.employee)
        self.assertEqual(slip.leave_days, Decimal('0'))
        self.assertEqual(slip.net_salary, Decimal('38200.00'))

    @override_settings(PAYROLL_WORKING_DAYS=20)
    def test_working_days_setting(self):
        self.approved_leave('LOP', date(2024, 3, 4), date(2024, 3, 4), is_paid=False)

        self.run_payroll()

        slip = SalarySlip.objects.get(employee=self.employee)
        self.assertEqual(slip.leave_deductions, Decimal('1500.00'))

    def test_employee_without_active_structure_is_skipped(self):
        other = EmployeeFactory()

        response = self.run_payroll(employee_ids=[str(self.employee.pk), str(other.pk)])

        self.assertEqual(response.json()['data']['total_employees'], 1)
        self.assertFalse(SalarySlip.objects.filter(employee=other).exists())

    def test_process_all(self):
        other = EmployeeFactory()
        structure = SalaryStructureFactory(employee=other)
        SalaryStructureItemFactory(salary_structure=structure, value=Decimal('20000.00'))
        self.approved_leave('LOP', date(2024, 4, 8), date(2024, 4, 9), is_paid=False)

        response = self.post(PROCESSING_URL, {
            'payroll_month': '4', 'payroll_year': 2024, 'process_all': True,
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['payroll_month'], '04')
        self.assertEqual(data['total_employees'], 2)
        self.assertEqual(len(data['salary_slips']), 2)

        payroll = PayrollProcessing.objects.get(pk=data['id'])
        self.assertEqual(payroll.total_earnings, Decimal('60000.00'))
        self.assertEqual(payroll.total_deductions, Decimal('1800.00'))
        self.assertEqual(payroll.total_leave_deductions, Decimal('2000.00'))
        self.assertEqual(
            payroll.total_net_salary,
            payroll.total_earnings - payroll.total_deductions - payroll.total_leave_deductions,
        )
        self.assertEqual(
            payroll.total_net_salary,
            sum(slip.net_salary for slip in payroll.salary_slips.all()),
        )
        self.assertEqual(SalarySlip.objects.get(employee=other).net_salary, Decimal('20000.00'))

    def test_duplicate_month_is_rejected(self):
        self.run_payroll()

        response = self.run_payroll()

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Payroll for this month and year already exists')
        self.assertEqual(PayrollProcessing.objects.count(), 1)

    def test_requires_employees_or_process_all(self):
        response = self.post(PROCESSING_URL, {'payroll_month': '03', 'payroll_year': 2024})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(PayrollProcessing.objects.exists())

    def test_invalid_month(self):
        response = self.run_payroll(month='13')

        self.assertEqual(response.status_code, 400)

    def test_async_run_is_queued(self):
        response = self.run_payroll(**{'async': True})

        self.assertEqual(response.status_code, 202)
        self.assertIn('task_id', response.json()['data'])
        # Celery runs eagerly under test settings
        self.assertTrue(PayrollProcessing.objects.filter(payroll_month='03', payroll_year=2024).exists())

    def test_mark_paid_updates_slips(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk], user=self.admin)

        response = self.patch(f'{PROCESSING_URL}{payroll.pk}/', {'status': 'paid'})

        self.assertEqual(response.status_code, 200)
        slip = SalarySlip.objects.get(payroll=payroll)
        self.assertEqual(slip.status, PayrollProcessing.STATUS_PAID)
        self.assertIsNotNone(slip.paid_date)

    def test_paid_payroll_is_final(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk])
        PayrollProcessingService.update(payroll, status=PayrollProcessing.STATUS_PAID)

        response = self.patch(f'{PROCESSING_URL}{payroll.pk}/', {'status': 'processed'})
        self.assertEqual(response.status_code, 400)

        response = self.delete(f'{PROCESSING_URL}{payroll.pk}/')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Cannot delete paid payroll')
        self.assertTrue(PayrollProcessing.objects.filter(pk=payroll.pk).exists())

    def test_delete_processed_payroll_removes_slips(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk])

        response = self.delete(f'{PROCESSING_URL}{payroll.pk}/')

        self.assertEqual(response.status_code, 200)
        self.assertFalse(SalarySlip.objects.exists())

    def test_retrieve_includes_slips(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk])

        data = self.get(f'{PROCESSING_URL}{payroll.pk}/').json()['data']

        self.assertEqual(len(data['salary_slips']), 1)
        self.assertEqual(data['salary_slips'][0]['employee'], str(self.employee.pk))

    def test_delete_draft_payroll(self):
        payroll = PayrollProcessing.objects.create(payroll_month='06', payroll_year=2024)

        response = self.delete(f'{PROCESSING_URL}{payroll.pk}/')

        self.assertEqual(response.status_code, 200)
        self.assertFalse(PayrollProcessing.objects.filter(pk=payroll.pk).exists())

    def test_slip_of_paid_payroll_cannot_change_status(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk])
        PayrollProcessingService.update(payroll, status=PayrollProcessing.STATUS_PAID)
        slip = SalarySlip.objects.get(payroll=payroll)

        response = self.patch(f'{SLIPS_URL}{slip.pk}/', {'status': PayrollProcessing.STATUS_DRAFT})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Slips of a paid payroll cannot be changed')
        slip.refresh_from_db()
        self.assertEqual(slip.status, PayrollProcessing.STATUS_PAID)

        response = self.patch(f'{SLIPS_URL}{slip.pk}/', {'remarks': 'Transferred'})
        self.assertEqual(response.status_code, 200)

    def test_employee_with_slips_cannot_be_deleted(self):
        payroll = PayrollProcessingService.process('03', 2024, employee_ids=[self.employee.pk])
        PayrollProcessingService.update(payroll, status=PayrollProcessing.STATUS_PAID)

        response = self.delete(f'{EMPLOYEES_URL}{self.employee.pk}/')

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['error']['details']['code'], 'protected')
        self.assertIn('salary slips', body['message'])
        payroll.refresh_from_db()
        self.assertEqual(payroll.total_employees, 1)
        self.assertEqual(payroll.salary_slips.count(), 1)


class SalaryStructureTests(PayrollTestCase):

    def structure_payload(self, **overrides):
        payload = {
            'employee': str(self.employee.pk),
            'start_date': '2025-01-01',
            'end_date': '2025-12-31',
            'status': 'active',
            'structure_items': [
                {'structure_type': 'Basic Salary', 'value': '35000.00', 'category': 'earnings'},
                {'structure_type': 'Professional Tax', 'value': '200.00', 'category': 'deductions'},
            ],
        }
        payload.update(overrides)
        return payload

    def test_create_active_structure_deactivates_previous(self):
        response = self.post(STRUCTURES_URL, self.structure_payload())

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(len(data['structure_items']), 2)
        self.assertEqual(Decimal(data['total_earnings']), Decimal('35000.00'))
        self.assertEqual(Decimal(data['total_deductions']), Decimal('200.00'))

        self.structure.refresh_from_db()
        self.assertEqual(self.structure.status, SalaryStructure.STATUS_INACTIVE)
        self.assertEqual(
            SalaryStructure.objects.filter(employee=self.employee, status=SalaryStructure.STATUS_ACTIVE).count(), 1
        )

    def test_inactive_structure_keeps_current_one(self):
        response = self.post(STRUCTURES_URL, self.structure_payload(status='inactive'))

        self.assertEqual(response.status_code, 201)
        self.structure.refresh_from_db()
        self.assertEqual(self.structure.status, SalaryStructure.STATUS_ACTIVE)

    def test_items_are_required(self):
        response = self.post(STRUCTURES_URL, self.structure_payload(structure_items=[]))

        self.assertEqual(response.status_code, 400)

    def test_update_replaces_items(self):
        response = self.patch(f'{STRUCTURES_URL}{self.structure.pk}/', {
            'structure_items': [
                {'structure_type': 'Basic Salary', 'value': '32000.00', 'category': 'earnings'},
            ],
        })

        self.assertEqual(response.status_code, 200)
        items = list(self.structure.items.values_list('structure_type', 'value'))
        self.assertEqual(items, [('Basic Salary', Decimal('32000.00'))])

    def test_list_stats(self):
        SalaryStructureFactory(employee=EmployeeFactory(), status=SalaryStructure.STATUS_INACTIVE)

        stats = self.get(STRUCTURES_URL).json()['stats']

        self.assertEqual(stats, {'total_structures': 2, 'active_structures': 1, 'inactive_structures': 1})
