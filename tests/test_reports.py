from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from apps.attendance.models import AttendanceRecord
from apps.leave.services import LeaveApplicationService
from apps.payroll.services import PayrollProcessingService
from apps.recruitment.models import Candidate
from tests.base import APITestCase
from tests.factories import (
    CandidateFactory,
    DepartmentFactory,
    EmployeeFactory,
    JobPostingFactory,
    LeaveBalanceFactory,
    LeaveTypeFactory,
    SalaryStructureFactory,
    SalaryStructureItemFactory,
)

REPORTS_URL = '/api/v1/reports/'


class ReportTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.engineering = DepartmentFactory(name='Engineering')
        self.sales = DepartmentFactory(name='Sales')
        self.alice = EmployeeFactory(department=self.engineering)
        self.bob = EmployeeFactory(department=self.sales)

    def test_requires_report_permission(self):
        user = self.make_user('employee_read')

        response = self.get(f'{REPORTS_URL}employees/', user=user)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['message'], 'Permission required: report_read')

    def test_report_read_is_enough(self):
        user = self.make_user('report_read')

        response = self.get(f'{REPORTS_URL}employees/', user=user)

        self.assertEqual(response.status_code, 200)

    def test_employee_report(self):
        EmployeeFactory(department=self.engineering, is_active=False)

        body = self.get(f'{REPORTS_URL}employees/').json()

        self.assertEqual(body['message'], 'Employee report generated successfully')
        self.assertEqual(body['meta']['total'], 3)
        summary = body['summary']
        self.assertEqual(summary['total'], 3)
        self.assertEqual(summary['inactive'], 1)
        self.assertEqual(
            [(row['department_name'], row['total']) for row in summary['by_department']],
            [('Engineering', 2), ('Sales', 1)],
        )

    def test_employee_report_filtered_by_department(self):
        body = self.get(f'{REPORTS_URL}employees/', {'department': str(self.sales.pk)}).json()

        self.assertEqual(body['meta']['total'], 1)
        self.assertEqual(body['summary']['total'], 1)

    def test_attendance_report(self):
        today = timezone.localdate()
        AttendanceRecord.objects.create(
            employee=self.alice, attendance_date=today, status=AttendanceRecord.STATUS_PRESENT,
            total_hours=Decimal('8.00'),
        )
        AttendanceRecord.objects.create(
            employee=self.bob, attendance_date=today, status=AttendanceRecord.STATUS_LATE,
            total_hours=Decimal('7.50'),
        )
        AttendanceRecord.objects.create(
            employee=self.alice, attendance_date=today - timedelta(days=40),
            status=AttendanceRecord.STATUS_ABSENT,
        )

        body = self.get(f'{REPORTS_URL}attendance/', {
            'date_from': (today - timedelta(days=7)).isoformat(),
            'date_to': today.isoformat(),
        }).json()

        summary = body['summary']
        self.assertEqual(body['meta']['total'], 2)
        self.assertEqual(summary['total_records'], 2)
        self.assertEqual(summary['present'], 1)
        self.assertEqual(summary['late'], 1)
        self.assertEqual(summary['absent'], 0)
        self.assertEqual(Decimal(str(summary['total_hours'])), Decimal('15.5'))

    def test_invalid_filter_value(self):
        response = self.get(f'{REPORTS_URL}attendance/', {'date_from': 'yesterday'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])

    def test_leave_report(self):
        leave_type = LeaveTypeFactory(code='CL')
        for employee in (self.alice, self.bob):
            LeaveBalanceFactory(employee=employee, leave_type=leave_type, year=2025)
        approved = LeaveApplicationService.create(
            self.alice, leave_type, date(2025, 1, 6), date(2025, 1, 8), 'Travel'
        )
        LeaveApplicationService.approve(approved, self.admin)
        LeaveApplicationService.create(self.bob, leave_type, date(2025, 1, 20), date(2025, 1, 20), 'Errand')
        LeaveApplicationService.create(self.bob, leave_type, date(2025, 3, 3), date(2025, 3, 4), 'Later')

        body = self.get(f'{REPORTS_URL}leave/', {'date_from': '2025-01-01', 'date_to': '2025-01-31'}).json()

        summary = body['summary']
        self.assertEqual(summary['total'], 2)
        self.assertEqual(summary['approved'], 1)
        self.assertEqual(summary['pending'], 1)
        self.assertEqual(Decimal(str(summary['total_days'])), Decimal('4'))

    def test_payroll_report(self):
        for employee, basic in ((self.alice, '50000.00'), (self.bob, '30000.00')):
            structure = SalaryStructureFactory(employee=employee)
            SalaryStructureItemFactory(salary_structure=structure, value=Decimal(basic))
        PayrollProcessingService.process('05', 2024, process_all=True)

        body = self.get(f'{REPORTS_URL}payroll/', {'month': '5', 'year': 2024}).json()

        self.assertEqual(body['meta']['total'], 2)
        self.assertEqual(body['summary']['total_slips'], 2)
        self.assertEqual(Decimal(str(body['summary']['total_net_salary'])), Decimal('80000'))

        body = self.get(f'{REPORTS_URL}payroll/', {'department': str(self.sales.pk)}).json()
        self.assertEqual(body['summary']['total_slips'], 1)

    def test_hiring_report(self):
        posting = JobPostingFactory()
        JobPostingFactory(is_active=False)
        CandidateFactory(job_posting=posting)
        CandidateFactory(job_posting=posting, status=Candidate.STATUS_OFFER)
        CandidateFactory(status=Candidate.STATUS_HIRED)

        body = self.get(f'{REPORTS_URL}hiring/', {'job_posting': str(posting.pk)}).json()

        summary = body['summary']
        self.assertEqual(body['message'], 'Hiring report generated successfully')
        self.assertEqual(summary['total'], 2)
        self.assertEqual(summary['by_status']['offer'], 1)
        self.assertEqual(summary['by_status']['hired'], 0)
        # posting plus the one created for the hired candidate
        self.assertEqual(summary['open_job_postings'], 2)

    def test_pagination_meta(self):
        for _ in range(3):
            EmployeeFactory(department=self.sales)

        body = self.get(f'{REPORTS_URL}employees/', {'limit': 2, 'page': 2}).json()

        self.assertEqual(body['meta']['page'], 2)
        self.assertEqual(body['meta']['total'], 5)
        self.assertEqual(len(body['data']), 2)
        self.assertEqual(body['summary']['total'], 5)
