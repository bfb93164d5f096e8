from datetime import date
from decimal import Decimal

from django.core import mail

from apps.core.exceptions import InvalidStateException, ValidationException
from apps.leave.models import LeaveApplication, LeaveBalance
from apps.leave.services import LeaveApplicationService, LeaveBalanceService
from apps.workflows.models import ApprovalWorkflow
from tests.base import APITestCase
from tests.factories import EmployeeFactory, LeaveBalanceFactory, LeaveTypeFactory

APPLICATIONS_URL = '/api/v1/leave/applications/'


class LeaveTestCase(APITestCase):

    def setUp(self):
        super().setUp()
        self.employee = EmployeeFactory()
        self.leave_type = LeaveTypeFactory(code='CL', name='Casual Leave')
        self.balance = LeaveBalanceFactory(
            employee=self.employee, leave_type=self.leave_type, year=2025,
            allocated_days=Decimal('10'),
        )

    def apply(self, start, end, reason='Family function'):
        return LeaveApplicationService.create(
            self.employee, self.leave_type, start, end, reason, user=self.admin
        )


class LeaveApplicationAPITests(LeaveTestCase):

    def test_create_counts_days_and_opens_workflow(self):
        response = self.post(APPLICATIONS_URL, {
            'employee': str(self.employee.pk),
            'leave_type': str(self.leave_type.pk),
            'start_date': '2025-03-10',
            'end_date': '2025-03-12',
            'reason': 'Family function',
        })

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'Leave application created successfully')
        self.assertEqual(Decimal(body['data']['total_days']), Decimal('3'))
        self.assertEqual(body['data']['approval_status'], LeaveApplication.STATUS_PENDING)

        workflow = ApprovalWorkflow.objects.get(reference_id=body['data']['id'])
        self.assertEqual(workflow.workflow_type, ApprovalWorkflow.TYPE_LEAVE_APPROVAL)
        self.assertEqual(workflow.status, ApprovalWorkflow.STATUS_PENDING)

    def test_create_without_approval_skips_workflow(self):
        leave_type = LeaveTypeFactory(code='WFH', requires_approval=False)
        LeaveBalanceFactory(employee=self.employee, leave_type=leave_type, year=2025)

        application = LeaveApplicationService.create(
            self.employee, leave_type, date(2025, 4, 1), date(2025, 4, 1), 'Errand'
        )

        self.assertFalse(ApprovalWorkflow.objects.filter(reference_id=application.pk).exists())

    def test_end_before_start_is_rejected(self):
        response = self.post(APPLICATIONS_URL, {
            'employee': str(self.employee.pk),
            'leave_type': str(self.leave_type.pk),
            'start_date': '2025-03-12',
            'end_date': '2025-03-10',
            'reason': 'Oops',
        })

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])

    def test_insufficient_balance(self):
        response = self.post(APPLICATIONS_URL, {
            'employee': str(self.employee.pk),
            'leave_type': str(self.leave_type.pk),
            'start_date': '2025-03-01',
            'end_date': '2025-03-11',
            'reason': 'Long trip',
        })

        self.assertEqual(response.status_code, 400)
        message = response.json()['message']
        self.assertTrue(message.startswith('Insufficient leave balance. Available: 10'))
        self.assertIn('Requested: 11 days', message)
        self.assertFalse(LeaveApplication.objects.exists())

    def test_missing_balance_is_not_found(self):
        other_type = LeaveTypeFactory(code='SL', name='Sick Leave')

        response = self.post(APPLICATIONS_URL, {
            'employee': str(self.employee.pk),
            'leave_type': str(other_type.pk),
            'start_date': '2025-03-10',
            'end_date': '2025-03-10',
            'reason': 'Fever',
        })

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'No leave balance found for this leave type')

    def test_overlapping_application_is_rejected(self):
        self.apply(date(2025, 3, 10), date(2025, 3, 12))

        response = self.post(APPLICATIONS_URL, {
            'employee': str(self.employee.pk),
            'leave_type': str(self.leave_type.pk),
            'start_date': '2025-03-12',
            'end_date': '2025-03-13',
            'reason': 'Again',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(LeaveApplication.objects.count(), 1)

    def test_rejected_application_does_not_block_new_one(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))
        LeaveApplicationService.reject(application, self.admin, reason='Busy week')

        second = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        self.assertEqual(second.approval_status, LeaveApplication.STATUS_PENDING)

    def test_approve_deducts_balance_and_closes_workflow(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        with self.captureOnCommitCallbacks(execute=True):
            response = self.post(f'{APPLICATIONS_URL}{application.pk}/approve/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Leave application approved successfully')

        self.balance.refresh_from_db()
        self.assertEqual(self.balance.used_days, Decimal('3'))
        self.assertEqual(self.balance.balance_days, Decimal('7'))

        application.refresh_from_db()
        self.assertEqual(application.approval_status, LeaveApplication.STATUS_APPROVED)
        self.assertEqual(application.approved_by, self.admin)
        self.assertIsNotNone(application.approved_date)

        workflow = ApprovalWorkflow.objects.get(reference_id=application.pk)
        self.assertEqual(workflow.status, ApprovalWorkflow.STATUS_APPROVED)

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [self.employee.email])

    def test_approve_twice_is_refused(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 10))
        LeaveApplicationService.approve(application, self.admin)

        response = self.post(f'{APPLICATIONS_URL}{application.pk}/approve/')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Leave application is already processed')
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.used_days, Decimal('1'))

    def test_failed_approval_leaves_application_pending(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 14))
        LeaveBalance.objects.filter(pk=self.balance.pk).update(
            used_days=Decimal('8'), balance_days=Decimal('2')
        )

        with self.assertRaises(ValidationException):
            LeaveApplicationService.approve(application, self.admin)

        application.refresh_from_db()
        self.balance.refresh_from_db()
        self.assertEqual(application.approval_status, LeaveApplication.STATUS_PENDING)
        self.assertEqual(self.balance.used_days, Decimal('8'))
        self.assertEqual(self.balance.balance_days, Decimal('2'))

    def test_reject_keeps_balance(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        response = self.post(f'{APPLICATIONS_URL}{application.pk}/reject/', {'reason': 'Release week'})

        self.assertEqual(response.status_code, 200)
        application.refresh_from_db()
        self.assertEqual(application.approval_status, LeaveApplication.STATUS_REJECTED)
        self.assertEqual(application.rejection_reason, 'Release week')
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.balance_days, Decimal('10'))
        workflow = ApprovalWorkflow.objects.get(reference_id=application.pk)
        self.assertEqual(workflow.status, ApprovalWorkflow.STATUS_REJECTED)

    def test_cancel_approved_restores_balance(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))
        LeaveApplicationService.approve(application, self.admin)

        response = self.post(f'{APPLICATIONS_URL}{application.pk}/cancel/')

        self.assertEqual(response.status_code, 200)
        application.refresh_from_db()
        self.assertEqual(application.approval_status, LeaveApplication.STATUS_CANCELLED)
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.used_days, Decimal('0'))
        self.assertEqual(self.balance.balance_days, Decimal('10'))

    def test_applicant_cancels_own_pending_application(self):
        applicant = self.make_employee('leave_application_read', 'leave_application_create')
        LeaveBalanceFactory(employee=applicant, leave_type=self.leave_type, year=2025)
        application = LeaveApplicationService.create(
            applicant, self.leave_type, date(2025, 5, 5), date(2025, 5, 6), 'Trip', user=applicant.user
        )

        response = self.post(f'{APPLICATIONS_URL}{application.pk}/cancel/', user=applicant.user)

        self.assertEqual(response.status_code, 200)
        application.refresh_from_db()
        self.assertEqual(application.approval_status, LeaveApplication.STATUS_CANCELLED)

    def test_applicant_cannot_cancel_approved_application(self):
        applicant = self.make_employee('leave_application_read')
        LeaveBalanceFactory(employee=applicant, leave_type=self.leave_type, year=2025)
        application = LeaveApplicationService.create(
            applicant, self.leave_type, date(2025, 5, 5), date(2025, 5, 6), 'Trip'
        )
        LeaveApplicationService.approve(application, self.admin)

        response = self.post(f'{APPLICATIONS_URL}{application.pk}/cancel/', user=applicant.user)

        self.assertEqual(response.status_code, 403)

    def test_cancelled_application_cannot_be_cancelled_again(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 10))
        LeaveApplicationService.cancel(application, self.admin, can_manage=True)

        with self.assertRaises(InvalidStateException):
            LeaveApplicationService.cancel(application, self.admin, can_manage=True)

    def test_update_only_while_pending(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        response = self.patch(f'{APPLICATIONS_URL}{application.pk}/', {'end_date': '2025-03-13'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Decimal(response.json()['data']['total_days']), Decimal('4'))

        LeaveApplicationService.approve(application, self.admin)
        response = self.patch(f'{APPLICATIONS_URL}{application.pk}/', {'reason': 'Changed'})
        self.assertEqual(response.status_code, 400)

    def test_update_refreshes_workflow(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        response = self.patch(f'{APPLICATIONS_URL}{application.pk}/', {'end_date': '2025-03-13'})

        self.assertEqual(response.status_code, 200)
        workflow = ApprovalWorkflow.objects.get(
            reference_id=application.pk, status=ApprovalWorkflow.STATUS_PENDING
        )
        self.assertEqual(workflow.request_data['end_date'], '2025-03-13')
        self.assertEqual(Decimal(workflow.request_data['total_days']), Decimal('4'))
        self.assertEqual(ApprovalWorkflow.objects.filter(reference_id=application.pk).count(), 1)

    def test_update_follows_leave_type_approval_rule(self):
        no_approval = LeaveTypeFactory(code='WFH', requires_approval=False)
        LeaveBalanceFactory(employee=self.employee, leave_type=no_approval, year=2025)
        application = LeaveApplicationService.create(
            self.employee, no_approval, date(2025, 4, 1), date(2025, 4, 2), 'Errand'
        )
        self.assertFalse(ApprovalWorkflow.objects.filter(reference_id=application.pk).exists())

        response = self.patch(f'{APPLICATIONS_URL}{application.pk}/', {'leave_type': str(self.leave_type.pk)})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            ApprovalWorkflow.objects.filter(
                reference_id=application.pk, status=ApprovalWorkflow.STATUS_PENDING
            ).count(),
            1,
        )

        response = self.patch(f'{APPLICATIONS_URL}{application.pk}/', {'leave_type': str(no_approval.pk)})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(ApprovalWorkflow.objects.filter(reference_id=application.pk).exists())

    def test_delete_approved_application_is_refused(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))
        LeaveApplicationService.approve(application, self.admin)

        response = self.delete(f'{APPLICATIONS_URL}{application.pk}/')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Cannot delete an approved leave application')
        self.assertTrue(LeaveApplication.objects.filter(pk=application.pk).exists())

    def test_delete_pending_application_discards_workflow(self):
        application = self.apply(date(2025, 3, 10), date(2025, 3, 12))

        response = self.delete(f'{APPLICATIONS_URL}{application.pk}/')

        self.assertEqual(response.status_code, 200)
        self.assertFalse(LeaveApplication.objects.filter(pk=application.pk).exists())
        self.assertFalse(ApprovalWorkflow.objects.filter(reference_id=application.pk).exists())

    def test_list_stats_and_filters(self):
        approved = self.apply(date(2025, 3, 10), date(2025, 3, 10))
        LeaveApplicationService.approve(approved, self.admin)
        self.apply(date(2025, 6, 1), date(2025, 6, 2))

        response = self.get(APPLICATIONS_URL, {'approval_status': 'pending'})

        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body['meta']['total'], 1)
        self.assertEqual(body['stats']['total_applications'], 2)
        self.assertEqual(body['stats']['approved_applications'], 1)
        self.assertEqual(body['stats']['pending_applications'], 1)

    def test_requires_permission(self):
        user = self.make_user('leave_type_read')

        response = self.get(APPLICATIONS_URL, user=user)

        self.assertEqual(response.status_code, 403)
        self.assertFalse(response.json()['success'])


class LeaveBalanceTests(LeaveTestCase):

    def test_create_defaults_to_type_allocation(self):
        employee = EmployeeFactory()

        response = self.post('/api/v1/leave/balances/', {
            'employee': str(employee.pk),
            'leave_type': str(self.leave_type.pk),
            'year': 2025,
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(Decimal(data['allocated_days']), Decimal('12'))
        self.assertEqual(Decimal(data['used_days']), Decimal('0'))
        self.assertEqual(Decimal(data['balance_days']), Decimal('12'))

    def test_duplicate_balance_is_rejected(self):
        response = self.post('/api/v1/leave/balances/', {
            'employee': str(self.employee.pk),
            'leave_type': str(self.leave_type.pk),
            'year': 2025,
            'allocated_days': '5',
        })

        self.assertEqual(response.status_code, 400)

    def test_update_recomputes_balance(self):
        LeaveBalanceService.deduct(self.employee, self.leave_type, 2025, Decimal('4'))

        response = self.patch(f'/api/v1/leave/balances/{self.balance.pk}/', {'allocated_days': '15'})

        self.assertEqual(response.status_code, 200)
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.balance_days, Decimal('11'))

    def test_allocation_cannot_drop_below_used(self):
        LeaveBalanceService.deduct(self.employee, self.leave_type, 2025, Decimal('4'))

        response = self.patch(f'/api/v1/leave/balances/{self.balance.pk}/', {'allocated_days': '3'})

        self.assertEqual(response.status_code, 400)

    def test_owner_fields_are_read_only_on_update(self):
        LeaveBalanceService.deduct(self.employee, self.leave_type, 2025, Decimal('4'))
        other = EmployeeFactory()

        response = self.patch(f'/api/v1/leave/balances/{self.balance.pk}/', {
            'employee': str(other.pk), 'year': 2026, 'allocated_days': '12',
        })

        self.assertEqual(response.status_code, 200)
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.employee_id, self.employee.pk)
        self.assertEqual(self.balance.year, 2025)
        self.assertEqual(self.balance.used_days, Decimal('4'))
        self.assertEqual(self.balance.balance_days, Decimal('8'))


class LeaveTypeTests(LeaveTestCase):

    def test_duplicate_code(self):
        response = self.post('/api/v1/leave/types/', {
            'name': 'Casual Leave 2', 'code': 'cl', 'max_days_per_year': '5',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Leave type code already exists')

    def test_list_stats(self):
        LeaveTypeFactory(code='OLD', is_active=False)

        body = self.get('/api/v1/leave/types/').json()

        self.assertEqual(body['stats'], {
            'total_leave_types': 2, 'active_leave_types': 1, 'inactive_leave_types': 1,
        })
