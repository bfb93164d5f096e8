from datetime import date
from decimal import Decimal

from apps.leave.models import LeaveApplication
from apps.leave.services import LeaveApplicationService
from apps.workflows.models import ApprovalWorkflow, WorkflowStep
from apps.workflows.services import WorkflowService
from tests.base import APITestCase
from tests.factories import EmployeeFactory, LeaveBalanceFactory, LeaveTypeFactory

WORKFLOWS_URL = '/api/v1/workflows/'


class WorkflowAPITests(APITestCase):

    def test_create_general_workflow(self):
        approver = self.make_user('approval_workflow_read')

        response = self.post(WORKFLOWS_URL, {
            'workflow_type': 'GENERAL',
            'reference_number': 'REQ-001',
            'request_data': {'item': 'Laptop'},
            'steps': [
                {'step_name': 'Manager', 'assigned_user': str(approver.pk)},
                {'step_name': 'Finance'},
            ],
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['status'], ApprovalWorkflow.STATUS_PENDING)
        self.assertEqual(data['current_step'], 1)
        self.assertEqual(data['total_steps'], 2)
        self.assertEqual([step['step_name'] for step in data['step_details']], ['Manager', 'Finance'])
        self.assertEqual(data['requested_by'], str(self.admin.pk))

    def test_default_single_step(self):
        workflow = WorkflowService.open('GENERAL', requested_by=self.admin)

        self.assertEqual(workflow.total_steps, 1)
        self.assertEqual(workflow.steps.get().step_name, 'Approval')

    def test_reference_id_needs_type(self):
        response = self.post(WORKFLOWS_URL, {
            'workflow_type': 'GENERAL',
            'reference_id': '6f1c2d4e-8b9a-4c3d-9e2f-1a2b3c4d5e6f',
        })

        self.assertEqual(response.status_code, 400)

    def test_steps_advance_then_finish(self):
        workflow = WorkflowService.open(
            'GENERAL', requested_by=self.admin, steps=[{'step_name': 'One'}, {'step_name': 'Two'}]
        )

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/approve/', {'remarks': 'ok'})
        self.assertEqual(response.json()['message'], 'Workflow step approved successfully')
        self.assertEqual(response.json()['data']['current_step'], 2)
        self.assertEqual(response.json()['data']['status'], ApprovalWorkflow.STATUS_PENDING)

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/approve/')
        self.assertEqual(response.json()['message'], 'Workflow approved successfully')

        workflow.refresh_from_db()
        self.assertEqual(workflow.status, ApprovalWorkflow.STATUS_APPROVED)
        self.assertEqual(workflow.final_approved_by, self.admin)
        self.assertEqual(
            list(workflow.steps.values_list('status', flat=True)),
            [WorkflowStep.STATUS_APPROVED, WorkflowStep.STATUS_APPROVED],
        )

    def test_reject_skips_remaining_steps(self):
        workflow = WorkflowService.open(
            'GENERAL', requested_by=self.admin, steps=[{'step_name': 'One'}, {'step_name': 'Two'}]
        )

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/reject/', {'reason': 'Over budget'})

        self.assertEqual(response.status_code, 200)
        workflow.refresh_from_db()
        self.assertEqual(workflow.status, ApprovalWorkflow.STATUS_REJECTED)
        self.assertEqual(workflow.rejection_reason, 'Over budget')
        self.assertEqual(
            list(workflow.steps.values_list('status', flat=True)),
            [WorkflowStep.STATUS_REJECTED, WorkflowStep.STATUS_SKIPPED],
        )

    def test_processed_workflow_cannot_be_decided_again(self):
        workflow = WorkflowService.open('GENERAL', requested_by=self.admin)
        WorkflowService.approve(workflow, self.admin)

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/reject/')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Workflow is already processed')

    def test_assignee_may_decide_with_read_access(self):
        approver = self.make_user('approval_workflow_read')
        workflow = WorkflowService.open(
            'GENERAL', requested_by=self.admin, steps=[{'step_name': 'Manager', 'assigned_user': approver}]
        )

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/approve/', user=approver)

        self.assertEqual(response.status_code, 200)

    def test_role_assignee(self):
        approver = self.make_user('approval_workflow_read')
        workflow = WorkflowService.open(
            'GENERAL', requested_by=self.admin, steps=[{'step_name': 'HR', 'assigned_role': approver.role}]
        )

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/approve/', user=approver)

        self.assertEqual(response.status_code, 200)

    def test_other_reader_is_refused(self):
        assignee = self.make_user('approval_workflow_read')
        bystander = self.make_user('approval_workflow_read')
        workflow = WorkflowService.open(
            'GENERAL', requested_by=self.admin, steps=[{'step_name': 'Manager', 'assigned_user': assignee}]
        )

        response = self.post(f'{WORKFLOWS_URL}{workflow.pk}/approve/', user=bystander)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['message'], 'You are not assigned to the current workflow step')

    def test_steps_cannot_change_after_creation(self):
        workflow = WorkflowService.open('GENERAL', requested_by=self.admin)

        response = self.patch(f'{WORKFLOWS_URL}{workflow.pk}/', {'steps': [{'step_name': 'Other'}]})

        self.assertEqual(response.status_code, 400)

    def test_list_stats(self):
        WorkflowService.open('GENERAL', requested_by=self.admin)
        approved = WorkflowService.open('GENERAL', requested_by=self.admin)
        WorkflowService.approve(approved, self.admin)

        body = self.get(WORKFLOWS_URL, {'status': 'pending'}).json()

        self.assertEqual(body['meta']['total'], 1)
        self.assertEqual(body['stats']['total_workflows'], 2)
        self.assertEqual(body['stats']['approved_workflows'], 1)


class LeaveWorkflowTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.manager = self.make_employee('approval_workflow_read')
        self.employee = EmployeeFactory(reporting_manager=self.manager)
        self.leave_type = LeaveTypeFactory(code='CL')
        self.balance = LeaveBalanceFactory(
            employee=self.employee, leave_type=self.leave_type, year=2025, allocated_days=Decimal('12')
        )
        self.application = LeaveApplicationService.create(
            self.employee, self.leave_type, date(2025, 8, 4), date(2025, 8, 5), 'Wedding'
        )
        self.workflow = ApprovalWorkflow.objects.get(reference_id=self.application.pk)

    def test_manager_step_comes_first(self):
        steps = list(self.workflow.steps.all())

        self.assertEqual(self.workflow.total_steps, 2)
        self.assertEqual(steps[0].assigned_user, self.manager.user)
        self.assertEqual(steps[1].step_name, 'HR approval')

    def test_final_approval_approves_leave(self):
        self.post(f'{WORKFLOWS_URL}{self.workflow.pk}/approve/', user=self.manager.user)

        self.application.refresh_from_db()
        self.assertEqual(self.application.approval_status, LeaveApplication.STATUS_PENDING)

        response = self.post(f'{WORKFLOWS_URL}{self.workflow.pk}/approve/')

        self.assertEqual(response.status_code, 200)
        self.application.refresh_from_db()
        self.assertEqual(self.application.approval_status, LeaveApplication.STATUS_APPROVED)
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.used_days, Decimal('2'))

    def test_rejection_rejects_leave(self):
        self.post(f'{WORKFLOWS_URL}{self.workflow.pk}/reject/', {'reason': 'Peak season'}, user=self.manager.user)

        self.application.refresh_from_db()
        self.assertEqual(self.application.approval_status, LeaveApplication.STATUS_REJECTED)
        self.assertEqual(self.application.rejection_reason, 'Peak season')
        self.balance.refresh_from_db()
        self.assertEqual(self.balance.used_days, Decimal('0'))

    def test_failed_leave_approval_keeps_workflow_pending(self):
        WorkflowService.approve(self.workflow, self.admin)
        self.balance.used_days = Decimal('11')
        self.balance.recalculate()
        self.balance.save()

        response = self.post(f'{WORKFLOWS_URL}{self.workflow.pk}/approve/')

        self.assertEqual(response.status_code, 400)
        self.workflow.refresh_from_db()
        self.assertEqual(self.workflow.status, ApprovalWorkflow.STATUS_PENDING)
        self.application.refresh_from_db()
        self.assertEqual(self.application.approval_status, LeaveApplication.STATUS_PENDING)
