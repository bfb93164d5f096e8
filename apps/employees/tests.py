from datetime import date

from apps.employees.models import Department, Employee
from apps.leave.services import LeaveApplicationService
from tests.base import APITestCase
from tests.factories import (
    DepartmentFactory,
    DesignationFactory,
    EmployeeFactory,
    LeaveBalanceFactory,
    LeaveTypeFactory,
)

EMPLOYEES_URL = '/api/v1/employees/'
DEPARTMENTS_URL = '/api/v1/employees/departments/'


class EmployeeAPITests(APITestCase):
    """
    CRUD, uniqueness and list stats for employees.
    """

    def setUp(self):
        super().setUp()
        self.department = DepartmentFactory(name='Engineering', code='ENG')

    def employee_payload(self, **overrides):
        payload = {
            'employee_id': 'EMP90001',
            'first_name': 'Meera',
            'last_name': 'Iyer',
            'email': 'meera.iyer@example.com',
            'department': str(self.department.pk),
            'date_of_joining': '2024-02-01',
            'basic_salary': '45000.00',
        }
        payload.update(overrides)
        return payload

    def test_create_employee(self):
        response = self.post(EMPLOYEES_URL, self.employee_payload())

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['message'], 'Employee created successfully')
        self.assertEqual(body['data']['full_name'], 'Meera Iyer')
        self.assertEqual(body['data']['department_name'], 'Engineering')

        employee = Employee.objects.get(employee_id='EMP90001')
        self.assertEqual(employee.created_by, self.admin)

    def test_duplicate_employee_id(self):
        EmployeeFactory(employee_id='EMP90001')

        response = self.post(EMPLOYEES_URL, self.employee_payload())

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body['message'], 'Employee employee_id already exists')
        self.assertEqual(body['error']['details']['field'], 'employee_id')

    def test_duplicate_email_is_case_insensitive(self):
        EmployeeFactory(email='meera.iyer@example.com')

        response = self.post(EMPLOYEES_URL, self.employee_payload(email='Meera.Iyer@example.com'))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Employee email already exists')

    def test_joining_date_is_required(self):
        payload = self.employee_payload()
        del payload['date_of_joining']

        response = self.post(EMPLOYEES_URL, payload)

        self.assertEqual(response.status_code, 400)
        self.assertIn('date_of_joining', response.json()['error']['details'])

    def test_cannot_report_to_self(self):
        employee = EmployeeFactory()

        response = self.patch(f'{EMPLOYEES_URL}{employee.pk}/', {'reporting_manager': str(employee.pk)})

        self.assertEqual(response.status_code, 400)

    def test_list_filters_and_stats(self):
        EmployeeFactory(department=self.department)
        EmployeeFactory(department=self.department, is_active=False)
        EmployeeFactory()

        response = self.get(EMPLOYEES_URL, {'department': str(self.department.pk)})

        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body['meta']['total'], 2)
        self.assertEqual(body['stats'], {
            'total_employees': 3, 'active_employees': 2, 'inactive_employees': 1,
        })

    def test_team_lists_active_direct_reports(self):
        manager = EmployeeFactory()
        report = EmployeeFactory(reporting_manager=manager)
        EmployeeFactory(reporting_manager=manager, is_active=False)

        response = self.get(f'{EMPLOYEES_URL}{manager.pk}/team/')

        ids = [row['id'] for row in response.json()['data']]
        self.assertEqual(ids, [str(report.pk)])

    def test_delete_is_permanent(self):
        employee = EmployeeFactory()

        response = self.delete(f'{EMPLOYEES_URL}{employee.pk}/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Employee deleted successfully')
        self.assertFalse(Employee.objects.filter(pk=employee.pk).exists())

    def test_employee_with_leave_history_cannot_be_deleted(self):
        employee = EmployeeFactory()
        leave_type = LeaveTypeFactory(code='CL')
        LeaveBalanceFactory(employee=employee, leave_type=leave_type, year=2025)
        LeaveApplicationService.create(employee, leave_type, date(2025, 3, 10), date(2025, 3, 10), 'Errand')

        response = self.delete(f'{EMPLOYEES_URL}{employee.pk}/')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['message'],
            'Cannot delete this record because it is referenced by leave applications',
        )
        self.assertTrue(Employee.objects.filter(pk=employee.pk).exists())

    def test_read_permission_does_not_allow_create(self):
        user = self.make_user('employee_read')

        self.assertEqual(self.get(EMPLOYEES_URL, user=user).status_code, 200)
        response = self.post(EMPLOYEES_URL, self.employee_payload(), user=user)
        self.assertEqual(response.status_code, 403)


class DepartmentAPITests(APITestCase):

    def test_create_upper_cases_code(self):
        response = self.post(DEPARTMENTS_URL, {'name': 'Finance', 'code': 'fin'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['code'], 'FIN')

    def test_duplicate_code(self):
        DepartmentFactory(code='FIN')

        response = self.post(DEPARTMENTS_URL, {'name': 'Finance Ops', 'code': 'fin'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Department code already exists')
        self.assertEqual(Department.objects.filter(code='FIN').count(), 1)

    def test_update_keeps_own_code(self):
        department = DepartmentFactory(code='OPS')

        response = self.put(f'{DEPARTMENTS_URL}{department.pk}/', {'name': 'Operations', 'code': 'OPS'})

        self.assertEqual(response.status_code, 200)
        department.refresh_from_db()
        self.assertEqual(department.name, 'Operations')

    def test_cannot_be_own_parent(self):
        department = DepartmentFactory()

        response = self.patch(f'{DEPARTMENTS_URL}{department.pk}/', {'parent': str(department.pk)})

        self.assertEqual(response.status_code, 400)

    def test_list_stats(self):
        staffed = DepartmentFactory()
        DepartmentFactory(is_active=False)
        EmployeeFactory(department=staffed)

        stats = self.get(DEPARTMENTS_URL).json()['stats']

        self.assertEqual(stats['total_departments'], 2)
        self.assertEqual(stats['active_departments'], 1)
        self.assertEqual(stats['departments_with_employees'], 1)


class DesignationAPITests(APITestCase):

    def test_duplicate_name(self):
        DesignationFactory(name='Software Engineer', code='SE')

        response = self.post('/api/v1/employees/designations/', {'name': 'software engineer', 'code': 'SE2'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Designation name already exists')
