import datetime
from decimal import Decimal

import factory

from apps.attendance.models import Shift
from apps.authentication.models import Role, User
from apps.employees.models import Department, Designation, Employee
from apps.leave.models import LeaveBalance, LeaveType
from apps.payroll.models import SalaryStructure, SalaryStructureItem
from apps.recruitment.models import Candidate, HiringStage, JobPosting


class RoleFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Role
        django_get_or_create = ('code',)

    name = factory.Sequence(lambda n: f'Role {n}')
    code = factory.Sequence(lambda n: f'ROLE{n}')
    permissions = factory.LazyFunction(list)


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    email = factory.Sequence(lambda n: f'user{n}@example.com')
    first_name = 'Test'
    last_name = factory.Sequence(lambda n: f'User{n}')
    password = 'testpass123'

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        return model_class.objects.create_user(*args, **kwargs)


class DepartmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Department

    name = factory.Sequence(lambda n: f'Department {n}')
    code = factory.Sequence(lambda n: f'DEP{n:03d}')


class DesignationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Designation

    name = factory.Sequence(lambda n: f'Designation {n}')
    code = factory.Sequence(lambda n: f'DES{n:03d}')


class ShiftFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Shift

    name = factory.Sequence(lambda n: f'Shift {n}')
    code = factory.Sequence(lambda n: f'SH{n:03d}')
    start_time = datetime.time(9, 0)
    end_time = datetime.time(18, 0)


class EmployeeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Employee

    user = factory.SubFactory(UserFactory)
    employee_id = factory.Sequence(lambda n: f'EMP{n:05d}')
    first_name = 'Asha'
    last_name = factory.Sequence(lambda n: f'Rao{n}')
    email = factory.Sequence(lambda n: f'employee{n}@example.com')
    department = factory.SubFactory(DepartmentFactory)
    date_of_joining = datetime.date(2023, 1, 2)
    basic_salary = Decimal('30000.00')


class LeaveTypeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = LeaveType
        django_get_or_create = ('code',)

    name = factory.Sequence(lambda n: f'Leave Type {n}')
    code = factory.Sequence(lambda n: f'LT{n}')
    max_days_per_year = Decimal('12')
    is_paid = True
    requires_approval = True


class LeaveBalanceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = LeaveBalance

    employee = factory.SubFactory(EmployeeFactory)
    leave_type = factory.SubFactory(LeaveTypeFactory)
    year = factory.LazyFunction(lambda: datetime.date.today().year)
    allocated_days = Decimal('12')
    used_days = Decimal('0')
    balance_days = factory.LazyAttribute(lambda o: o.allocated_days - o.used_days)


class SalaryStructureFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SalaryStructure

    employee = factory.SubFactory(EmployeeFactory)
    start_date = datetime.date(2024, 1, 1)
    end_date = datetime.date(2024, 12, 31)
    status = SalaryStructure.STATUS_ACTIVE


class SalaryStructureItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SalaryStructureItem

    salary_structure = factory.SubFactory(SalaryStructureFactory)
    structure_type = SalaryStructureItem.BASIC_SALARY
    value = Decimal('30000.00')
    category = SalaryStructureItem.CATEGORY_EARNINGS


class HiringStageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = HiringStage

    name = factory.Sequence(lambda n: f'Stage {n}')
    code = factory.Sequence(lambda n: f'STG{n}')
    sequence_order = factory.Sequence(lambda n: n)


class JobPostingFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = JobPosting

    job_title = factory.Sequence(lambda n: f'Backend Engineer {n}')
    description = 'Builds APIs'


class CandidateFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Candidate

    name = factory.Sequence(lambda n: f'Candidate {n}')
    email = factory.Sequence(lambda n: f'candidate{n}@example.com')
    job_posting = factory.SubFactory(JobPostingFactory)
