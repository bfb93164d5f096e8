import os
import sys
from datetime import time
from decimal import Decimal

import django

# Add current directory to path
sys.path.append(os.getcwd())

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')
django.setup()

from decouple import config  # noqa: E402

from apps.attendance.models import Shift  # noqa: E402
from apps.authentication.models import Role, User  # noqa: E402
from apps.leave.models import LeaveType  # noqa: E402
from apps.recruitment.models import HiringStage  # noqa: E402

ROLES = [
    ('HR Administrator', 'HR_ADMIN', ['*']),
    ('Manager', 'MANAGER', [
        'employee_read', 'attendance_read', 'leave_application_read',
        'leave_application_update', 'approval_workflow_read', 'report_read',
    ]),
    ('Employee', 'EMPLOYEE', [
        'attendance_create', 'attendance_read', 'leave_type_read', 'leave_balance_read',
        'leave_application_create', 'leave_application_read', 'approval_workflow_read',
    ]),
]

LEAVE_TYPES = [
    ('Casual Leave', 'CL', Decimal('12'), True),
    ('Sick Leave', 'SL', Decimal('12'), True),
    ('Earned Leave', 'EL', Decimal('15'), True),
    ('Loss of Pay', 'LOP', Decimal('30'), False),
]

HIRING_STAGES = [
    ('Screening', 'SCREEN'),
    ('Technical Interview', 'TECH'),
    ('HR Interview', 'HR'),
    ('Offer', 'OFFER'),
]


def setup():
    print("Setting up initial data...")

    # 1. Roles
    for name, code, permissions in ROLES:
        _, created = Role.objects.get_or_create(
            code=code, defaults={'name': name, 'permissions': permissions}
        )
        print(f"{'Created' if created else 'Role already exists'}: {name}")

    # 2. Superuser
    email = config('ADMIN_EMAIL', default='admin@example.com')
    if not User.objects.filter(email=email).exists():
        User.objects.create_superuser(
            email=email,
            password=config('ADMIN_PASSWORD', default='adminpassword123'),
            first_name="Admin",
            last_name="User",
        )
        print(f"Created superuser: {email}")
    else:
        print(f"Superuser already exists: {email}")

    # 3. Default shift
    Shift.objects.get_or_create(
        code='GEN',
        defaults={'name': 'General Shift', 'start_time': time(9, 30), 'end_time': time(18, 30)},
    )

    # 4. Leave types
    for name, code, days, is_paid in LEAVE_TYPES:
        LeaveType.objects.get_or_create(
            code=code, defaults={'name': name, 'max_days_per_year': days, 'is_paid': is_paid}
        )

    # 5. Hiring pipeline
    for order, (name, code) in enumerate(HIRING_STAGES, start=1):
        HiringStage.objects.get_or_create(code=code, defaults={'name': name, 'sequence_order': order})

    print("Initial setup complete!")


if __name__ == "__main__":
    setup()
