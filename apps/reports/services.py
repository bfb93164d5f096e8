"""
Report Services - Summary aggregates over filtered querysets

Every builder receives the already-filtered queryset so the summary always
describes exactly the rows the report lists.
"""

from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone


def _total(value):
    return value if value is not None else Decimal('0')


class ReportService:

    @staticmethod
    def attendance_summary(queryset):
        from apps.attendance.models import AttendanceRecord

        summary = queryset.aggregate(
            total_records=Count('id'),
            present=Count('id', filter=Q(status=AttendanceRecord.STATUS_PRESENT)),
            absent=Count('id', filter=Q(status=AttendanceRecord.STATUS_ABSENT)),
            late=Count('id', filter=Q(status=AttendanceRecord.STATUS_LATE)),
            half_day=Count('id', filter=Q(status=AttendanceRecord.STATUS_HALF_DAY)),
            on_leave=Count('id', filter=Q(status=AttendanceRecord.STATUS_ON_LEAVE)),
            total_hours=Sum('total_hours'),
        )
        summary['total_hours'] = _total(summary['total_hours'])
        return summary

    @staticmethod
    def leave_summary(queryset):
        from apps.leave.models import LeaveApplication

        summary = queryset.aggregate(
            total=Count('id'),
            pending=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_PENDING)),
            approved=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_APPROVED)),
            rejected=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_REJECTED)),
            cancelled=Count('id', filter=Q(approval_status=LeaveApplication.STATUS_CANCELLED)),
            total_days=Sum('total_days'),
        )
        summary['total_days'] = _total(summary['total_days'])
        return summary

    @staticmethod
    def payroll_summary(queryset):
        summary = queryset.aggregate(
            total_slips=Count('id'),
            total_basic_salary=Sum('basic_salary'),
            total_earnings=Sum('total_earnings'),
            total_deductions=Sum('total_deductions'),
            total_leave_deductions=Sum('leave_deductions'),
            total_net_salary=Sum('net_salary'),
        )
        for key, value in summary.items():
            if key != 'total_slips':
                summary[key] = _total(value)
        return summary

    @staticmethod
    def hiring_summary(queryset):
        from apps.recruitment.models import Candidate, JobPosting

        counts = dict(queryset.values_list('status').annotate(total=Count('id')).order_by())
        today = timezone.localdate()
        open_postings = JobPosting.objects.filter(is_active=True).filter(
            Q(closing_date__isnull=True) | Q(closing_date__gte=today)
        ).count()
        return {
            'total': sum(counts.values()),
            'by_status': {value: counts.get(value, 0) for value, _ in Candidate.STATUS_CHOICES},
            'open_job_postings': open_postings,
        }

    @staticmethod
    def employee_summary(queryset):
        total = queryset.count()
        active = queryset.filter(is_active=True).count()
        by_department = [
            {
                'department': str(row['department']) if row['department'] else None,
                'department_name': row['department__name'] or 'Unassigned',
                'total': row['total'],
            }
            for row in queryset.values('department', 'department__name')
            .annotate(total=Count('id'))
            .order_by('department__name')
        ]
        return {
            'total': total,
            'active': active,
            'inactive': total - active,
            'by_department': by_department,
        }
