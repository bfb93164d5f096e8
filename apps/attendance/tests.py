from datetime import datetime, time
from decimal import Decimal
from unittest.mock import patch

from django.utils import timezone

from apps.attendance.models import AttendanceHistory, AttendanceRecord
from apps.attendance.services import AttendanceService
from tests.base import APITestCase
from tests.factories import ShiftFactory

PUNCH_URL = '/api/v1/attendance/punch/'
STATUS_URL = '/api/v1/attendance/punch-status/'


def at(hour, minute=0):
    return timezone.make_aware(datetime(2025, 3, 3, hour, minute))


class PunchAPITests(APITestCase):

    def setUp(self):
        super().setUp()
        self.employee = self.make_employee()
        self.user = self.employee.user

    def test_punch_in_then_out(self):
        response = self.post(PUNCH_URL, {
            'action_type': 'punch_in',
            'latitude': '12.97160000',
            'longitude': '77.59460000',
            'address': 'Head office',
        }, user=self.user)

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['message'], 'Punched in successfully')
        self.assertEqual(body['data']['punch_status'], AttendanceRecord.PUNCH_IN)

        response = self.post(PUNCH_URL, {'action_type': 'punch_out'}, user=self.user)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Punched out successfully')
        record = AttendanceRecord.objects.get(employee=self.employee)
        self.assertEqual(record.punch_status, AttendanceRecord.PUNCH_OUT)
        self.assertIsNotNone(record.total_hours)
        self.assertEqual(record.history.count(), 2)

    def test_second_punch_in_is_rejected(self):
        self.post(PUNCH_URL, {'action_type': 'punch_in'}, user=self.user)

        response = self.post(PUNCH_URL, {'action_type': 'punch_in'}, user=self.user)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'You have already punched in today')
        self.assertEqual(AttendanceRecord.objects.count(), 1)

    def test_punch_out_without_punch_in(self):
        response = self.post(PUNCH_URL, {'action_type': 'punch_out'}, user=self.user)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'No punch-in found for today. Please punch in first.')

    def test_second_punch_out_is_rejected(self):
        self.post(PUNCH_URL, {'action_type': 'punch_in'}, user=self.user)
        self.post(PUNCH_URL, {'action_type': 'punch_out'}, user=self.user)

        response = self.post(PUNCH_URL, {'action_type': 'punch_out'}, user=self.user)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'You have already punched out today')

    def test_invalid_action_type(self):
        response = self.post(PUNCH_URL, {'action_type': 'lunch'}, user=self.user)

        self.assertEqual(response.status_code, 400)
        self.assertIn('Invalid action_type', response.json()['message'])

    def test_user_without_employee_profile(self):
        response = self.post(PUNCH_URL, {'action_type': 'punch_in'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'No employee profile found for current user')

    def test_requires_authentication(self):
        response = self.client.post(PUNCH_URL, {'action_type': 'punch_in'}, content_type='application/json')

        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()['success'])

    def test_punch_status_follows_the_day(self):
        data = self.get(STATUS_URL, user=self.user).json()['data']
        self.assertEqual(data['status'], 'not_punch')
        self.assertIsNone(data['attendance'])

        self.post(PUNCH_URL, {'action_type': 'punch_in'}, user=self.user)
        data = self.get(STATUS_URL, user=self.user).json()['data']
        self.assertEqual(data['status'], AttendanceRecord.PUNCH_IN)
        self.assertEqual(data['attendance_date'], timezone.localdate().isoformat())

        self.post(PUNCH_URL, {'action_type': 'punch_out'}, user=self.user)
        data = self.get(STATUS_URL, user=self.user).json()['data']
        self.assertEqual(data['status'], AttendanceRecord.PUNCH_OUT)


class AttendanceServiceTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.shift = ShiftFactory(start_time=time(9, 0), end_time=time(18, 0), grace_minutes=15)
        self.employee = self.make_employee(shift=self.shift)

    def test_punch_in_within_grace_is_present(self):
        with patch('django.utils.timezone.now', return_value=at(9, 10)):
            record = AttendanceService.punch_in(self.employee, {})

        self.assertEqual(record.status, AttendanceRecord.STATUS_PRESENT)

    def test_punch_in_after_grace_is_late(self):
        with patch('django.utils.timezone.now', return_value=at(9, 40)):
            record = AttendanceService.punch_in(self.employee, {})

        self.assertEqual(record.status, AttendanceRecord.STATUS_LATE)

    def test_short_day_is_half_day(self):
        with patch('django.utils.timezone.now', return_value=at(9, 0)):
            AttendanceService.punch_in(self.employee, {})
        with patch('django.utils.timezone.now', return_value=at(11, 30)):
            record = AttendanceService.punch_out(self.employee, {'remarks': 'Doctor visit'})

        self.assertEqual(record.total_hours, Decimal('2.50'))
        self.assertEqual(record.status, AttendanceRecord.STATUS_HALF_DAY)
        self.assertEqual(record.remarks, 'Doctor visit')

    def test_full_day_keeps_status(self):
        with patch('django.utils.timezone.now', return_value=at(9, 0)):
            AttendanceService.punch_in(self.employee, {})
        with patch('django.utils.timezone.now', return_value=at(18, 15)):
            record = AttendanceService.punch_out(self.employee, {})

        self.assertEqual(record.total_hours, Decimal('9.25'))
        self.assertEqual(record.status, AttendanceRecord.STATUS_PRESENT)

    def test_history_records_before_and_after(self):
        with patch('django.utils.timezone.now', return_value=at(9, 0)):
            record = AttendanceService.punch_in(self.employee, {'address': 'Gate 2'})
        with patch('django.utils.timezone.now', return_value=at(17, 0)):
            AttendanceService.punch_out(self.employee, {})

        punch_out = AttendanceHistory.objects.get(attendance=record, action_type=AttendanceRecord.PUNCH_OUT)
        self.assertIsNone(punch_out.old_data['punch_out_time'])
        self.assertEqual(punch_out.new_data['total_hours'], '8.00')


class ShiftAPITests(APITestCase):

    def test_duplicate_code(self):
        ShiftFactory(code='GEN')

        response = self.post('/api/v1/attendance/shifts/', {
            'name': 'General 2', 'code': 'gen', 'start_time': '09:00', 'end_time': '18:00',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Shift code already exists')

    def test_records_are_read_only(self):
        response = self.post('/api/v1/attendance/records/', {})

        self.assertEqual(response.status_code, 405)
