"""
Login, profile, logout and role management.
"""

from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken
from rest_framework_simplejwt.tokens import RefreshToken

from apps.authentication.models import Role
from tests.base import APITestCase


class LoginTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.user = self.make_user('employee_read', email='staff@example.com')

    def login(self, email, password):
        return self.client.post(
            '/api/v1/auth/login/', {'email': email, 'password': password}, content_type='application/json'
        )

    def test_login_returns_tokens_and_profile(self):
        response = self.login('staff@example.com', 'password123')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'Login successful')
        self.assertIn('access', body['data'])
        self.assertIn('refresh', body['data'])
        self.assertEqual(body['data']['user']['permissions'], ['employee_read'])

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_wrong_password(self):
        response = self.login('staff@example.com', 'nope')

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['message'], 'Invalid email or password.')

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.user.save()

        response = self.login('staff@example.com', 'password123')

        self.assertEqual(response.status_code, 400)

    def test_me(self):
        response = self.get('/api/v1/auth/me/', user=self.user)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['email'], 'staff@example.com')

    def test_me_requires_token(self):
        response = self.client.get('/api/v1/auth/me/')

        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()['success'])
        self.assertEqual(response.json()['error']['code'], 401)

    def test_logout_blacklists_refresh_token(self):
        refresh = RefreshToken.for_user(self.user)

        response = self.post('/api/v1/auth/logout/', {'refresh_token': str(refresh)}, user=self.user)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Logged out successfully')
        self.assertTrue(BlacklistedToken.objects.filter(token__jti=refresh['jti']).exists())

        response = self.client.post(
            '/api/v1/auth/token/refresh/', {'refresh': str(refresh)}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 401)

    def test_change_password(self):
        response = self.post('/api/v1/auth/password/change/', {
            'current_password': 'password123',
            'new_password': 'Tr1cky-Passw0rd',
            'new_password_confirm': 'Tr1cky-Passw0rd',
        }, user=self.user)

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Tr1cky-Passw0rd'))

    def test_change_password_mismatch(self):
        response = self.post('/api/v1/auth/password/change/', {
            'current_password': 'password123',
            'new_password': 'Tr1cky-Passw0rd',
            'new_password_confirm': 'Other-Passw0rd',
        }, user=self.user)

        self.assertEqual(response.status_code, 400)


class RolePermissionTests(APITestCase):

    def test_wildcard_role_grants_everything(self):
        user = self.make_user('*')

        self.assertEqual(self.get('/api/v1/payroll/processing/', user=user).status_code, 200)
        self.assertEqual(self.get('/api/v1/reports/leave/', user=user).status_code, 200)

    def test_missing_code_is_named_in_message(self):
        user = self.make_user('employee_read')

        response = self.get('/api/v1/payroll/salary-slips/', user=user)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['message'], 'Permission required: salary_slip_read')

    def test_inactive_role_grants_nothing(self):
        user = self.make_user('employee_read')
        Role.objects.filter(pk=user.role_id).update(is_active=False)

        response = self.get('/api/v1/employees/', user=user)

        self.assertEqual(response.status_code, 403)

    def test_create_role_upper_cases_code(self):
        response = self.post('/api/v1/auth/roles/', {
            'name': 'Payroll Officer',
            'code': 'payroll_officer',
            'permissions': ['payroll_processing_read', 'payroll_processing_create'],
        })

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['code'], 'PAYROLL_OFFICER')

    def test_permissions_must_be_a_list(self):
        response = self.post('/api/v1/auth/roles/', {
            'name': 'Broken', 'code': 'BROKEN', 'permissions': 'employee_read',
        })

        self.assertEqual(response.status_code, 400)

    def test_create_user(self):
        role = Role.objects.create(name='Clerk', code='CLERK', permissions=['employee_read'])

        response = self.post('/api/v1/auth/users/', {
            'email': 'clerk@example.com',
            'password': 'Clerk-Passw0rd',
            'first_name': 'Sam',
            'role': str(role.pk),
        })

        self.assertEqual(response.status_code, 201)
        self.assertNotIn('password', response.json()['data'])
        login = self.client.post(
            '/api/v1/auth/login/',
            {'email': 'clerk@example.com', 'password': 'Clerk-Passw0rd'},
            content_type='application/json',
        )
        self.assertEqual(login.status_code, 200)
