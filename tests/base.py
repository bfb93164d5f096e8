from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework_simplejwt.tokens import RefreshToken

from tests.factories import EmployeeFactory, RoleFactory

User = get_user_model()


class APITestCase(TestCase):
    """TestCase with JWT helpers; ``self.admin`` is a superuser."""

    def setUp(self):
        super().setUp()
        self.admin = User.objects.create_superuser(
            email='admin@example.com', password='password123', first_name='Admin'
        )
        self.admin_headers = self.auth_headers(self.admin)

    def auth_headers(self, user):
        token = RefreshToken.for_user(user).access_token
        return {'HTTP_AUTHORIZATION': f'Bearer {token}'}

    def make_user(self, *permissions, email=None):
        """A non-superuser whose role grants exactly ``permissions``."""
        role = RoleFactory(permissions=list(permissions))
        return User.objects.create_user(
            email=email or f'{role.code.lower()}@example.com',
            password='password123',
            first_name='Staff',
            role=role,
        )

    def make_employee(self, *permissions, **kwargs):
        """An employee whose login user carries ``permissions``."""
        user = self.make_user(*permissions)
        return EmployeeFactory(user=user, email=user.email, **kwargs)

    def post(self, url, data=None, user=None):
        headers = self.auth_headers(user) if user else self.admin_headers
        return self.client.post(url, data=data or {}, content_type='application/json', **headers)

    def put(self, url, data, user=None):
        headers = self.auth_headers(user) if user else self.admin_headers
        return self.client.put(url, data=data, content_type='application/json', **headers)

    def patch(self, url, data, user=None):
        headers = self.auth_headers(user) if user else self.admin_headers
        return self.client.patch(url, data=data, content_type='application/json', **headers)

    def get(self, url, params=None, user=None):
        headers = self.auth_headers(user) if user else self.admin_headers
        return self.client.get(url, params or {}, **headers)

    def delete(self, url, user=None):
        headers = self.auth_headers(user) if user else self.admin_headers
        return self.client.delete(url, **headers)
