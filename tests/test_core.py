"""
Response envelope, error shape, correlation ids and health probes.
"""

import logging
import uuid

from django.test import TestCase

from apps.core.logging import CORRELATION_ID_HEADER, CorrelationIdFilter
from tests.base import APITestCase
from tests.factories import DepartmentFactory


class HealthTests(TestCase):

    def test_health(self):
        response = self.client.get('/health/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'ok'})

    def test_ready(self):
        response = self.client.get('/ready/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ready')


class EnvelopeTests(APITestCase):

    def test_list_envelope(self):
        DepartmentFactory()

        body = self.get('/api/v1/employees/departments/').json()

        self.assertEqual(set(body), {'success', 'message', 'data', 'meta', 'stats'})
        self.assertTrue(body['success'])
        self.assertEqual(
            set(body['meta']), {'total', 'page', 'limit', 'total_pages', 'next', 'previous'}
        )

    def test_retrieve_envelope(self):
        department = DepartmentFactory()

        body = self.get(f'/api/v1/employees/departments/{department.pk}/').json()

        self.assertEqual(body['message'], 'OK')
        self.assertEqual(body['data']['id'], str(department.pk))

    def test_unknown_record(self):
        response = self.get(f'/api/v1/employees/departments/{uuid.uuid4()}/')

        self.assertEqual(response.status_code, 404)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['error']['code'], 404)

    def test_validation_error_shape(self):
        response = self.post('/api/v1/employees/departments/', {'code': 'X'})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['error']['code'], 400)
        self.assertEqual(body['error']['message'], body['message'])
        self.assertIn('name', body['error']['details'])

    def test_domain_error_carries_code_and_field(self):
        DepartmentFactory(code='HR')

        body = self.post('/api/v1/employees/departments/', {'name': 'People', 'code': 'HR'}).json()

        self.assertEqual(body['error']['details'], {'code': 'duplicate', 'field': 'code'})

    def test_page_size_is_capped(self):
        body = self.get('/api/v1/employees/departments/', {'limit': 500}).json()

        self.assertEqual(body['meta']['limit'], 100)


class CorrelationIdTests(TestCase):

    def test_incoming_id_is_echoed(self):
        response = self.client.get('/health/', **{'HTTP_X_CORRELATION_ID': 'abc-123'})

        self.assertEqual(response[CORRELATION_ID_HEADER], 'abc-123')

    def test_id_is_generated(self):
        response = self.client.get('/health/')

        self.assertTrue(response[CORRELATION_ID_HEADER])

    def test_filter_sets_default(self):
        record = logging.LogRecord('test', logging.INFO, __file__, 1, 'message', None, None)

        self.assertTrue(CorrelationIdFilter().filter(record))
        self.assertEqual(record.correlation_id, 'unknown')


class SchemaTests(TestCase):

    def test_schema_generates(self):
        from drf_spectacular.generators import SchemaGenerator

        schema = SchemaGenerator().get_schema(request=None, public=True)

        self.assertIn('/api/v1/leave/applications/{id}/approve/', schema['paths'])
        self.assertIn('/api/v1/reports/payroll/', schema['paths'])
