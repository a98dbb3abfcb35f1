# apps/core/tests/tests.py

import uuid

from django.test import TestCase
from django.urls import reverse

from apps.users.models import UserRole

from apps.core.middleware import get_current_hostel
from apps.core.permissions import is_super_admin, get_hostel_role, get_user_hostel_ids

from .factories import HostelAPIMixin, make_user, bind


class HealthCheckTestCase(TestCase):

    def test_health_check_is_public(self):
        response = self.client.get(reverse('core:health'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')
        self.assertEqual(response.json()['database'], 'ok')


class PermissionHelpersTestCase(HostelAPIMixin, TestCase):
    """Test cases for role resolution helpers"""

    def test_super_admin_detection(self):
        self.assertTrue(is_super_admin(self.admin))
        self.assertFalse(is_super_admin(self.warden))

        root = make_user('root@example.com', is_superuser=True, is_staff=True)
        self.assertTrue(is_super_admin(root))

    def test_hostel_role_resolution(self):
        self.assertEqual(get_hostel_role(self.warden, self.hostel), UserRole.Role.WARDEN)
        self.assertEqual(get_hostel_role(self.resident, self.hostel), UserRole.Role.STUDENT)
        self.assertIsNone(get_hostel_role(self.warden, self.other_hostel))
        self.assertEqual(get_hostel_role(self.admin, self.other_hostel), UserRole.Role.SUPER_ADMIN)

    def test_user_hostel_ids(self):
        bind(self.staff, UserRole.Role.STAFF, self.other_hostel)
        self.assertCountEqual(get_user_hostel_ids(self.staff), [self.hostel.pk, self.other_hostel.pk])
        self.assertEqual(get_user_hostel_ids(self.admin), [])


class AuthenticationTestCase(HostelAPIMixin, TestCase):
    """Test cases for bearer token authentication"""

    def setUp(self):
        super().setUp()
        self.url = reverse('hostels:hostel_detail', kwargs={'hostel_pk': self.hostel.pk})

    def test_missing_token(self):
        response = self.client.get(self.url)
        self.assertError(response, 401, 'AUTH_401')

    def test_invalid_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')
        response = self.client.get(self.url)
        self.assertError(response, 401, 'AUTH_401')

    def test_inactive_user_is_refused(self):
        self.authenticate(self.warden)
        self.warden.is_active = False
        self.warden.save()

        response = self.client.get(self.url)
        self.assertError(response, 401, 'AUTH_401')

    def test_valid_token(self):
        self.authenticate(self.warden)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['code'], 'north')


class TenantScopingTestCase(HostelAPIMixin, TestCase):
    """Test cases for hostel resolution and tenant isolation"""

    def test_unknown_hostel_returns_not_found(self):
        self.authenticate(self.admin)
        url = reverse('hostels:hostel_detail', kwargs={'hostel_pk': uuid.uuid4()})
        response = self.client.get(url)
        self.assertError(response, 404, 'NOT_FOUND_404')

    def test_unknown_route_returns_json_envelope(self):
        self.authenticate(self.admin)
        response = self.client.get('/api/does-not-exist/')
        self.assertError(response, 404, 'NOT_FOUND_404')

    def test_user_of_another_hostel_is_denied(self):
        self.authenticate(self.outsider)
        url = reverse('hostels:room_list', kwargs={'hostel_pk': self.hostel.pk})
        response = self.client.get(url)
        self.assertError(response, 403, 'TENANT_403')

    def test_role_not_allowed_for_action(self):
        self.authenticate(self.resident)
        url = reverse('hostels:floor_list', kwargs={'hostel_pk': self.hostel.pk})
        response = self.client.post(url, {'number': 2})
        self.assertError(response, 403, 'RBAC_403')

    def test_super_admin_reaches_every_hostel(self):
        self.authenticate(self.admin)
        for hostel in (self.hostel, self.other_hostel):
            url = reverse('hostels:room_list', kwargs={'hostel_pk': hostel.pk})
            self.assertEqual(self.client.get(url).status_code, 200)

    def test_object_of_another_hostel_is_not_found(self):
        self.authenticate(self.outsider)
        url = reverse('hostels:room_detail', kwargs={'hostel_pk': self.other_hostel.pk, 'pk': self.room.pk})
        response = self.client.get(url)
        self.assertError(response, 404, 'NOT_FOUND_404')

    def test_method_not_allowed(self):
        from apps.hostels.services import create_cleaning_request
        cleaning_request = create_cleaning_request(self.room, self.warden)

        self.authenticate(self.warden)
        url = reverse('hostels:cleaning_request_detail', kwargs={
            'hostel_pk': self.hostel.pk,
            'pk': cleaning_request.pk,
        })
        response = self.client.delete(url)
        self.assertError(response, 405, 'METHOD_405')

    def test_thread_local_is_cleared_after_request(self):
        self.authenticate(self.warden)
        self.client.get(reverse('hostels:hostel_detail', kwargs={'hostel_pk': self.hostel.pk}))
        self.assertIsNone(get_current_hostel())
