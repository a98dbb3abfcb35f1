# apps/audit/tests.py

from datetime import timedelta
from io import StringIO

from django.contrib.auth.models import AnonymousUser
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, RequestFactory
from django.urls import reverse
from django.utils import timezone

from apps.core.tests.factories import HostelAPIMixin

from .models import AuditLog
from .services import record_action, get_client_ip


class RecordActionTestCase(HostelAPIMixin, TestCase):
    """Test cases for writing audit entries"""

    def setUp(self):
        super().setUp()
        self.factory = RequestFactory()

    def test_request_metadata_is_captured(self):
        request = self.factory.post(
            '/',
            HTTP_USER_AGENT='pytest-agent',
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1',
        )
        entry = record_action('update', self.room, actor=self.warden, request=request)

        self.assertEqual(entry.ip_address, '203.0.113.7')
        self.assertEqual(entry.user_agent, 'pytest-agent')
        self.assertEqual(entry.model_name, 'Room')
        self.assertEqual(entry.object_id, str(self.room.pk))
        self.assertEqual(entry.hostel, self.hostel)
        self.assertEqual(entry.actor, self.warden)

    def test_remote_addr_fallback(self):
        request = self.factory.get('/', REMOTE_ADDR='198.51.100.2')
        self.assertEqual(get_client_ip(request), '198.51.100.2')

    def test_anonymous_actor_is_dropped(self):
        entry = record_action('update', self.hostel, actor=AnonymousUser())
        self.assertIsNone(entry.actor)
        self.assertEqual(entry.hostel, self.hostel)

    def test_explicit_hostel_wins(self):
        entry = record_action('token', self.warden, actor=self.admin, hostel=None)
        self.assertIsNone(entry.hostel)
        self.assertEqual(entry.model_name, 'User')


class AuditLogAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for the audit trail endpoints"""

    def setUp(self):
        super().setUp()
        AuditLog.objects.all().delete()
        record_action('update', self.room, actor=self.warden, details={'fields': ['notes']})
        record_action('assign', self.student, actor=self.warden)
        record_action('create', self.other_hostel, actor=self.admin)
        self.url = reverse('audit:hostel_auditlog_list', kwargs={'hostel_pk': self.hostel.pk})

    def test_warden_sees_own_hostel_only(self):
        self.authenticate(self.warden)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)

        results = response.json()['results']
        self.assertEqual(len(results), 2)
        self.assertTrue(all(row['hostel_code'] == 'north' for row in results))

    def test_filter_by_action(self):
        self.authenticate(self.warden)
        response = self.client.get(self.url, {'action': 'assign'})
        results = response.json()['results']
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]['model_name'], 'Student')

    def test_staff_and_students_are_denied(self):
        for user in (self.staff, self.resident):
            self.authenticate(user)
            self.assertError(self.client.get(self.url), 403, 'RBAC_403')

    def test_outsider_is_denied(self):
        self.authenticate(self.outsider)
        self.assertError(self.client.get(self.url), 403, 'TENANT_403')

    def test_admin_trail_filters_by_hostel(self):
        self.authenticate(self.admin)
        url = reverse('audit:admin_auditlog_list')

        response = self.client.get(url)
        self.assertEqual(response.json()['count'], 3)

        response = self.client.get(url, {'hostel': str(self.other_hostel.pk)})
        self.assertEqual(response.json()['count'], 1)

        response = self.client.get(url, {'search': 'warden@'})
        self.assertEqual(response.json()['count'], 2)

    def test_admin_trail_requires_super_admin(self):
        self.authenticate(self.warden)
        response = self.client.get(reverse('audit:admin_auditlog_list'))
        self.assertError(response, 403, 'RBAC_403')


class PruneAuditLogsTestCase(TestCase):

    def setUp(self):
        self.old = record_action('update', model_name='Room', object_id='old', hostel=None)
        self.recent = record_action('update', model_name='Room', object_id='recent', hostel=None)
        AuditLog.objects.filter(pk=self.old.pk).update(timestamp=timezone.now() - timedelta(days=400))

    def test_dry_run_keeps_entries(self):
        out = StringIO()
        call_command('prune_audit_logs', '--days', '365', '--dry-run', stdout=out)
        self.assertIn('1 audit entries', out.getvalue())
        self.assertEqual(AuditLog.objects.count(), 2)

    def test_prune_removes_stale_entries(self):
        call_command('prune_audit_logs', '--days', '365', stdout=StringIO())
        self.assertEqual(list(AuditLog.objects.values_list('object_id', flat=True)), ['recent'])

    def test_invalid_window(self):
        with self.assertRaises(CommandError):
            call_command('prune_audit_logs', '--days', '0', stdout=StringIO())
