# apps/users/tests.py

from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.urls import reverse
from rest_framework.authtoken.models import Token

from apps.audit.models import AuditLog
from apps.core.tests.factories import HostelAPIMixin, PASSWORD, make_user, make_hostel

from .models import User, UserRole
from .services import grant_role, revoke_role, issue_token


class UserModelTestCase(TestCase):

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user('Someone@EXAMPLE.com', password=PASSWORD)
        self.assertEqual(user.email, 'someone@example.com')
        self.assertTrue(user.check_password(PASSWORD))

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user('', password=PASSWORD)

    def test_display_name_falls_back_to_email(self):
        user = make_user('plain@example.com')
        self.assertEqual(user.display_name, 'plain@example.com')
        user.first_name = 'Ada'
        self.assertEqual(user.display_name, 'Ada')


class RoleBindingServiceTestCase(TestCase):
    """Test cases for granting and revoking roles"""

    def setUp(self):
        self.hostel = make_hostel('north')
        self.user = make_user('user@example.com')
        self.granter = make_user('granter@example.com')

    def test_super_admin_binding_has_no_hostel(self):
        with self.assertRaises(ValidationError):
            grant_role(self.user, UserRole.Role.SUPER_ADMIN, hostel=self.hostel)

    def test_hostel_role_requires_hostel(self):
        with self.assertRaises(ValidationError):
            grant_role(self.user, UserRole.Role.WARDEN)

    def test_one_binding_per_hostel(self):
        grant_role(self.user, UserRole.Role.STAFF, hostel=self.hostel)
        with self.assertRaises(ValidationError):
            grant_role(self.user, UserRole.Role.WARDEN, hostel=self.hostel)

    def test_one_global_binding(self):
        grant_role(self.user, UserRole.Role.SUPER_ADMIN)
        with self.assertRaises(ValidationError):
            grant_role(self.user, UserRole.Role.SUPER_ADMIN)

    def test_grant_and_revoke_are_audited(self):
        binding = grant_role(self.user, UserRole.Role.STAFF, hostel=self.hostel, granted_by=self.granter)

        grant = AuditLog.objects.get(action='grant')
        self.assertEqual(grant.actor, self.granter)
        self.assertEqual(grant.hostel, self.hostel)
        self.assertEqual(grant.details['role'], 'staff')

        revoke_role(binding, revoked_by=self.granter)

        revoke = AuditLog.objects.get(action='revoke')
        self.assertEqual(revoke.hostel, self.hostel)
        self.assertEqual(revoke.details['user_email'], 'user@example.com')
        self.assertFalse(UserRole.objects.filter(pk=binding.pk).exists())

    def test_issue_token_is_stable_until_rotated(self):
        first = issue_token(self.user)
        self.assertEqual(issue_token(self.user).key, first.key)

        rotated = issue_token(self.user, rotate=True)
        self.assertNotEqual(rotated.key, first.key)
        self.assertEqual(Token.objects.filter(user=self.user).count(), 1)


class AdminUserAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for /api/admin/users/ and /api/admin/role-bindings/"""

    def test_non_admin_is_denied(self):
        self.authenticate(self.warden)
        response = self.client.get(reverse('users:admin_user_list'))
        self.assertError(response, 403, 'RBAC_403')

    def test_create_and_search_users(self):
        self.authenticate(self.admin)
        response = self.client.post(reverse('users:admin_user_list'), {
            'email': 'New.Person@Example.com',
            'first_name': 'New',
            'last_name': 'Person',
            'password': PASSWORD,
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['email'], 'new.person@example.com')
        self.assertNotIn('password', response.json())

        user = User.objects.get(email='new.person@example.com')
        self.assertTrue(user.check_password(PASSWORD))
        self.assertTrue(AuditLog.objects.filter(action='create', model_name='User', object_id=str(user.pk)).exists())

        response = self.client.get(reverse('users:admin_user_list'), {'search': 'new.person'})
        self.assertEqual(response.json()['count'], 1)

    def test_deactivate_user(self):
        self.authenticate(self.admin)
        url = reverse('users:admin_user_detail', kwargs={'pk': self.staff.pk})
        response = self.client.patch(url, {'is_active': False})
        self.assertEqual(response.status_code, 200)
        self.staff.refresh_from_db()
        self.assertFalse(self.staff.is_active)

    def test_issue_and_rotate_token(self):
        self.authenticate(self.admin)
        url = reverse('users:admin_user_token', kwargs={'pk': self.staff.pk})

        first = self.client.post(url).json()['token']
        self.assertEqual(self.client.post(url).json()['token'], first)

        rotated = self.client.post(url, {'rotate': True}).json()['token']
        self.assertNotEqual(rotated, first)
        self.assertEqual(AuditLog.objects.filter(action='token', object_id=str(self.staff.pk)).count(), 3)

    def test_grant_role_binding(self):
        self.authenticate(self.admin)
        user = make_user('newstaff@example.com')
        response = self.client.post(reverse('users:admin_role_binding_list'), {
            'user': str(user.pk),
            'hostel': str(self.hostel.pk),
            'role': 'staff',
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['hostel_code'], 'north')

        binding = UserRole.objects.get(user=user)
        self.assertEqual(binding.granted_by, self.admin)

    def test_duplicate_role_binding_is_rejected(self):
        self.authenticate(self.admin)
        response = self.client.post(reverse('users:admin_role_binding_list'), {
            'user': str(self.staff.pk),
            'hostel': str(self.hostel.pk),
            'role': 'warden',
        })
        self.assertError(response, 400, 'VAL_400')

    def test_filter_and_revoke_role_bindings(self):
        self.authenticate(self.admin)
        response = self.client.get(reverse('users:admin_role_binding_list'), {'hostel': str(self.hostel.pk)})
        self.assertEqual(response.json()['count'], 3)

        response = self.client.get(reverse('users:admin_role_binding_list'), {'role': 'super_admin'})
        self.assertEqual(response.json()['count'], 1)

        binding = UserRole.objects.get(user=self.staff)
        response = self.client.delete(reverse('users:admin_role_binding_detail', kwargs={'pk': binding.pk}))
        self.assertEqual(response.status_code, 204)
        self.assertFalse(UserRole.objects.filter(pk=binding.pk).exists())
        self.assertTrue(AuditLog.objects.filter(action='revoke', actor=self.admin).exists())


class MeAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for the caller's profile"""

    def test_profile_lists_role_bindings(self):
        self.authenticate(self.warden)
        response = self.client.get(reverse('users:me'))
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data['email'], 'warden@example.com')
        self.assertFalse(data['is_super_admin'])
        self.assertEqual([b['role'] for b in data['role_bindings']], ['warden'])

    def test_profile_update_ignores_email(self):
        self.authenticate(self.warden)
        response = self.client.patch(reverse('users:me'), {'first_name': 'Wendy', 'email': 'x@example.com'})
        self.assertEqual(response.status_code, 200)

        self.warden.refresh_from_db()
        self.assertEqual(self.warden.first_name, 'Wendy')
        self.assertEqual(self.warden.email, 'warden@example.com')

    def test_change_password(self):
        self.authenticate(self.warden)
        url = reverse('users:change_password')

        response = self.client.post(url, {'current_password': 'wrong', 'new_password': 'Another-Pass-2024!'})
        self.assertError(response, 400, 'VAL_400')

        response = self.client.post(url, {'current_password': PASSWORD, 'new_password': 'Another-Pass-2024!'})
        self.assertEqual(response.status_code, 204)
        self.warden.refresh_from_db()
        self.assertTrue(self.warden.check_password('Another-Pass-2024!'))

    def test_obtain_token_with_password(self):
        url = reverse('users:obtain_token')
        response = self.client.post(url, {'email': 'warden@example.com', 'password': PASSWORD})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['token'], Token.objects.get(user=self.warden).key)

        response = self.client.post(url, {'email': 'warden@example.com', 'password': 'nope'})
        self.assertError(response, 401, 'AUTH_401')

    def test_obtain_token_with_mixed_case_email(self):
        user = make_user('Alice@Example.com')
        self.assertEqual(user.email, 'alice@example.com')

        response = self.client.post(reverse('users:obtain_token'), {'email': 'Alice@Example.com', 'password': PASSWORD})
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()['token'], Token.objects.get(user=user).key)


class UserCommandsTestCase(TestCase):

    def setUp(self):
        self.hostel = make_hostel('north')
        self.user = make_user('user@example.com')

    def test_grant_role_command(self):
        out = StringIO()
        call_command('grant_role', 'user@example.com', 'staff', '--hostel', 'NORTH', stdout=out)
        self.assertTrue(UserRole.objects.filter(user=self.user, hostel=self.hostel, role='staff').exists())
        self.assertIn('Granted', out.getvalue())

    def test_grant_role_command_rejects_invalid_binding(self):
        with self.assertRaises(CommandError):
            call_command('grant_role', 'user@example.com', 'warden', stdout=StringIO())
        with self.assertRaises(CommandError):
            call_command('grant_role', 'missing@example.com', 'staff', '--hostel', 'north', stdout=StringIO())

    def test_issue_token_command(self):
        out = StringIO()
        call_command('issue_token', 'user@example.com', stdout=out)
        self.assertEqual(out.getvalue().strip(), Token.objects.get(user=self.user).key)

    def test_commands_match_email_case_insensitively(self):
        user = make_user('Alice@Example.com')
        call_command('grant_role', 'Alice@Example.com', 'student', '--hostel', 'north', stdout=StringIO())
        self.assertTrue(UserRole.objects.filter(user=user, hostel=self.hostel, role='student').exists())

        out = StringIO()
        call_command('issue_token', 'ALICE@example.com', stdout=out)
        self.assertEqual(out.getvalue().strip(), Token.objects.get(user=user).key)
