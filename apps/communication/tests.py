# apps/communication/tests.py

from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.audit.models import AuditLog
from apps.core.tests.factories import HostelAPIMixin, bind
from apps.users.models import UserRole

from .models import Announcement
from .services import visible_announcements


def make_announcement(hostel, title, **extra):
    extra.setdefault('body', f'{title} body')
    return Announcement.objects.create(hostel=hostel, title=title, **extra)


class AnnouncementModelTestCase(HostelAPIMixin, TestCase):

    def test_publishing_sets_timestamp(self):
        announcement = make_announcement(self.hostel, 'Water cut', is_published=True)
        self.assertIsNotNone(announcement.published_at)
        self.assertTrue(announcement.is_active)

    def test_expired_is_not_live(self):
        past = timezone.now() - timedelta(days=1)
        make_announcement(self.hostel, 'Old news', is_published=True, expires_at=past)
        make_announcement(self.hostel, 'Draft')
        self.assertFalse(Announcement.objects.live().exists())


class AnnouncementAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for hostel announcements"""

    def setUp(self):
        super().setUp()
        self.list_url = reverse('communication:announcement_list', kwargs={'hostel_pk': self.hostel.pk})

    def publish_url(self, announcement):
        return reverse(
            'communication:announcement_publish',
            kwargs={'hostel_pk': self.hostel.pk, 'pk': announcement.pk}
        )

    def test_warden_creates_draft(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'title': 'Fire drill',
            'body': 'Assemble at the gate at 9am.',
            'priority': 'high',
        })
        self.assertEqual(response.status_code, 201, response.content)

        data = response.json()
        self.assertEqual(data['author'], str(self.warden.pk))
        self.assertEqual(data['author_name'], 'Wanda Warden')
        self.assertFalse(data['is_published'])
        self.assertTrue(AuditLog.objects.filter(action='create', model_name='Announcement').exists())

    def test_students_cannot_post(self):
        self.authenticate(self.resident)
        response = self.client.post(self.list_url, {'title': 'Party', 'body': 'Tonight'})
        self.assertError(response, 403, 'RBAC_403')

    def test_readers_see_live_announcements_for_their_audience(self):
        make_announcement(self.hostel, 'Everyone', is_published=True)
        make_announcement(self.hostel, 'Students', is_published=True, target_audience='students')
        make_announcement(self.hostel, 'Staff', is_published=True, target_audience='staff')
        make_announcement(self.hostel, 'Draft')
        make_announcement(
            self.hostel, 'Expired', is_published=True,
            expires_at=timezone.now() - timedelta(hours=1)
        )

        self.authenticate(self.resident)
        titles = {a['title'] for a in self.client.get(self.list_url).json()['results']}
        self.assertEqual(titles, {'Everyone', 'Students'})

        self.authenticate(self.staff)
        titles = {a['title'] for a in self.client.get(self.list_url).json()['results']}
        self.assertEqual(titles, {'Everyone', 'Staff'})

        self.authenticate(self.warden)
        self.assertEqual(self.client.get(self.list_url).json()['count'], 5)
        response = self.client.get(self.list_url, {'is_published': 'false'})
        self.assertEqual([a['title'] for a in response.json()['results']], ['Draft'])

    def test_draft_is_hidden_from_students(self):
        draft = make_announcement(self.hostel, 'Draft')
        self.authenticate(self.resident)
        url = reverse('communication:announcement_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': draft.pk})
        self.assertError(self.client.get(url), 404, 'NOT_FOUND_404')

    def test_publish_once(self):
        draft = make_announcement(self.hostel, 'Menu change')
        self.authenticate(self.warden)

        response = self.client.post(self.publish_url(draft))
        self.assertEqual(response.status_code, 200, response.content)
        self.assertTrue(response.json()['is_published'])
        self.assertIsNotNone(response.json()['published_at'])
        self.assertTrue(AuditLog.objects.filter(action='publish', object_id=str(draft.pk)).exists())

        response = self.client.post(self.publish_url(draft))
        self.assertError(response, 409, 'CONFLICT_409')

    def test_is_published_only_changes_through_publish(self):
        draft = make_announcement(self.hostel, 'Menu change')
        self.authenticate(self.warden)
        url = reverse('communication:announcement_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': draft.pk})
        response = self.client.patch(url, {'is_published': True})
        self.assertError(response, 400, 'VAL_400')

    def test_expiry_before_publication(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'title': 'Backwards',
            'body': 'Expires before it is published.',
            'is_published': True,
            'expires_at': (timezone.now() - timedelta(days=1)).isoformat(),
        })
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('expires_at', error['details'])

        published = make_announcement(self.hostel, 'Scheduled', is_published=True)
        url = reverse('communication:announcement_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': published.pk})
        response = self.client.patch(url, {
            'expires_at': (published.published_at - timedelta(minutes=5)).isoformat(),
        })
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('expires_at', error['details'])

    def test_outsider_is_denied(self):
        self.authenticate(self.outsider)
        self.assertError(self.client.get(self.list_url), 403, 'TENANT_403')


class MyAnnouncementsTestCase(HostelAPIMixin, TestCase):
    """Test cases for the caller's announcement feed"""

    def setUp(self):
        super().setUp()
        make_announcement(self.hostel, 'North news', is_published=True)
        make_announcement(self.hostel, 'North staff', is_published=True, target_audience='staff')
        make_announcement(self.other_hostel, 'South news', is_published=True)
        make_announcement(self.other_hostel, 'South draft')

    def test_feed_spans_bound_hostels(self):
        bind(self.resident, UserRole.Role.STUDENT, self.other_hostel)
        self.authenticate(self.resident)

        response = self.client.get(reverse('communication:my_announcements'))
        self.assertEqual(response.status_code, 200)
        titles = {a['title'] for a in response.json()['results']}
        self.assertEqual(titles, {'North news', 'South news'})

        response = self.client.get(reverse('communication:my_announcements'), {'hostel': str(self.other_hostel.pk)})
        self.assertEqual([a['hostel_code'] for a in response.json()['results']], ['south'])

    def test_warden_sees_every_audience(self):
        titles = {a.title for a in visible_announcements(self.warden)}
        self.assertEqual(titles, {'North news', 'North staff'})

    def test_unbound_user_sees_nothing(self):
        self.assertFalse(visible_announcements(self.admin).exists())
