# apps/hostels/tests.py

from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.urls import reverse

from apps.audit.models import AuditLog
from apps.core.tests.factories import HostelAPIMixin, make_user, make_hostel, make_floor, make_room, make_student
from apps.users.models import UserRole

from .models import Hostel, Room, Student, Warden, CleaningRequest
from . import services


class RoomModelTestCase(HostelAPIMixin, TestCase):
    """Test cases for room occupancy figures"""

    def test_occupancy_counts_active_students_only(self):
        make_student(self.hostel, 'S002', room=self.room, is_active=False)
        self.assertEqual(self.room.occupancy, 1)
        self.assertEqual(self.room.available_beds, 1)
        self.assertFalse(self.room.is_full)

    def test_floor_of_another_hostel_is_rejected(self):
        other_floor = make_floor(self.other_hostel)
        room = Room(hostel=self.hostel, floor=other_floor, number='999', capacity=1)
        with self.assertRaises(ValidationError):
            room.clean()

    def test_hostel_figures(self):
        make_room(self.hostel, self.floor, number='102', capacity=3, is_active=False)
        self.assertEqual(self.hostel.capacity, 2)
        self.assertEqual(self.hostel.occupancy, 1)
        self.assertEqual(self.hostel.occupancy_percentage, 50.0)

    def test_hostel_code_is_lowercased(self):
        hostel = Hostel.objects.create(name='East', code='EAST')
        self.assertEqual(hostel.code, 'east')


class RoomAssignmentServiceTestCase(HostelAPIMixin, TestCase):
    """Test cases for room allocation"""

    def test_assign_until_full(self):
        second = make_student(self.hostel, 'S002')
        services.assign_room(second, self.room, actor=self.warden)
        self.assertEqual(second.room, self.room)
        self.assertIsNotNone(second.check_in_date)

        third = make_student(self.hostel, 'S003')
        with self.assertRaises(ValidationError):
            services.assign_room(third, self.room, actor=self.warden)
        third.refresh_from_db()
        self.assertIsNone(third.room)

    def test_room_of_another_hostel(self):
        other_room = make_room(self.other_hostel, number='201')
        with self.assertRaises(ValidationError):
            services.assign_room(self.student, other_room)

    def test_reassigning_same_room_is_a_no_op(self):
        services.assign_room(self.student, self.room, actor=self.warden)
        self.assertFalse(AuditLog.objects.filter(action='assign').exists())

    def test_vacate_requires_a_room(self):
        services.vacate_room(self.student, actor=self.warden)
        self.assertIsNone(self.student.room)
        self.assertIsNotNone(self.student.check_out_date)
        with self.assertRaises(ValidationError):
            services.vacate_room(self.student)


class CleaningWorkflowServiceTestCase(HostelAPIMixin, TestCase):
    """Test cases for the cleaning request state machine"""

    def setUp(self):
        super().setUp()
        self.cleaning_request = services.create_cleaning_request(self.room, self.resident, student=self.student)

    def test_new_request_is_pending(self):
        self.assertEqual(self.cleaning_request.status, CleaningRequest.Status.PENDING)
        self.assertEqual(self.cleaning_request.hostel, self.hostel)

    def test_one_open_request_per_room(self):
        with self.assertRaises(services.OpenRequestExists):
            services.create_cleaning_request(self.room, self.warden)

    def test_new_request_allowed_after_close(self):
        services.transition_cleaning_request(self.cleaning_request, CleaningRequest.Status.IN_PROGRESS, actor=self.staff)
        services.transition_cleaning_request(self.cleaning_request, CleaningRequest.Status.DONE, actor=self.staff)
        again = services.create_cleaning_request(self.room, self.warden)
        self.assertTrue(again.is_open)

    def test_full_lifecycle(self):
        started = services.transition_cleaning_request(
            self.cleaning_request, CleaningRequest.Status.IN_PROGRESS, actor=self.staff
        )
        self.assertIsNotNone(started.started_at)
        self.assertEqual(started.assigned_to, self.staff)

        done = services.transition_cleaning_request(
            started, CleaningRequest.Status.DONE, actor=self.staff, notes='Mopped'
        )
        self.assertEqual(done.resolution_notes, 'Mopped')
        self.assertIsNotNone(done.resolution_time)

        transitions = AuditLog.objects.filter(action='transition', object_id=str(done.pk))
        self.assertEqual(transitions.count(), 2)

    def test_skipping_and_leaving_terminal_states(self):
        with self.assertRaises(services.InvalidTransition):
            services.transition_cleaning_request(self.cleaning_request, CleaningRequest.Status.DONE)

        services.transition_cleaning_request(
            self.cleaning_request, CleaningRequest.Status.REJECTED, reason='Already clean'
        )
        for status in (CleaningRequest.Status.PENDING, CleaningRequest.Status.IN_PROGRESS):
            with self.assertRaises(services.InvalidTransition):
                services.transition_cleaning_request(self.cleaning_request, status)

    def test_rejection_requires_reason(self):
        with self.assertRaises(ValidationError):
            services.transition_cleaning_request(self.cleaning_request, CleaningRequest.Status.REJECTED, reason='  ')
        self.cleaning_request.refresh_from_db()
        self.assertEqual(self.cleaning_request.status, CleaningRequest.Status.PENDING)


class AdminHostelAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for /api/admin/hostels/"""

    def test_create_hostel(self):
        self.authenticate(self.admin)
        response = self.client.post(reverse('hostels:admin_hostel_list'), {
            'name': 'East Hostel',
            'code': 'East',
            'hostel_type': 'girls',
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['code'], 'east')
        self.assertTrue(AuditLog.objects.filter(action='create', model_name='Hostel').exists())

    def test_duplicate_code(self):
        self.authenticate(self.admin)
        response = self.client.post(reverse('hostels:admin_hostel_list'), {'name': 'Again', 'code': 'NORTH'})
        self.assertError(response, 400, 'VAL_400')

    def test_wardens_cannot_manage_hostels(self):
        self.authenticate(self.warden)
        response = self.client.get(reverse('hostels:admin_hostel_list'))
        self.assertError(response, 403, 'RBAC_403')

    def test_delete_hostel_removes_its_records(self):
        self.authenticate(self.admin)
        response = self.client.delete(reverse('hostels:admin_hostel_detail', kwargs={'pk': self.hostel.pk}))
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Room.objects.filter(pk=self.room.pk).exists())
        self.assertFalse(UserRole.objects.filter(hostel_id=self.hostel.pk).exists())
        self.assertTrue(Hostel.objects.filter(pk=self.other_hostel.pk).exists())


class HostelOverviewAPITestCase(HostelAPIMixin, TestCase):

    def test_stats(self):
        make_student(self.hostel, 'S002')
        self.authenticate(self.staff)
        response = self.client.get(reverse('hostels:hostel_stats', kwargs={'hostel_pk': self.hostel.pk}))
        self.assertEqual(response.status_code, 200)

        stats = response.json()
        self.assertEqual(stats['capacity'], 2)
        self.assertEqual(stats['occupancy'], 1)
        self.assertEqual(stats['available_beds'], 1)
        self.assertEqual(stats['students'], 2)
        self.assertEqual(stats['unassigned_students'], 1)
        self.assertEqual(stats['cleaning_requests']['PENDING'], 0)

    def test_students_cannot_read_stats(self):
        self.authenticate(self.resident)
        response = self.client.get(reverse('hostels:hostel_stats', kwargs={'hostel_pk': self.hostel.pk}))
        self.assertError(response, 403, 'RBAC_403')


class RoomAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for floors and rooms"""

    def setUp(self):
        super().setUp()
        self.list_url = reverse('hostels:room_list', kwargs={'hostel_pk': self.hostel.pk})

    def detail_url(self, room):
        return reverse('hostels:room_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': room.pk})

    def test_warden_creates_room(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'floor': str(self.floor.pk),
            'number': '102',
            'capacity': 3,
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['available_beds'], 3)
        self.assertEqual(Room.objects.get(number='102').hostel, self.hostel)

    def test_floor_of_another_hostel(self):
        other_floor = make_floor(self.other_hostel)
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'floor': str(other_floor.pk),
            'number': '102',
            'capacity': 1,
        })
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('floor', error['details'])

    def test_duplicate_room_number(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'floor': str(self.floor.pk),
            'number': '101',
            'capacity': 1,
        })
        self.assertError(response, 400, 'VAL_400')

    def test_staff_and_students_read_only(self):
        for user in (self.staff, self.resident):
            self.authenticate(user)
            self.assertEqual(self.client.get(self.list_url).status_code, 200)
            response = self.client.patch(self.detail_url(self.room), {'notes': 'x'})
            self.assertError(response, 403, 'RBAC_403')

    def test_capacity_below_occupancy(self):
        make_student(self.hostel, 'S002', room=self.room)
        self.authenticate(self.warden)
        response = self.client.patch(self.detail_url(self.room), {'capacity': 1})
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('capacity', error['details'])

    def test_available_filter(self):
        full = make_room(self.hostel, self.floor, number='102', capacity=1)
        make_student(self.hostel, 'S002', room=full)

        self.authenticate(self.warden)
        response = self.client.get(self.list_url, {'available': 'true'})
        self.assertEqual([room['number'] for room in response.json()['results']], ['101'])

        response = self.client.get(self.list_url, {'available': 'false'})
        self.assertEqual([room['number'] for room in response.json()['results']], ['102'])

    def test_occupants(self):
        self.authenticate(self.staff)
        url = reverse('hostels:room_occupants', kwargs={'hostel_pk': self.hostel.pk, 'pk': self.room.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s['roll_number'] for s in response.json()], ['S001'])

    def test_delete_occupied_room(self):
        self.authenticate(self.warden)
        response = self.client.delete(self.detail_url(self.room))
        self.assertError(response, 409, 'CONFLICT_409')

        empty = make_room(self.hostel, self.floor, number='103')
        response = self.client.delete(self.detail_url(empty))
        self.assertEqual(response.status_code, 204)

    def test_delete_room_with_cleaning_history(self):
        empty = make_room(self.hostel, self.floor, number='103')
        cleaning_request = services.create_cleaning_request(empty, self.warden)
        services.transition_cleaning_request(cleaning_request, CleaningRequest.Status.REJECTED, self.warden, reason='Duplicate')

        self.authenticate(self.warden)
        response = self.client.delete(self.detail_url(empty))
        self.assertError(response, 409, 'CONFLICT_409')
        self.assertTrue(CleaningRequest.objects.filter(pk=cleaning_request.pk).exists())

    def test_delete_floor_with_rooms(self):
        self.authenticate(self.warden)
        url = reverse('hostels:floor_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': self.floor.pk})
        self.assertError(self.client.delete(url), 409, 'CONFLICT_409')

        empty = make_floor(self.hostel, number=5)
        url = reverse('hostels:floor_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': empty.pk})
        self.assertEqual(self.client.delete(url).status_code, 204)


class StudentAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for the student register and room assignment"""

    def setUp(self):
        super().setUp()
        self.list_url = reverse('hostels:student_list', kwargs={'hostel_pk': self.hostel.pk})

    def action_url(self, name, student):
        return reverse(f'hostels:student_{name}', kwargs={'hostel_pk': self.hostel.pk, 'pk': student.pk})

    def test_create_links_account(self):
        account = make_user('newcomer@example.com')
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'roll_number': 'S002',
            'full_name': 'New Comer',
            'user': str(account.pk),
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertIsNone(response.json()['room'])
        self.assertTrue(
            UserRole.objects.filter(user=account, hostel=self.hostel, role=UserRole.Role.STUDENT).exists()
        )

    def test_account_with_other_role(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'roll_number': 'S002',
            'full_name': 'Staff Member',
            'user': str(self.staff.pk),
        })
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('user', error['details'])

    def test_duplicate_roll_number(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {'roll_number': 'S001', 'full_name': 'Twin'})
        self.assertError(response, 400, 'VAL_400')

    def test_room_is_not_writable_directly(self):
        other = make_room(self.hostel, self.floor, number='102')
        self.authenticate(self.warden)
        url = reverse('hostels:student_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': self.student.pk})
        self.client.patch(url, {'room': str(other.pk)})
        self.student.refresh_from_db()
        self.assertEqual(self.student.room, self.room)

    def test_assign_room_respects_capacity(self):
        self.authenticate(self.warden)
        second = make_student(self.hostel, 'S002')
        third = make_student(self.hostel, 'S003')

        response = self.client.post(self.action_url('assign_room', second), {'room': str(self.room.pk)})
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()['room_number'], '101')
        self.assertTrue(AuditLog.objects.filter(action='assign', object_id=str(second.pk)).exists())

        response = self.client.post(self.action_url('assign_room', third), {'room': str(self.room.pk)})
        self.assertError(response, 400, 'VAL_400')

    def test_assign_room_of_another_hostel(self):
        other_room = make_room(self.other_hostel, number='201')
        self.authenticate(self.warden)
        response = self.client.post(self.action_url('assign_room', self.student), {'room': str(other_room.pk)})
        self.assertError(response, 400, 'VAL_400')

    def test_reactivation_respects_capacity(self):
        single = make_room(self.hostel, self.floor, number='102', capacity=1)
        first = make_student(self.hostel, 'S002', room=single)
        second = make_student(self.hostel, 'S003')
        self.authenticate(self.warden)
        first_url = reverse('hostels:student_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': first.pk})

        self.assertEqual(self.client.patch(first_url, {'is_active': False}).status_code, 200)
        response = self.client.post(self.action_url('assign_room', second), {'room': str(single.pk)})
        self.assertEqual(response.status_code, 200, response.content)

        response = self.client.patch(first_url, {'is_active': True})
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('is_active', error['details'])
        first.refresh_from_db()
        self.assertFalse(first.is_active)
        self.assertLessEqual(single.occupancy, single.capacity)

        services.vacate_room(second)
        self.assertEqual(self.client.patch(first_url, {'is_active': True}).status_code, 200)

    def test_vacate(self):
        self.authenticate(self.warden)
        response = self.client.post(self.action_url('vacate', self.student))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['room'])
        self.assertTrue(AuditLog.objects.filter(action='vacate', object_id=str(self.student.pk)).exists())

        response = self.client.post(self.action_url('vacate', self.student))
        self.assertError(response, 400, 'VAL_400')

    def test_filters(self):
        make_student(self.hostel, 'S002', full_name='Zed Unplaced')
        self.authenticate(self.staff)

        response = self.client.get(self.list_url, {'unassigned': 'true'})
        self.assertEqual([s['roll_number'] for s in response.json()['results']], ['S002'])

        response = self.client.get(self.list_url, {'search': 'zed'})
        self.assertEqual(response.json()['count'], 1)

    def test_staff_cannot_assign(self):
        self.authenticate(self.staff)
        response = self.client.post(self.action_url('vacate', self.student))
        self.assertError(response, 403, 'RBAC_403')

    def test_delete_unlinks_account(self):
        self.authenticate(self.warden)
        url = reverse('hostels:student_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': self.student.pk})
        response = self.client.delete(url)
        self.assertEqual(response.status_code, 204)
        self.assertFalse(UserRole.objects.filter(user=self.resident, hostel=self.hostel).exists())


class WardenAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for appointing wardens"""

    def setUp(self):
        super().setUp()
        self.list_url = reverse('hostels:warden_list', kwargs={'hostel_pk': self.hostel.pk})

    def test_only_super_admin_appoints(self):
        candidate = make_user('candidate@example.com')
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {'user': str(candidate.pk)})
        self.assertError(response, 403, 'RBAC_403')

        self.authenticate(self.admin)
        response = self.client.post(self.list_url, {'user': str(candidate.pk), 'is_chief': True})
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['user_email'], 'candidate@example.com')
        self.assertTrue(
            UserRole.objects.filter(user=candidate, hostel=self.hostel, role=UserRole.Role.WARDEN).exists()
        )

    def test_user_with_other_role(self):
        self.authenticate(self.admin)
        response = self.client.post(self.list_url, {'user': str(self.staff.pk)})
        self.assertError(response, 400, 'VAL_400')

    def test_single_chief_warden(self):
        first = services.appoint_warden(self.hostel, self.warden, is_chief=True)
        second = services.appoint_warden(self.hostel, make_user('w2@example.com'), is_chief=True)
        first.refresh_from_db()
        self.assertFalse(first.is_chief)
        self.assertTrue(second.is_chief)

    def test_dismiss_revokes_role(self):
        warden = services.appoint_warden(self.hostel, self.warden)
        self.authenticate(self.admin)
        url = reverse('hostels:warden_detail', kwargs={'hostel_pk': self.hostel.pk, 'pk': warden.pk})
        response = self.client.delete(url)
        self.assertEqual(response.status_code, 204)
        self.assertFalse(Warden.objects.filter(pk=warden.pk).exists())
        self.assertFalse(UserRole.objects.filter(user=self.warden, hostel=self.hostel).exists())

    def test_staff_can_list(self):
        services.appoint_warden(self.hostel, self.warden)
        self.authenticate(self.staff)
        response = self.client.get(self.list_url)
        self.assertEqual(response.json()['count'], 1)


class CleaningRequestAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for the cleaning request endpoints"""

    def setUp(self):
        super().setUp()
        self.list_url = reverse('hostels:cleaning_request_list', kwargs={'hostel_pk': self.hostel.pk})
        self.other_room = make_room(self.hostel, self.floor, number='102')

    def action_url(self, name, cleaning_request):
        return reverse(
            f'hostels:cleaning_request_{name}',
            kwargs={'hostel_pk': self.hostel.pk, 'pk': cleaning_request.pk}
        )

    def test_student_requests_own_room(self):
        self.authenticate(self.resident)
        response = self.client.post(self.list_url, {'room': str(self.room.pk), 'description': 'Spill'})
        self.assertEqual(response.status_code, 201, response.content)

        data = response.json()
        self.assertEqual(data['status'], 'PENDING')
        self.assertEqual(data['student'], str(self.student.pk))
        self.assertEqual(data['requested_by'], str(self.resident.pk))

        response = self.client.post(self.list_url, {'room': str(self.room.pk)})
        self.assertError(response, 409, 'CONFLICT_409')

    def test_student_cannot_request_other_room(self):
        self.authenticate(self.resident)
        response = self.client.post(self.list_url, {'room': str(self.other_room.pk)})
        self.assertError(response, 400, 'VAL_400')

    def test_staff_cannot_open_requests(self):
        self.authenticate(self.staff)
        response = self.client.post(self.list_url, {'room': str(self.room.pk)})
        self.assertError(response, 403, 'RBAC_403')

    def test_warden_assigns_request(self):
        self.authenticate(self.warden)
        response = self.client.post(self.list_url, {
            'room': str(self.other_room.pk),
            'priority': 'high',
            'assigned_to': str(self.staff.pk),
        })
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['assigned_to'], str(self.staff.pk))

        response = self.client.post(self.list_url, {
            'room': str(self.room.pk),
            'assigned_to': str(self.resident.pk),
        })
        self.assertError(response, 400, 'VAL_400')

    def test_students_see_only_their_requests(self):
        services.create_cleaning_request(self.other_room, self.warden)
        mine = services.create_cleaning_request(self.room, self.resident, student=self.student)

        self.authenticate(self.resident)
        response = self.client.get(self.list_url)
        self.assertEqual([r['id'] for r in response.json()['results']], [str(mine.pk)])

        self.authenticate(self.staff)
        response = self.client.get(self.list_url, {'status': 'pending'})
        self.assertEqual(response.json()['count'], 2)

    def test_transitions(self):
        cleaning_request = services.create_cleaning_request(self.room, self.resident, student=self.student)

        self.authenticate(self.resident)
        self.assertError(self.client.post(self.action_url('start', cleaning_request)), 403, 'RBAC_403')

        self.authenticate(self.staff)
        response = self.client.post(self.action_url('start', cleaning_request))
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(response.json()['status'], 'IN_PROGRESS')
        self.assertEqual(response.json()['assigned_to'], str(self.staff.pk))

        response = self.client.post(self.action_url('complete', cleaning_request), {'notes': 'Done and dusted'})
        self.assertEqual(response.json()['status'], 'DONE')

        response = self.client.post(self.action_url('start', cleaning_request))
        self.assertError(response, 409, 'CONFLICT_409')

    def test_reject(self):
        cleaning_request = services.create_cleaning_request(self.room, self.resident, student=self.student)

        self.authenticate(self.staff)
        response = self.client.post(self.action_url('reject', cleaning_request), {'reason': 'No'})
        self.assertError(response, 403, 'RBAC_403')

        self.authenticate(self.warden)
        response = self.client.post(self.action_url('reject', cleaning_request))
        error = self.assertError(response, 400, 'VAL_400')
        self.assertIn('reason', error['details'])

        response = self.client.post(self.action_url('reject', cleaning_request), {'reason': 'Cleaned yesterday'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'REJECTED')
        self.assertEqual(response.json()['rejection_reason'], 'Cleaned yesterday')

    def test_status_is_read_only(self):
        cleaning_request = services.create_cleaning_request(self.room, self.resident, student=self.student)
        self.authenticate(self.warden)
        url = reverse('hostels:cleaning_request_detail', kwargs={
            'hostel_pk': self.hostel.pk,
            'pk': cleaning_request.pk,
        })
        response = self.client.patch(url, {'status': 'DONE', 'description': 'Updated'})
        self.assertEqual(response.status_code, 200, response.content)

        cleaning_request.refresh_from_db()
        self.assertEqual(cleaning_request.status, CleaningRequest.Status.PENDING)
        self.assertEqual(cleaning_request.description, 'Updated')


class MeAPITestCase(HostelAPIMixin, TestCase):
    """Test cases for /api/me/room/ and /api/me/cleaning-requests/"""

    def test_my_room(self):
        make_student(self.hostel, 'S002', room=self.room, full_name='Roomie')
        self.authenticate(self.resident)
        response = self.client.get(reverse('hostels:my_room'))
        self.assertEqual(response.status_code, 200)

        records = response.json()
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]['hostel']['code'], 'north')
        self.assertEqual(records[0]['room']['number'], '101')
        self.assertEqual([r['full_name'] for r in records[0]['roommates']], ['Roomie'])

    def test_my_room_without_records(self):
        self.authenticate(self.staff)
        response = self.client.get(reverse('hostels:my_room'))
        self.assertEqual(response.json(), [])

    def test_open_and_list_my_requests(self):
        self.authenticate(self.resident)
        url = reverse('hostels:my_cleaning_requests')

        response = self.client.post(url, {'description': 'Window', 'priority': 'low'})
        self.assertEqual(response.status_code, 201, response.content)
        self.assertEqual(response.json()['room'], str(self.room.pk))

        response = self.client.get(url)
        self.assertEqual(response.json()['count'], 1)

    def test_caller_without_room(self):
        self.authenticate(self.staff)
        response = self.client.post(reverse('hostels:my_cleaning_requests'), {})
        self.assertError(response, 400, 'VAL_400')

    def test_room_must_be_callers(self):
        other_room = make_room(self.hostel, self.floor, number='102')
        self.authenticate(self.resident)
        response = self.client.post(reverse('hostels:my_cleaning_requests'), {'room': str(other_room.pk)})
        self.assertError(response, 400, 'VAL_400')


class CreateHostelCommandTestCase(TestCase):

    def test_creates_hostel_and_chief_warden(self):
        out = StringIO()
        call_command(
            'create_hostel', 'East Hostel', 'EAST',
            '--hostel_type', 'girls',
            '--warden_email', 'Chief.Warden@example.com',
            stdout=out
        )
        hostel = Hostel.objects.get(code='east')
        self.assertEqual(hostel.hostel_type, 'girls')

        warden = Warden.objects.get(hostel=hostel)
        self.assertTrue(warden.is_chief)
        self.assertEqual(warden.user.email, 'chief.warden@example.com')
        self.assertEqual(warden.user.first_name, 'Chief')
        self.assertTrue(UserRole.objects.filter(user=warden.user, hostel=hostel, role='warden').exists())
        self.assertIn('Temporary password', out.getvalue())

    def test_duplicate_code(self):
        make_hostel('east')
        with self.assertRaises(CommandError):
            call_command('create_hostel', 'East Again', 'east', stdout=StringIO())

    def test_invalid_warden_email(self):
        with self.assertRaises(CommandError):
            call_command('create_hostel', 'West', 'west', '--warden_email', 'not-an-email', stdout=StringIO())
        self.assertFalse(Hostel.objects.filter(code='west').exists())
