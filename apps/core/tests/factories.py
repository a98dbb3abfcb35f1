# apps/core/tests/factories.py
"""
Object builders shared by the test suites of every app.
"""

from rest_framework.test import APIClient

from apps.hostels.models import Hostel, Floor, Room, Student
from apps.users.models import User, UserRole
from apps.users.services import issue_token

PASSWORD = 'Hostel-Pass-2024!'


def make_user(email, password=PASSWORD, **extra):
    return User.objects.create_user(email, password=password, **extra)


def make_hostel(code, name=None, **extra):
    return Hostel.objects.create(name=name or f'{code.title()} Hostel', code=code, **extra)


def make_floor(hostel, number=1, **extra):
    return Floor.objects.create(hostel=hostel, number=number, **extra)


def make_room(hostel, floor=None, number='101', capacity=2, **extra):
    floor = floor or Floor.objects.filter(hostel=hostel).first() or make_floor(hostel)
    return Room.objects.create(hostel=hostel, floor=floor, number=number, capacity=capacity, **extra)


def make_student(hostel, roll_number, room=None, user=None, **extra):
    extra.setdefault('full_name', f'Student {roll_number}')
    return Student.objects.create(hostel=hostel, roll_number=roll_number, room=room, user=user, **extra)


def bind(user, role, hostel=None):
    return UserRole.objects.create(user=user, role=role, hostel=hostel)


class HostelAPIMixin:
    """
    Two hostels with a full cast of users:

    * ``admin``: global super_admin
    * ``warden``, ``staff``, ``resident``: bound to ``hostel``
    * ``outsider``: warden of ``other_hostel`` only

    ``resident`` is the account of ``student``, who lives in ``room``.
    """

    def setUp(self):
        super().setUp()
        self.hostel = make_hostel('north')
        self.other_hostel = make_hostel('south')

        self.admin = make_user('admin@example.com')
        bind(self.admin, UserRole.Role.SUPER_ADMIN)

        self.warden = make_user('warden@example.com', first_name='Wanda', last_name='Warden')
        bind(self.warden, UserRole.Role.WARDEN, self.hostel)

        self.staff = make_user('staff@example.com')
        bind(self.staff, UserRole.Role.STAFF, self.hostel)

        self.resident = make_user('resident@example.com')
        bind(self.resident, UserRole.Role.STUDENT, self.hostel)

        self.outsider = make_user('outsider@example.com')
        bind(self.outsider, UserRole.Role.WARDEN, self.other_hostel)

        self.floor = make_floor(self.hostel)
        self.room = make_room(self.hostel, self.floor, number='101', capacity=2)
        self.student = make_student(self.hostel, 'S001', room=self.room, user=self.resident)

        self.client = APIClient()

    def authenticate(self, user):
        token = issue_token(user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token.key}')

    def assertError(self, response, status_code, code):
        self.assertEqual(response.status_code, status_code, response.content)
        body = response.json()
        self.assertIn('error', body)
        self.assertEqual(body['error']['code'], code)
        self.assertIn('message', body['error'])
        self.assertIn('details', body['error'])
        return body['error']
