# apps/hostels/services.py
"""
Room allocation, warden appointment and cleaning request workflow.

Every function here runs in a transaction and writes an audit entry, so
views only translate HTTP to calls.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q, Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.audit.services import record_action
from apps.core.exceptions import Conflict
from apps.users.models import UserRole
from apps.users.services import grant_role, revoke_role

from .models import CleaningRequest, Room, Student, Warden

logger = logging.getLogger(__name__)


class InvalidTransition(Conflict):
    default_detail = _('This status change is not allowed.')


class OpenRequestExists(Conflict):
    default_detail = _('This room already has an open cleaning request.')


# Room allocation

def _check_free_bed(room, student, field):
    """Raise when every bed of a locked room is held by another active student."""
    occupied = Student.objects.filter(
        room=room,
        is_active=True
    ).exclude(pk=student.pk).count()
    if occupied >= room.capacity:
        raise ValidationError({
            field: _('Room %(number)s is full (capacity %(capacity)s).') % {
                'number': room.number,
                'capacity': room.capacity,
            }
        })


def reserve_bed_for_reactivation(student):
    """
    Lock the room an inactive student still holds and make sure a bed is
    free before the student becomes active again.
    """
    if student.is_active or student.room_id is None:
        return
    room = Room.objects.select_for_update().get(pk=student.room_id)
    _check_free_bed(room, student, 'is_active')


def assign_room(student, room, actor=None, request=None):
    """
    Put a student in a room, refusing when the room is full.

    The room row is locked for the duration of the check so that two
    concurrent assignments cannot both take the last bed.
    """
    if room.hostel_id != student.hostel_id:
        raise ValidationError({'room': _('Room belongs to a different hostel.')})
    if not student.is_active:
        raise ValidationError({'student': _('Inactive students cannot be assigned a room.')})

    with transaction.atomic():
        room = Room.objects.select_for_update().get(pk=room.pk)
        if not room.is_active:
            raise ValidationError({'room': _('Room is not active.')})

        if student.room_id == room.pk:
            return student

        _check_free_bed(room, student, 'room')

        previous_room = student.room
        student.room = room
        student.check_in_date = student.check_in_date or timezone.localdate()
        student.check_out_date = None
        student.save(update_fields=['room', 'check_in_date', 'check_out_date', 'updated_at'])

        record_action(
            'assign',
            student,
            actor=actor,
            request=request,
            details={
                'room': room.number,
                'room_id': str(room.pk),
                'previous_room': previous_room.number if previous_room else None,
            },
        )

    logger.info("Assigned student %s to room %s in %s", student.roll_number, room.number, room.hostel.code)
    return student


def vacate_room(student, actor=None, request=None):
    """
    Release the student's bed.
    """
    if student.room_id is None:
        raise ValidationError({'room': _('Student does not hold a room.')})

    with transaction.atomic():
        room = student.room
        student.room = None
        student.check_out_date = timezone.localdate()
        student.save(update_fields=['room', 'check_out_date', 'updated_at'])

        record_action(
            'vacate',
            student,
            actor=actor,
            request=request,
            details={'room': room.number, 'room_id': str(room.pk)},
        )

    logger.info("Student %s vacated room %s", student.roll_number, room.number)
    return student


def link_student_account(student, actor=None, request=None):
    """
    Give the student's login account the student role in its hostel.
    """
    if student.user_id is None:
        return None

    binding = UserRole.objects.filter(user=student.user, hostel=student.hostel).first()
    if binding is not None:
        if binding.role != UserRole.Role.STUDENT:
            raise ValidationError({
                'user': _('User already holds the %(role)s role in this hostel.') % {
                    'role': binding.get_role_display()
                }
            })
        return binding
    return grant_role(student.user, UserRole.Role.STUDENT, hostel=student.hostel,
                      granted_by=actor, request=request)


def unlink_student_account(student, user, actor=None, request=None):
    binding = UserRole.objects.filter(
        user=user,
        hostel=student.hostel,
        role=UserRole.Role.STUDENT
    ).first()
    if binding:
        revoke_role(binding, revoked_by=actor, request=request)


# Wardens

def appoint_warden(hostel, user, actor=None, request=None, **profile):
    """
    Create a warden profile and the matching role binding.

    A user who already holds a different role in the hostel cannot become
    its warden.
    """
    existing = UserRole.objects.filter(user=user, hostel=hostel).first()
    if existing and existing.role != UserRole.Role.WARDEN:
        raise ValidationError({
            'user': _('User already holds the %(role)s role in this hostel.') % {
                'role': existing.get_role_display()
            }
        })

    with transaction.atomic():
        warden = Warden(hostel=hostel, user=user, **profile)
        warden.full_clean()
        warden.save()

        if existing is None:
            grant_role(user, UserRole.Role.WARDEN, hostel=hostel, granted_by=actor, request=request)

        record_action('create', warden, actor=actor, request=request, details={'user': user.email})

    logger.info("Appointed %s as warden of %s", user.email, hostel.code)
    return warden


def dismiss_warden(warden, actor=None, request=None):
    """
    Remove a warden profile together with the warden role binding.
    """
    with transaction.atomic():
        binding = UserRole.objects.filter(
            user=warden.user,
            hostel=warden.hostel,
            role=UserRole.Role.WARDEN
        ).first()
        record_action('delete', warden, actor=actor, request=request, details={'user': warden.user.email})
        warden.delete()
        if binding:
            revoke_role(binding, revoked_by=actor, request=request)


# Cleaning requests

def create_cleaning_request(room, requested_by, student=None, description='',
                            priority=CleaningRequest.Priority.NORMAL, request=None):
    """
    Open a cleaning request for a room. A room has at most one open request.
    """
    if student is not None and student.room_id != room.pk:
        raise ValidationError({'room': _('Students can only request cleaning of their own room.')})

    with transaction.atomic():
        room = Room.objects.select_for_update().get(pk=room.pk)
        if not room.is_active:
            raise ValidationError({'room': _('Room is not active.')})

        if room.cleaning_requests.filter(status__in=CleaningRequest.OPEN_STATUSES).exists():
            raise OpenRequestExists()

        cleaning_request = CleaningRequest(
            hostel=room.hostel,
            room=room,
            requested_by=requested_by,
            student=student,
            description=description,
            priority=priority,
        )
        cleaning_request.clean()
        try:
            with transaction.atomic():
                cleaning_request.save()
        except IntegrityError:
            raise OpenRequestExists()

        record_action(
            'create',
            cleaning_request,
            actor=requested_by,
            request=request,
            details={'room': room.number, 'priority': priority},
        )

    logger.info("Cleaning request %s opened for room %s", cleaning_request.pk, room.number)
    return cleaning_request


def transition_cleaning_request(cleaning_request, status, actor=None, request=None,
                                reason='', notes=''):
    """
    Move a cleaning request to ``status`` if the workflow allows it.

    Raises InvalidTransition for moves out of a terminal state or skips,
    and ValidationError when a rejection carries no reason.
    """
    with transaction.atomic():
        cleaning_request = CleaningRequest.objects.select_for_update().get(pk=cleaning_request.pk)
        previous = cleaning_request.status

        if not cleaning_request.can_transition_to(status):
            raise InvalidTransition(
                _('Cannot move a cleaning request from %(from)s to %(to)s.') % {
                    'from': previous,
                    'to': status,
                }
            )

        now = timezone.now()
        if status == CleaningRequest.Status.IN_PROGRESS:
            cleaning_request.started_at = now
            if cleaning_request.assigned_to_id is None and actor is not None:
                cleaning_request.assigned_to = actor
        elif status == CleaningRequest.Status.DONE:
            cleaning_request.completed_at = now
            cleaning_request.resolution_notes = notes
        elif status == CleaningRequest.Status.REJECTED:
            if not reason or not reason.strip():
                raise ValidationError({'reason': _('A reason is required to reject a request.')})
            cleaning_request.rejection_reason = reason.strip()
            cleaning_request.completed_at = now

        cleaning_request.status = status
        cleaning_request.save()

        record_action(
            'transition',
            cleaning_request,
            actor=actor,
            request=request,
            details={'from': previous, 'to': status, 'reason': reason, 'notes': notes},
        )

    logger.info(
        "Cleaning request %s moved %s -> %s",
        cleaning_request.pk, previous, status
    )
    return cleaning_request


# Aggregation

def hostel_stats(hostel):
    """
    Occupancy and cleaning workload figures for a hostel.
    """
    rooms = Room.objects.filter(hostel=hostel, is_active=True)
    capacity = rooms.aggregate(total=Sum('capacity'))['total'] or 0

    students = Student.objects.filter(hostel=hostel, is_active=True)
    occupancy = students.filter(room__isnull=False).count()

    full_rooms = rooms.annotate(
        active_occupants=Count('occupants', filter=Q(occupants__is_active=True))
    ).filter(active_occupants__gte=F('capacity')).count()

    by_status = {status: 0 for status in CleaningRequest.Status.values}
    for row in CleaningRequest.objects.filter(hostel=hostel).values('status').annotate(total=Count('id')):
        by_status[row['status']] = row['total']

    return {
        'hostel': str(hostel.pk),
        'floors': hostel.floors.count(),
        'rooms': rooms.count(),
        'full_rooms': full_rooms,
        'capacity': capacity,
        'occupancy': occupancy,
        'available_beds': max(capacity - occupancy, 0),
        'occupancy_percentage': round(occupancy / capacity * 100, 2) if capacity else 0,
        'students': students.count(),
        'unassigned_students': students.filter(room__isnull=True).count(),
        'wardens': hostel.wardens.count(),
        'cleaning_requests': by_status,
        'open_cleaning_requests': sum(by_status[s] for s in CleaningRequest.OPEN_STATUSES),
    }
