# apps/hostels/models.py

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.core.models import CoreBaseModel, HostelScopedModel, AddressModel, ContactModel


class Hostel(CoreBaseModel, AddressModel, ContactModel):
    """
    A hostel is the tenant: every floor, room, student, warden, cleaning
    request and announcement belongs to exactly one hostel.
    """
    class HostelType(models.TextChoices):
        BOYS = 'boys', _('Boys Hostel')
        GIRLS = 'girls', _('Girls Hostel')
        COED = 'coed', _('Co-educational')

    name = models.CharField(_('hostel name'), max_length=200)
    code = models.SlugField(_('hostel code'), max_length=20, unique=True)
    hostel_type = models.CharField(
        _('hostel type'),
        max_length=20,
        choices=HostelType.choices,
        default=HostelType.COED
    )
    description = models.TextField(_('description'), blank=True)
    rules = models.TextField(_('hostel rules'), blank=True)
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Hostel')
        verbose_name_plural = _('Hostels')
        ordering = ['name']
        indexes = [
            models.Index(fields=['hostel_type', 'is_active'], name='hostels_hos_hostel__a1f3c2_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.lower()
        super().save(*args, **kwargs)

    @property
    def capacity(self):
        """Total beds across active rooms."""
        return self.rooms.filter(is_active=True).aggregate(
            total=models.Sum('capacity')
        )['total'] or 0

    @property
    def occupancy(self):
        """Number of active students holding a room."""
        return self.students.filter(is_active=True, room__isnull=False).count()

    @property
    def occupancy_percentage(self):
        """Calculate occupancy percentage."""
        capacity = self.capacity
        if capacity > 0:
            return round((self.occupancy / capacity) * 100, 2)
        return 0


class Floor(HostelScopedModel):
    """
    A floor within a hostel.
    """
    number = models.IntegerField(_('floor number'))
    name = models.CharField(_('floor name'), max_length=100, blank=True)

    class Meta:
        verbose_name = _('Floor')
        verbose_name_plural = _('Floors')
        ordering = ['hostel', 'number']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'number'],
                name='unique_floor_number_per_hostel'
            ),
        ]

    def __str__(self):
        return self.name or f"{self.hostel.name} - Floor {self.number}"


class Room(HostelScopedModel):
    """
    Model for individual rooms within hostels.
    """
    class RoomType(models.TextChoices):
        SINGLE = 'single', _('Single Occupancy')
        DOUBLE = 'double', _('Double Occupancy')
        TRIPLE = 'triple', _('Triple Occupancy')
        QUAD = 'quad', _('Four Occupancy')
        DORMITORY = 'dormitory', _('Dormitory')

    floor = models.ForeignKey(
        Floor,
        on_delete=models.RESTRICT,
        related_name='rooms',
        verbose_name=_('floor')
    )
    number = models.CharField(_('room number'), max_length=20)
    room_type = models.CharField(
        _('room type'),
        max_length=20,
        choices=RoomType.choices,
        default=RoomType.DOUBLE
    )
    capacity = models.PositiveIntegerField(
        _('capacity'),
        default=2,
        validators=[MinValueValidator(1)]
    )
    is_active = models.BooleanField(_('is active'), default=True)
    notes = models.TextField(_('notes'), blank=True)

    class Meta:
        verbose_name = _('Room')
        verbose_name_plural = _('Rooms')
        ordering = ['hostel', 'floor__number', 'number']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'number'],
                name='unique_room_number_per_hostel'
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'floor'], name='hostels_roo_hostel__5b2e17_idx'),
            models.Index(fields=['hostel', 'is_active'], name='hostels_roo_hostel__c94d0a_idx'),
        ]

    def __str__(self):
        return f"{self.hostel.name} - Room {self.number}"

    def clean(self):
        if self.floor_id:
            # Rooms added from the floor admin inherit the floor's hostel
            if not self.hostel_id:
                self.hostel_id = self.floor.hostel_id
            self.check_same_hostel(floor=self.floor)
        if self.capacity is not None and self.capacity < 1:
            raise ValidationError({'capacity': _('Room capacity must be at least 1.')})
        if self.pk and self.capacity is not None and self.capacity < self.occupancy:
            raise ValidationError({
                'capacity': _('Capacity cannot be lower than the current occupancy (%(count)s).') % {
                    'count': self.occupancy
                }
            })

    @property
    def occupancy(self):
        """Number of active students assigned to this room."""
        if not self.pk:
            return 0
        return self.occupants.filter(is_active=True).count()

    @property
    def available_beds(self):
        """Calculate available beds in the room."""
        return max(self.capacity - self.occupancy, 0)

    @property
    def is_full(self):
        """Check if room is full."""
        return self.occupancy >= self.capacity

    def get_current_residents(self):
        """Get current residents of this room."""
        return self.occupants.filter(is_active=True).order_by('full_name')

    def get_open_cleaning_request(self):
        return self.cleaning_requests.filter(status__in=CleaningRequest.OPEN_STATUSES).first()


class Student(HostelScopedModel):
    """
    A resident of a hostel. Optionally linked to a login account so the
    student can use the ``/api/me/`` endpoints.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='student_records',
        verbose_name=_('user account')
    )
    roll_number = models.CharField(_('roll number'), max_length=50)
    full_name = models.CharField(_('full name'), max_length=200)
    email = models.EmailField(_('email address'), blank=True)
    phone = models.CharField(_('phone number'), max_length=20, blank=True)
    guardian_name = models.CharField(_('guardian name'), max_length=200, blank=True)
    guardian_phone = models.CharField(_('guardian phone'), max_length=20, blank=True)
    room = models.ForeignKey(
        Room,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='occupants',
        verbose_name=_('room')
    )
    check_in_date = models.DateField(_('check in date'), null=True, blank=True)
    check_out_date = models.DateField(_('check out date'), null=True, blank=True)
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Student')
        verbose_name_plural = _('Students')
        ordering = ['hostel', 'full_name']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'roll_number'],
                name='unique_roll_number_per_hostel'
            ),
            models.UniqueConstraint(
                fields=['hostel', 'user'],
                name='unique_student_user_per_hostel'
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'room'], name='hostels_stu_hostel__e07a41_idx'),
            models.Index(fields=['hostel', 'is_active'], name='hostels_stu_hostel__3d8f96_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.roll_number})"

    def clean(self):
        if self.room_id:
            self.check_same_hostel(room=self.room)
        if self.check_out_date and self.check_in_date and self.check_out_date < self.check_in_date:
            raise ValidationError({'check_out_date': _('Check-out date must not be before check-in date.')})


class Warden(HostelScopedModel):
    """
    Staff profile of a warden responsible for a hostel.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='warden_profiles',
        verbose_name=_('user')
    )
    employee_id = models.CharField(_('employee ID'), max_length=50, blank=True)
    phone = models.CharField(_('phone number'), max_length=20, blank=True)
    is_chief = models.BooleanField(_('is chief warden'), default=False)
    appointed_on = models.DateField(_('appointed on'), default=timezone.localdate)

    class Meta:
        verbose_name = _('Warden')
        verbose_name_plural = _('Wardens')
        ordering = ['hostel', '-is_chief', 'appointed_on']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'user'],
                name='unique_warden_per_hostel'
            ),
        ]

    def __str__(self):
        return f"{self.user.display_name} - {self.hostel.name}"

    def save(self, *args, **kwargs):
        """Ensure only one chief warden per hostel."""
        if self.is_chief:
            Warden.objects.filter(
                hostel=self.hostel,
                is_chief=True
            ).exclude(pk=self.pk).update(is_chief=False)
        super().save(*args, **kwargs)


class CleaningRequest(HostelScopedModel):
    """
    A request to clean a room, moving through
    PENDING -> IN_PROGRESS -> DONE, with REJECTED reachable from either
    open state.
    """
    class Status(models.TextChoices):
        PENDING = 'PENDING', _('Pending')
        IN_PROGRESS = 'IN_PROGRESS', _('In Progress')
        DONE = 'DONE', _('Done')
        REJECTED = 'REJECTED', _('Rejected')

    class Priority(models.TextChoices):
        LOW = 'low', _('Low')
        NORMAL = 'normal', _('Normal')
        HIGH = 'high', _('High')

    OPEN_STATUSES = (Status.PENDING, Status.IN_PROGRESS)

    TRANSITIONS = {
        Status.PENDING: (Status.IN_PROGRESS, Status.REJECTED),
        Status.IN_PROGRESS: (Status.DONE, Status.REJECTED),
        Status.DONE: (),
        Status.REJECTED: (),
    }

    room = models.ForeignKey(
        Room,
        on_delete=models.RESTRICT,
        related_name='cleaning_requests',
        verbose_name=_('room')
    )
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='cleaning_requests',
        verbose_name=_('requested by')
    )
    student = models.ForeignKey(
        Student,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cleaning_requests',
        verbose_name=_('student')
    )
    description = models.TextField(_('description'), blank=True)
    priority = models.CharField(
        _('priority'),
        max_length=10,
        choices=Priority.choices,
        default=Priority.NORMAL
    )
    status = models.CharField(
        _('status'),
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_cleaning_requests',
        verbose_name=_('assigned to')
    )
    started_at = models.DateTimeField(_('started at'), null=True, blank=True)
    completed_at = models.DateTimeField(_('completed at'), null=True, blank=True)
    rejection_reason = models.TextField(_('rejection reason'), blank=True)
    resolution_notes = models.TextField(_('resolution notes'), blank=True)

    class Meta:
        verbose_name = _('Cleaning Request')
        verbose_name_plural = _('Cleaning Requests')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['room'],
                condition=Q(status__in=['PENDING', 'IN_PROGRESS']),
                name='one_open_cleaning_request_per_room'
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'status'], name='hostels_cle_hostel__71c5be_idx'),
            models.Index(fields=['room', 'status'], name='hostels_cle_room_id_0f9a3d_idx'),
            models.Index(fields=['requested_by', 'status'], name='hostels_cle_request_b84e62_idx'),
        ]

    def __str__(self):
        return f"Cleaning {self.room.number} - {self.get_status_display()}"

    def clean(self):
        if self.room_id:
            self.check_same_hostel(room=self.room)
        if self.student_id:
            self.check_same_hostel(student=self.student)

    @property
    def is_open(self):
        return self.status in self.OPEN_STATUSES

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, ())

    @property
    def resolution_time(self):
        """Time between the request and its completion."""
        if self.completed_at:
            return self.completed_at - self.created_at
        return None
