# apps/communication/models.py

from django.core.exceptions import ValidationError
from django.core.validators import MinLengthValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import HostelScopedModel


class AnnouncementQuerySet(models.QuerySet):

    def live(self, now=None):
        """Published announcements that have not expired."""
        now = now or timezone.now()
        return self.filter(is_published=True).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=now)
        )

    def for_role(self, role):
        audiences = Announcement.AUDIENCES_BY_ROLE.get(role)
        if audiences is None:
            return self
        return self.filter(target_audience__in=audiences)


class Announcement(HostelScopedModel):
    """
    Notice posted by a warden to the residents and staff of a hostel.
    """
    class PriorityLevel(models.TextChoices):
        LOW = 'low', _('Low')
        NORMAL = 'normal', _('Normal')
        HIGH = 'high', _('High')
        URGENT = 'urgent', _('Urgent')

    class TargetAudience(models.TextChoices):
        ALL = 'all', _('Everyone')
        STUDENTS = 'students', _('Students Only')
        STAFF = 'staff', _('Staff Only')

    AUDIENCES_BY_ROLE = {
        'student': (TargetAudience.ALL, TargetAudience.STUDENTS),
        'staff': (TargetAudience.ALL, TargetAudience.STAFF),
    }

    title = models.CharField(
        _('title'),
        max_length=200,
        validators=[MinLengthValidator(3)]
    )
    body = models.TextField(_('body'))
    priority = models.CharField(
        _('priority level'),
        max_length=10,
        choices=PriorityLevel.choices,
        default=PriorityLevel.NORMAL
    )
    target_audience = models.CharField(
        _('target audience'),
        max_length=20,
        choices=TargetAudience.choices,
        default=TargetAudience.ALL
    )
    author = models.ForeignKey(
        'users.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='authored_announcements',
        verbose_name=_('author')
    )
    is_published = models.BooleanField(_('is published'), default=False)
    published_at = models.DateTimeField(_('published at'), null=True, blank=True)
    expires_at = models.DateTimeField(_('expires at'), null=True, blank=True)
    is_pinned = models.BooleanField(_('is pinned'), default=False)

    objects = AnnouncementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Announcement')
        verbose_name_plural = _('Announcements')
        ordering = ['-is_pinned', '-published_at', '-created_at']
        indexes = [
            models.Index(fields=['hostel', 'is_published'], name='communicat_hostel__2a8d64_idx'),
            models.Index(fields=['expires_at', 'is_published'], name='communicat_expires_71f0b9_idx'),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        published_at = self.published_at or (timezone.now() if self.is_published else None)
        if self.expires_at and published_at and self.expires_at <= published_at:
            raise ValidationError({'expires_at': _('Expiry must be after the publication time.')})

    def save(self, *args, **kwargs):
        """
        Automatically set published_at when is_published becomes True.
        """
        if self.is_published and not self.published_at:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def is_active(self):
        """Check if announcement is currently visible."""
        if not self.is_published:
            return False
        if self.expires_at and self.expires_at <= timezone.now():
            return False
        return True
