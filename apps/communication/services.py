"""
Announcement services for the communication app.
Publishing and audience resolution for hostel announcements.
"""

import logging
from typing import Iterable, Optional

from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.audit.services import record_action
from apps.core.exceptions import Conflict
from apps.users.models import UserRole

from .models import Announcement

logger = logging.getLogger(__name__)
User = get_user_model()


class AlreadyPublished(Conflict):
    default_detail = _('This announcement is already published.')


def publish_announcement(announcement: Announcement, actor: Optional[User] = None, request=None) -> Announcement:
    """
    Make an announcement visible to its audience.

    Args:
        announcement: The draft announcement to publish
        actor: User performing the action (recorded in the audit log)
        request: Current HTTP request, if any

    Returns:
        The published announcement

    Raises:
        AlreadyPublished: if the announcement is already live
    """
    if announcement.is_published:
        raise AlreadyPublished()

    announcement.is_published = True
    announcement.published_at = timezone.now()
    announcement.full_clean()
    announcement.save(update_fields=['is_published', 'published_at', 'updated_at'])

    record_action(
        'publish',
        announcement,
        actor=actor,
        request=request,
        details={'title': announcement.title},
    )
    logger.info("Published announcement %s in %s", announcement.pk, announcement.hostel.code)
    return announcement


def visible_announcements(user: User, hostel_ids: Optional[Iterable] = None) -> QuerySet:
    """
    Live announcements of every hostel the user is bound to, restricted to
    the audience matching the user's role in each hostel.

    Args:
        user: The reader
        hostel_ids: Optional subset of hostels to consider

    Returns:
        QuerySet of Announcement
    """
    bindings = UserRole.objects.filter(user=user, hostel__isnull=False)
    if hostel_ids is not None:
        bindings = bindings.filter(hostel_id__in=hostel_ids)

    condition = Q(pk__in=[])
    for hostel_id, role in bindings.values_list('hostel_id', 'role'):
        audiences = Announcement.AUDIENCES_BY_ROLE.get(role)
        if audiences is None:
            condition |= Q(hostel_id=hostel_id)
        else:
            condition |= Q(hostel_id=hostel_id, target_audience__in=audiences)

    return Announcement.objects.live().filter(condition).select_related('hostel', 'author')
