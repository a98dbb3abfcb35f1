# apps/audit/services.py
"""
Recording of audit events.
"""

import logging

from apps.core.middleware import get_current_hostel

from .models import AuditLog

logger = logging.getLogger(__name__)

_UNSET = object()


def get_client_ip(request):
    """Return the client address, honouring X-Forwarded-For."""
    forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR') or None


def _resolve_hostel(instance):
    if instance is not None:
        if instance._meta.label == 'hostels.Hostel':
            return instance
        if getattr(instance, 'hostel_id', None):
            return instance.hostel
    return get_current_hostel()


def record_action(action, instance=None, actor=None, request=None, hostel=_UNSET,
                  details=None, model_name=None, object_id=None):
    """
    Write an audit entry.

    Unless ``hostel`` is given (``None`` included), the entry is attached to
    the instance's hostel, then to the hostel of the current request.
    ``actor`` is ignored unless it is an authenticated user.
    """
    if actor is not None and not getattr(actor, 'is_authenticated', False):
        actor = None

    if hostel is _UNSET:
        hostel = _resolve_hostel(instance)

    entry = AuditLog(
        actor=actor,
        hostel=hostel,
        action=action,
        model_name=model_name or (instance.__class__.__name__ if instance is not None else ''),
        object_id=str(object_id or (instance.pk if instance is not None else '')),
        details=details or {},
    )
    if request is not None:
        entry.ip_address = get_client_ip(request)
        entry.user_agent = request.META.get('HTTP_USER_AGENT', '')

    entry.save()
    logger.debug("Audit %s %s %s by %s", action, entry.model_name, entry.object_id, actor)
    return entry
