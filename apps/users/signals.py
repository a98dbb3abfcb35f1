from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .models import UserRole
from apps.audit.services import record_action


def _binding_details(instance):
    return {
        'user_id': str(instance.user_id),
        'user_email': instance.user.email,
        'role': instance.role,
        'hostel_id': str(instance.hostel_id) if instance.hostel_id else None,
    }


@receiver(post_save, sender=UserRole)
def audit_user_role_changes(sender, instance, created, **kwargs):
    """Audit log for role grants and changes."""
    details = _binding_details(instance)
    if not created:
        details['updated'] = True

    record_action(
        'grant',
        instance,
        actor=getattr(instance, '_audit_user', None),
        request=getattr(instance, '_audit_request', None),
        hostel=instance.hostel,
        details=details,
    )


@receiver(post_delete, sender=UserRole)
def audit_user_role_deletion(sender, instance, **kwargs):
    """Audit log for role removals."""
    record_action(
        'revoke',
        instance,
        actor=getattr(instance, '_audit_user', None),
        request=getattr(instance, '_audit_request', None),
        hostel=getattr(instance, '_audit_hostel', None),
        details=_binding_details(instance),
    )
