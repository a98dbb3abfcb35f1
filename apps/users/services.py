# apps/users/services.py
"""
Role binding and token services.
"""

import logging

from django.db import transaction
from rest_framework.authtoken.models import Token

from .models import UserRole

logger = logging.getLogger(__name__)


def grant_role(user, role, hostel=None, granted_by=None, request=None):
    """
    Bind ``user`` to ``role`` in ``hostel`` (or platform-wide for super_admin).

    Raises ValidationError when the binding is invalid or the user already
    holds a role in that hostel.
    """
    binding = UserRole(user=user, role=role, hostel=hostel, granted_by=granted_by)
    binding.full_clean()

    # Picked up by the audit signal handlers
    binding._audit_user = granted_by
    binding._audit_request = request
    binding.save()

    logger.info(
        "Granted role %s to %s in %s",
        role, user.email, hostel.code if hostel else 'platform'
    )
    return binding


def revoke_role(binding, revoked_by=None, request=None):
    """
    Remove a role binding.
    """
    binding._audit_user = revoked_by
    binding._audit_request = request
    # Unset when the binding goes away with its hostel
    binding._audit_hostel = binding.hostel
    logger.info("Revoking role binding %s", binding)
    binding.delete()


def issue_token(user, rotate=False):
    """
    Return the user's bearer token, creating it if needed.
    With ``rotate`` the previous token is discarded first.
    """
    with transaction.atomic():
        if rotate:
            Token.objects.filter(user=user).delete()
        token, created = Token.objects.get_or_create(user=user)

    if created:
        logger.info("Issued new API token for %s", user.email)
    return token
