# apps/core/authentication.py
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from rest_framework import exceptions
from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token authentication using ``Authorization: Bearer <token>``.

    Tokens belonging to deactivated users are refused.
    """
    keyword = getattr(settings, 'TOKEN_KEYWORD', 'Bearer')

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        if not user.is_active:
            raise exceptions.AuthenticationFailed(_('User inactive or deleted.'))
        return user, token
