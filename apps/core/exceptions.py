# apps/core/exceptions.py
"""
API error taxonomy and the JSON error envelope.

Every error leaving the API has the shape::

    {"error": {"code": "VAL_400", "message": "...", "details": {...}}}
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404, JsonResponse
from django.utils.translation import gettext_lazy as _
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ErrorCode:
    AUTH = 'AUTH_401'
    RBAC = 'RBAC_403'
    TENANT = 'TENANT_403'
    VALIDATION = 'VAL_400'
    NOT_FOUND = 'NOT_FOUND_404'
    METHOD = 'METHOD_405'
    CONFLICT = 'CONFLICT_409'
    THROTTLED = 'THROTTLED_429'
    SERVER = 'SERVER_500'


STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTH,
    status.HTTP_403_FORBIDDEN: ErrorCode.RBAC,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorCode.THROTTLED,
}


class TenantAccessDenied(exceptions.PermissionDenied):
    """The caller holds no role binding for the requested hostel."""
    default_detail = _('You do not have access to this hostel.')
    default_code = ErrorCode.TENANT


class RoleAccessDenied(exceptions.PermissionDenied):
    """The caller's role does not allow the requested action."""
    default_detail = _('Your role does not permit this action.')
    default_code = ErrorCode.RBAC


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('The request conflicts with the current state of the resource.')
    default_code = ErrorCode.CONFLICT


def error_payload(code, message, details=None):
    return {
        'error': {
            'code': code,
            'message': str(message),
            'details': details or {},
        }
    }


def error_json_response(code, message, status_code, details=None):
    """Plain Django response carrying the error envelope, for use outside DRF views."""
    return JsonResponse(error_payload(code, message, details), status=status_code)


def _code_for(exc, status_code):
    if isinstance(exc, (TenantAccessDenied, RoleAccessDenied, Conflict)):
        return exc.default_code
    return STATUS_CODES.get(status_code, ErrorCode.SERVER if status_code >= 500 else f'HTTP_{status_code}')


def api_exception_handler(exc, context):
    """
    DRF exception handler that wraps every error in the envelope.

    Django ValidationErrors raised by models and services are translated to
    VAL_400 so that services do not need to know about DRF.
    """
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(as_serializer_error(exc))
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = RoleAccessDenied()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s",
            view.__class__.__name__ if view else 'unknown view',
            exc_info=exc
        )
        set_rollback()
        return Response(
            error_payload(ErrorCode.SERVER, _('An unexpected error occurred.')),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    code = _code_for(exc, response.status_code)

    if isinstance(exc, exceptions.ValidationError):
        details = exc.detail if isinstance(exc.detail, dict) else {'non_field_errors': exc.detail}
        message = _('Invalid input.')
    else:
        details = {}
        message = exc.detail if not isinstance(exc.detail, (dict, list)) else _('Request failed.')

    response.data = error_payload(code, message, details)
    return response
