# apps/core/views.py
from django.db import connection, DatabaseError
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .exceptions import ErrorCode, error_json_response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """
    Liveness probe reporting database connectivity.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'ok'
    except DatabaseError:
        database = 'unavailable'

    return Response({
        'status': 'ok' if database == 'ok' else 'degraded',
        'database': database,
        'time': timezone.now().isoformat(),
    })


def not_found(request, exception=None):
    return error_json_response(ErrorCode.NOT_FOUND, _('Resource not found.'), status_code=404)


def server_error(request):
    return error_json_response(ErrorCode.SERVER, _('An unexpected error occurred.'), status_code=500)
