import logging
import threading

from django.utils.deprecation import MiddlewareMixin
from django.utils.translation import gettext_lazy as _

from .exceptions import ErrorCode, error_json_response


logger = logging.getLogger(__name__)

# Thread-local storage for current hostel
_local = threading.local()

HOSTEL_URL_KWARG = 'hostel_pk'


class HostelContextMiddleware(MiddlewareMixin):
    """
    Middleware to resolve the hostel (tenant) addressed by the request.

    Hostel-scoped routes carry the hostel id in the URL
    (``/api/hostels/<hostel_pk>/...``). The hostel is loaded once here,
    attached to ``request.hostel`` and kept in thread-local storage so that
    services can reach it without threading it through every call.
    Membership and role checks happen later, in the DRF permission classes,
    once the bearer token has been authenticated.
    """

    def process_request(self, request):
        request.hostel = None
        _local.current_hostel = None
        return None

    def process_view(self, request, view_func, view_args, view_kwargs):
        hostel_id = view_kwargs.get(HOSTEL_URL_KWARG)
        if hostel_id is None:
            return None

        from apps.hostels.models import Hostel

        try:
            hostel = Hostel.objects.get(pk=hostel_id)
        except Hostel.DoesNotExist:
            logger.info("Request for unknown hostel %s on %s", hostel_id, request.path)
            return error_json_response(
                ErrorCode.NOT_FOUND,
                _('Hostel not found.'),
                status_code=404
            )

        request.hostel = hostel
        _local.current_hostel = hostel
        return None

    def process_response(self, request, response):
        """
        Clean up thread-local storage after request processing.
        """
        if hasattr(_local, 'current_hostel'):
            del _local.current_hostel
        return response


def get_current_hostel():
    """
    Get the current hostel from thread-local storage.
    Returns None outside a hostel-scoped request.
    """
    return getattr(_local, 'current_hostel', None)


def set_current_hostel(hostel):
    """
    Manually set the current hostel in thread-local storage.
    Use with caution - typically handled by middleware.
    """
    _local.current_hostel = hostel
