# apps/communication/views.py

from rest_framework import generics, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.mixins import HostelScopedMixin
from apps.users.models import UserRole

from .models import Announcement
from .serializers import AnnouncementSerializer, FeedAnnouncementSerializer
from .services import publish_announcement, visible_announcements

WARDEN = UserRole.Role.WARDEN
STAFF = UserRole.Role.STAFF
STUDENT = UserRole.Role.STUDENT


class AnnouncementViewSet(HostelScopedMixin, viewsets.ModelViewSet):
    """
    Announcements of a hostel.

    Wardens manage every announcement; staff and students only read
    published, unexpired ones addressed to them.
    """
    queryset = Announcement.objects.select_related('author')
    serializer_class = AnnouncementSerializer
    role_permissions = {
        'list': (WARDEN, STAFF, STUDENT),
        'retrieve': (WARDEN, STAFF, STUDENT),
        'default': (WARDEN,),
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        role = self.hostel_role

        if role in (STAFF, STUDENT):
            queryset = queryset.live().for_role(role)
        else:
            is_published = self.request.query_params.get('is_published')
            if is_published is not None:
                queryset = queryset.filter(is_published=is_published.lower() in ('1', 'true', 'yes'))

        priority = self.request.query_params.get('priority')
        if priority:
            queryset = queryset.filter(priority=priority)

        return queryset.order_by('-is_pinned', '-published_at', '-created_at')

    def get_save_kwargs(self):
        kwargs = super().get_save_kwargs()
        kwargs['author'] = self.request.user
        return kwargs

    @action(detail=True, methods=['post'])
    def publish(self, request, hostel_pk=None, pk=None):
        """Publish a draft announcement."""
        announcement = publish_announcement(self.get_object(), actor=request.user, request=request)
        return Response(self.get_serializer(announcement).data)


class MyAnnouncementsView(generics.ListAPIView):
    """
    Live announcements of every hostel the caller is bound to.
    """
    serializer_class = FeedAnnouncementSerializer

    def get_queryset(self):
        hostel_id = self.request.query_params.get('hostel')
        hostel_ids = [hostel_id] if hostel_id else None
        return visible_announcements(self.request.user, hostel_ids).order_by('-is_pinned', '-published_at')
