# apps/audit/views.py
from django.db.models import Q
from rest_framework import generics

from apps.core.mixins import HostelScopedMixin, SuperAdminMixin
from apps.users.models import UserRole

from .models import AuditLog
from .serializers import AuditLogSerializer


class AuditLogFilterMixin:
    """
    Filtering of audit entries from query parameters.
    """

    def get_queryset(self):
        queryset = super().get_queryset().select_related('actor', 'hostel')
        params = self.request.query_params

        action = params.get('action')
        model_name = params.get('model_name')
        actor_id = params.get('actor')
        date_from = params.get('date_from')
        date_to = params.get('date_to')
        search = params.get('search')

        if action and action != 'all':
            queryset = queryset.filter(action=action)

        if model_name and model_name != 'all':
            queryset = queryset.filter(model_name=model_name)

        if actor_id and actor_id != 'all':
            queryset = queryset.filter(actor_id=actor_id)

        if date_from:
            queryset = queryset.filter(timestamp__date__gte=date_from)

        if date_to:
            queryset = queryset.filter(timestamp__date__lte=date_to)

        if search:
            queryset = queryset.filter(
                Q(actor__email__icontains=search) |
                Q(model_name__icontains=search) |
                Q(object_id__icontains=search)
            )

        return queryset.order_by('-timestamp')


class AdminAuditLogListView(SuperAdminMixin, AuditLogFilterMixin, generics.ListAPIView):
    """
    Platform-wide audit trail, optionally filtered by hostel.
    """
    queryset = AuditLog.objects.all()
    serializer_class = AuditLogSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        hostel_id = self.request.query_params.get('hostel')
        if hostel_id:
            queryset = queryset.filter(hostel_id=hostel_id)
        return queryset


class HostelAuditLogListView(HostelScopedMixin, AuditLogFilterMixin, generics.ListAPIView):
    """
    Audit trail of a single hostel, visible to its wardens.
    """
    queryset = AuditLog.objects.all()
    serializer_class = AuditLogSerializer
    role_permissions = {
        'default': (UserRole.Role.WARDEN,),
    }
