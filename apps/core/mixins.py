from rest_framework.permissions import IsAuthenticated

from .permissions import HostelRolePermission, IsSuperAdmin


class AuditedModelMixin:
    """
    Mixin for model viewsets that records an audit entry for every
    create, update and delete performed through the API.
    """

    def get_save_kwargs(self):
        return {}

    def audit(self, action, instance, details=None):
        from apps.audit.services import record_action
        return record_action(
            action,
            instance,
            actor=self.request.user,
            request=self.request,
            details=details,
        )

    def perform_create(self, serializer):
        instance = serializer.save(**self.get_save_kwargs())
        self.audit('create', instance, {'data': serializer.data})

    def perform_update(self, serializer):
        instance = serializer.save()
        changed = {
            field: serializer.data.get(field)
            for field in serializer.validated_data
        }
        self.audit('update', instance, {'changes': changed})

    def perform_destroy(self, instance):
        self.audit('delete', instance, {'repr': str(instance)})
        instance.delete()


class SuperAdminMixin(AuditedModelMixin):
    """
    Mixin for ``/api/admin/*`` views that require platform admin privileges.
    """
    permission_classes = [IsAuthenticated, IsSuperAdmin]


class HostelScopedMixin(AuditedModelMixin):
    """
    Mixin for views nested under ``/api/hostels/<hostel_pk>/``.

    Filters querysets by the hostel in the URL, stamps the hostel on created
    records and enforces the per-action role table in ``role_permissions``.
    """
    permission_classes = [IsAuthenticated, HostelRolePermission]
    role_permissions = {}

    def get_allowed_roles(self):
        action = getattr(self, 'action', None)
        return self.role_permissions.get(action, self.role_permissions.get('default', ()))

    def get_hostel(self):
        return self.request.hostel

    def get_queryset(self):
        """
        Filter queryset to only show records of the current hostel.
        """
        queryset = super().get_queryset()
        return queryset.filter(hostel=self.get_hostel())

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['hostel'] = self.get_hostel()
        return context

    def get_save_kwargs(self):
        return {'hostel': self.get_hostel()}

    @property
    def hostel_role(self):
        return getattr(self.request, 'hostel_role', None)
