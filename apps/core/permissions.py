# apps/core/permissions.py
"""
Role and tenant checks shared by every API view.

A request under ``/api/hostels/<hostel_pk>/`` is allowed when the caller
holds a role binding for that hostel (tenant check) and the bound role is
listed for the view action (role check). Super admins pass both checks.
"""

from rest_framework.permissions import BasePermission

from .exceptions import RoleAccessDenied, TenantAccessDenied


def is_super_admin(user):
    """
    Check if a user has platform-wide access.
    Returns True for Django superusers and users with a global super_admin binding.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True

    from apps.users.models import UserRole
    return UserRole.objects.filter(
        user=user,
        hostel__isnull=True,
        role=UserRole.Role.SUPER_ADMIN
    ).exists()


def get_hostel_role(user, hostel):
    """
    Get the role a user holds in a hostel, or None when the user has no
    binding there. Super admins are reported as super_admin for every hostel.
    """
    from apps.users.models import UserRole

    if is_super_admin(user):
        return UserRole.Role.SUPER_ADMIN

    return UserRole.objects.filter(
        user=user,
        hostel=hostel
    ).values_list('role', flat=True).first()


def get_user_hostel_ids(user):
    """
    Get ids of all hostels a user is bound to.
    """
    from apps.users.models import UserRole
    return list(
        UserRole.objects.filter(user=user, hostel__isnull=False).values_list('hostel_id', flat=True)
    )


class IsSuperAdmin(BasePermission):
    """
    Allows access only to platform administrators.
    """

    def has_permission(self, request, view):
        if not is_super_admin(request.user):
            raise RoleAccessDenied()
        return True


class HostelRolePermission(BasePermission):
    """
    Tenant + role check for hostel-scoped views.

    The view declares ``role_permissions``: a mapping of action name to the
    roles allowed to perform it, with ``'default'`` as a fallback. The
    resolved role is stored on ``request.hostel_role`` for use by the view.
    """

    def has_permission(self, request, view):
        from apps.users.models import UserRole

        hostel = getattr(request, 'hostel', None)
        if hostel is None:
            raise TenantAccessDenied()

        role = get_hostel_role(request.user, hostel)
        if role is None:
            raise TenantAccessDenied()

        request.hostel_role = role
        if role == UserRole.Role.SUPER_ADMIN:
            return True

        allowed = view.get_allowed_roles()
        if role not in allowed:
            raise RoleAccessDenied()
        return True
