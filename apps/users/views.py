# apps/users/views.py

import logging

from django.contrib.auth import authenticate
from django.db.models import Q
from django.utils.translation import gettext_lazy as _
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.audit.services import record_action
from apps.core.mixins import SuperAdminMixin

from .models import User, UserRole
from .serializers import (
    UserSerializer, RoleBindingSerializer, ProfileSerializer,
    TokenSerializer, ChangePasswordSerializer
)
from .services import grant_role, revoke_role, issue_token

logger = logging.getLogger(__name__)


# =============================================================================
# PLATFORM ADMINISTRATION
# =============================================================================

class AdminUserViewSet(SuperAdminMixin,
                       mixins.ListModelMixin,
                       mixins.CreateModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.UpdateModelMixin,
                       viewsets.GenericViewSet):
    """
    User accounts, managed by super admins. Accounts are deactivated
    rather than deleted.
    """
    queryset = User.objects.prefetch_related('role_bindings__hostel')
    serializer_class = UserSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        search = params.get('search')
        is_active = params.get('is_active')
        hostel_id = params.get('hostel')

        if search:
            queryset = queryset.filter(
                Q(email__icontains=search) |
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search)
            )
        if is_active is not None:
            queryset = queryset.filter(is_active=is_active.lower() in ('1', 'true', 'yes'))
        if hostel_id:
            queryset = queryset.filter(role_bindings__hostel_id=hostel_id).distinct()
        return queryset

    def perform_create(self, serializer):
        instance = serializer.save()
        self.audit('create', instance, {'email': instance.email})

    def perform_update(self, serializer):
        instance = serializer.save()
        changed = sorted(field for field in serializer.validated_data if field != 'password')
        if 'password' in serializer.validated_data:
            changed.append('password')
        self.audit('update', instance, {'fields': changed})

    @action(detail=True, methods=['post'])
    def token(self, request, pk=None):
        """Issue the user's bearer token, or rotate it with ``rotate=true``."""
        user = self.get_object()
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rotate = serializer.validated_data['rotate']
        token = issue_token(user, rotate=rotate)
        self.audit('token', user, {'rotated': rotate})
        return Response({'user': str(user.pk), 'token': token.key}, status=status.HTTP_201_CREATED)


class RoleBindingViewSet(SuperAdminMixin,
                         mixins.ListModelMixin,
                         mixins.CreateModelMixin,
                         mixins.RetrieveModelMixin,
                         mixins.DestroyModelMixin,
                         viewsets.GenericViewSet):
    """
    Role bindings across the platform. Bindings are granted and revoked,
    never edited in place.
    """
    queryset = UserRole.objects.select_related('user', 'hostel', 'granted_by')
    serializer_class = RoleBindingSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        hostel_id = params.get('hostel')
        user_id = params.get('user')
        role = params.get('role')

        if hostel_id:
            queryset = queryset.filter(hostel_id=hostel_id)
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        if role:
            queryset = queryset.filter(role=role)
        return queryset

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = grant_role(
            data['user'],
            data['role'],
            hostel=data.get('hostel'),
            granted_by=self.request.user,
            request=self.request
        )

    def perform_destroy(self, instance):
        revoke_role(instance, revoked_by=self.request.user, request=self.request)


# =============================================================================
# AUTHENTICATION AND PROFILE
# =============================================================================

class ObtainTokenView(APIView):
    """
    Exchange email and password for a bearer token.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        email = (request.data.get('email') or '').lower()
        password = request.data.get('password') or ''

        user = authenticate(request, email=email, password=password)
        if user is None or not user.is_active:
            logger.warning("Failed token request for %s", email)
            raise AuthenticationFailed(_('Invalid email or password.'))

        token = issue_token(user)
        record_action('token', user, actor=user, request=request, hostel=None, details={'via': 'password'})
        return Response({'token': token.key, 'user': ProfileSerializer(user).data})


class MeView(generics.RetrieveUpdateAPIView):
    """
    The caller's profile with role bindings.
    """
    serializer_class = ProfileSerializer
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_object(self):
        return self.request.user


class ChangePasswordView(APIView):

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password'])
        record_action('update', user, actor=user, request=request, hostel=None, details={'fields': ['password']})
        return Response(status=status.HTTP_204_NO_CONTENT)
