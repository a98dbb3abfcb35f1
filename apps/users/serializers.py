# apps/users/serializers.py

from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.hostels.models import Hostel

from .models import User, UserRole


class RoleBindingSerializer(serializers.ModelSerializer):
    """
    Serializer for UserRole model.
    """
    user = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    hostel = serializers.PrimaryKeyRelatedField(
        queryset=Hostel.objects.all(),
        required=False,
        allow_null=True
    )
    user_email = serializers.EmailField(source='user.email', read_only=True)
    hostel_code = serializers.CharField(source='hostel.code', read_only=True, default=None)
    role_display = serializers.CharField(source='get_role_display', read_only=True)

    class Meta:
        model = UserRole
        fields = [
            'id', 'user', 'user_email', 'hostel', 'hostel_code',
            'role', 'role_display', 'granted_by', 'created_at',
        ]
        read_only_fields = ['id', 'granted_by', 'created_at']
        # Uniqueness is checked by the model when the binding is granted
        validators = []


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model as managed by platform administrators.
    """
    password = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'}
    )
    role_bindings = RoleBindingSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'phone',
            'password', 'is_active', 'is_staff', 'is_superuser',
            'last_login', 'date_joined', 'role_bindings',
        ]
        read_only_fields = ['id', 'full_name', 'last_login', 'date_joined']

    def validate_email(self, value):
        return value.lower()

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        password = validated_data.pop('password', None)
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=['password'])
        return instance


class ProfileSerializer(serializers.ModelSerializer):
    """
    The caller's own profile. Only personal details are editable.
    """
    role_bindings = RoleBindingSerializer(many=True, read_only=True)
    is_super_admin = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'phone',
            'is_super_admin', 'role_bindings', 'date_joined',
        ]
        read_only_fields = ['id', 'email', 'full_name', 'date_joined']

    def get_is_super_admin(self, obj):
        from apps.core.permissions import is_super_admin
        return is_super_admin(obj)


class TokenSerializer(serializers.Serializer):
    rotate = serializers.BooleanField(required=False, default=False)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(style={'input_type': 'password'})
    new_password = serializers.CharField(style={'input_type': 'password'})

    def validate_current_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError(_('Current password is incorrect.'))
        return value

    def validate_new_password(self, value):
        validate_password(value, self.context['request'].user)
        return value
