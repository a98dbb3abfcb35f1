import uuid
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _
from django.core.validators import RegexValidator

from apps.core.models import CoreBaseModel


class UserManager(BaseUserManager):
    """
    Custom user manager for email-based authentication.
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and return a regular user with an email and password.
        """
        if not email:
            raise ValueError(_('The Email field must be set'))

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def get_by_natural_key(self, email):
        return self.get(email__iexact=email)

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and return a superuser with admin permissions.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model with email as primary identifier.
    """
    id = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        primary_key=True,
    )
    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        _('email address'),
        unique=True,
        db_index=True,
        help_text=_('Login identifier and primary contact address')
    )

    phone_regex = RegexValidator(
        regex=r'^\+?1?\d{9,15}$',
        message=_("Phone number must be entered in the format: '+999999999'. Up to 15 digits allowed.")
    )
    phone = models.CharField(
        _('phone number'),
        validators=[phone_regex],
        max_length=17,
        blank=True
    )

    first_name = models.CharField(_('first name'), max_length=150, blank=True)
    last_name = models.CharField(_('last name'), max_length=150, blank=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        ordering = ['-date_joined']

    def save(self, *args, **kwargs):
        # Emails are stored lower-cased so every login lookup matches
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.email

    @property
    def full_name(self):
        """Return the full name of the user."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self):
        """Return display name (full name, falling back to email)."""
        return self.full_name or self.email


class UserRole(CoreBaseModel):
    """
    Binds a user to a role within a hostel.

    A user holds at most one role per hostel. The platform-wide
    ``super_admin`` role is the only role bound without a hostel.
    """
    class Role(models.TextChoices):
        SUPER_ADMIN = 'super_admin', _('Super Administrator')
        WARDEN = 'warden', _('Warden')
        STAFF = 'staff', _('Staff')
        STUDENT = 'student', _('Student')

    HOSTEL_ROLES = [Role.WARDEN, Role.STAFF, Role.STUDENT]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='role_bindings',
        verbose_name=_('user')
    )
    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='role_bindings',
        verbose_name=_('hostel')
    )
    role = models.CharField(_('role'), max_length=20, choices=Role.choices)
    granted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='granted_role_bindings',
        verbose_name=_('granted by')
    )

    class Meta:
        verbose_name = _('User Role')
        verbose_name_plural = _('User Roles')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'hostel'],
                name='unique_role_binding_per_user_hostel'
            ),
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(hostel__isnull=True),
                name='unique_global_role_binding_per_user'
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'role'], name='users_userr_hostel__9e4b1d_idx'),
        ]

    def __str__(self):
        where = self.hostel.code if self.hostel_id else _('platform')
        return f"{self.user} - {self.get_role_display()} @ {where}"

    def clean(self):
        if self.role == self.Role.SUPER_ADMIN and self.hostel_id:
            raise ValidationError({'hostel': _('Super administrators are not bound to a hostel.')})
        if self.role != self.Role.SUPER_ADMIN and not self.hostel_id:
            raise ValidationError({'hostel': _('This role must be bound to a hostel.')})

    @property
    def is_global(self):
        return self.hostel_id is None
