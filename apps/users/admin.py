# apps/users/admin.py

from django.contrib import admin
from django.contrib import messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User, UserRole
from .services import issue_token


class UserRoleInline(admin.TabularInline):
    """
    Inline admin for UserRole model.
    """
    model = UserRole
    fk_name = 'user'
    extra = 0
    verbose_name_plural = _('Role Bindings')
    fields = ('role', 'hostel', 'granted_by', 'created_at')
    readonly_fields = ('granted_by', 'created_at')


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.
    """
    list_display = ('email', 'full_name', 'is_active', 'is_staff', 'is_superuser', 'last_login', 'date_joined')
    list_filter = ('is_active', 'is_staff', 'is_superuser', 'date_joined')
    search_fields = ('email', 'first_name', 'last_name', 'phone')
    ordering = ('-date_joined',)
    readonly_fields = ('last_login', 'date_joined', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('email', 'password')
        }),
        (_('Personal Info'), {
            'fields': ('first_name', 'last_name', 'phone')
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'first_name', 'last_name', 'phone'),
        }),
    )

    inlines = [UserRoleInline]

    actions = ['deactivate_users', 'rotate_tokens']

    def full_name(self, obj):
        return obj.full_name
    full_name.short_description = _('Full Name')

    def deactivate_users(self, request, queryset):
        """Admin action to deactivate selected users."""
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} users deactivated.', messages.WARNING)
    deactivate_users.short_description = _('Deactivate selected users')

    def rotate_tokens(self, request, queryset):
        """Admin action to discard and reissue API tokens."""
        for user in queryset:
            issue_token(user, rotate=True)
        self.message_user(request, f'API tokens rotated for {queryset.count()} users.', messages.INFO)
    rotate_tokens.short_description = _('Rotate API tokens of selected users')


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    """
    Admin interface for UserRole model.
    """
    list_display = ('user', 'role', 'hostel', 'granted_by', 'created_at')
    list_filter = ('role', 'hostel', 'created_at')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'hostel__name', 'hostel__code')
    readonly_fields = ('granted_by', 'created_at', 'updated_at')
    raw_id_fields = ('user',)

    fieldsets = (
        (_('Assignment'), {
            'fields': ('user', 'role', 'hostel')
        }),
        (_('System Metadata'), {
            'fields': ('granted_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        if not obj.granted_by_id:
            obj.granted_by = request.user
        obj._audit_user = request.user
        obj._audit_request = request
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        obj._audit_user = request.user
        obj._audit_request = request
        obj._audit_hostel = obj.hostel
        super().delete_model(request, obj)
