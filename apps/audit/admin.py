import json

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """
    Read-only browser over the audit trail of every hostel.
    """
    list_display = ('timestamp', 'action', 'model_name', 'object_id', 'actor_email', 'hostel_code', 'ip_address')
    list_filter = ('action', 'model_name', ('hostel', admin.RelatedOnlyFieldListFilter))
    list_select_related = ('actor', 'hostel')
    search_fields = ('actor__email', 'hostel__code', 'model_name', 'object_id')
    date_hierarchy = 'timestamp'
    ordering = ('-timestamp',)

    fieldsets = (
        (None, {
            'fields': ('timestamp', 'action', 'model_name', 'object_id', 'actor', 'hostel')
        }),
        (_('Details'), {
            'fields': ('formatted_details',)
        }),
        (_('Client'), {
            'fields': ('ip_address', 'user_agent'),
            'classes': ('collapse',)
        }),
    )
    readonly_fields = (
        'timestamp', 'action', 'model_name', 'object_id', 'actor', 'hostel',
        'formatted_details', 'ip_address', 'user_agent',
    )

    @admin.display(description=_('actor'), ordering='actor__email')
    def actor_email(self, obj):
        return obj.actor.email if obj.actor_id else '-'

    @admin.display(description=_('hostel'), ordering='hostel__code')
    def hostel_code(self, obj):
        return obj.hostel.code if obj.hostel_id else _('platform')

    @admin.display(description=_('details'))
    def formatted_details(self, obj):
        return format_html('<pre>{}</pre>', json.dumps(obj.details, indent=2, sort_keys=True, default=str))

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        # Retention is handled by prune_audit_logs
        return request.user.is_superuser
