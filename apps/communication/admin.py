# apps/communication/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = [
        'title', 'hostel', 'priority', 'target_audience',
        'author', 'is_published', 'is_pinned', 'is_active',
        'published_at'
    ]
    list_filter = [
        'hostel', 'priority', 'target_audience',
        'is_published', 'is_pinned', 'published_at'
    ]
    search_fields = ['title', 'body', 'author__first_name', 'author__last_name']
    readonly_fields = ['published_at', 'created_at', 'updated_at', 'is_active']
    date_hierarchy = 'published_at'

    fieldsets = (
        (_('Content'), {
            'fields': ('hostel', 'title', 'body')
        }),
        (_('Targeting'), {
            'fields': ('priority', 'target_audience')
        }),
        (_('Publication'), {
            'fields': ('is_published', 'published_at', 'is_pinned', 'expires_at')
        }),
        (_('Author'), {
            'fields': ('author',)
        }),
        (_('Status'), {
            'fields': ('is_active',)
        })
    )

    def is_active(self, obj):
        return obj.is_active
    is_active.boolean = True
    is_active.short_description = _('Visible')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('author', 'hostel')

    def save_model(self, request, obj, form, change):
        if not obj.author_id:
            obj.author = request.user
        super().save_model(request, obj, form, change)
