from django.db import models
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils.translation import gettext_lazy as _
from apps.core.models import CoreBaseModel


class AuditLog(CoreBaseModel):
    """
    Model for tracking audit events across all hostels.
    """
    class ActionType(models.TextChoices):
        CREATE = 'create', _('Create')
        UPDATE = 'update', _('Update')
        DELETE = 'delete', _('Delete')
        TRANSITION = 'transition', _('Status Transition')
        ASSIGN = 'assign', _('Room Assignment')
        VACATE = 'vacate', _('Room Vacated')
        GRANT = 'grant', _('Role Granted')
        REVOKE = 'revoke', _('Role Revoked')
        PUBLISH = 'publish', _('Publish')
        TOKEN = 'token', _('Token Issued')

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name=_('actor')
    )
    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name=_('hostel')
    )
    action = models.CharField(_('action'), max_length=20, choices=ActionType.choices)
    model_name = models.CharField(_('model name'), max_length=100)
    object_id = models.CharField(_('object id'), max_length=100)
    details = models.JSONField(_('details'), default=dict, blank=True, encoder=DjangoJSONEncoder)
    ip_address = models.GenericIPAddressField(_('IP address'), null=True, blank=True)
    user_agent = models.TextField(_('user agent'), blank=True)
    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Audit Log')
        verbose_name_plural = _('Audit Logs')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['actor', 'timestamp'], name='audit_audit_actor_i_4c7e20_idx'),
            models.Index(fields=['hostel', 'timestamp'], name='audit_audit_hostel__b15a9f_idx'),
            models.Index(fields=['model_name', 'object_id'], name='audit_audit_model_n_6d2c83_idx'),
            models.Index(fields=['action', 'timestamp'], name='audit_audit_action_e93f51_idx'),
        ]

    def __str__(self):
        return f"{self.actor} - {self.action} - {self.model_name} - {self.timestamp}"
