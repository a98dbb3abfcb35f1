from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class HostelsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.hostels'
    verbose_name = _('Hostels')
