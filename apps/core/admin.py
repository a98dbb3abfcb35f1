# apps/core/admin.py

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

admin.site.site_header = _('Hostel Management System')
admin.site.site_title = _('Hostel Admin')
admin.site.index_title = _('Hostel Administration')
