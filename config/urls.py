from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # Admin site
    path('admin/', admin.site.urls),

    # Core app (health checks)
    path('core/', include('apps.core.urls', namespace='core')),

    # REST API
    path('api/', include('apps.users.urls', namespace='users')),
    path('api/', include('apps.hostels.urls', namespace='hostels')),
    path('api/', include('apps.communication.urls', namespace='communication')),
    path('api/', include('apps.audit.urls', namespace='audit')),
]

handler404 = 'apps.core.views.not_found'
handler500 = 'apps.core.views.server_error'
