from django.urls import path
from . import views

app_name = 'communication'

announcement_list = views.AnnouncementViewSet.as_view({'get': 'list', 'post': 'create'})
announcement_detail = views.AnnouncementViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})
announcement_publish = views.AnnouncementViewSet.as_view({'post': 'publish'})

urlpatterns = [
    # Announcements
    path('hostels/<uuid:hostel_pk>/announcements/', announcement_list, name='announcement_list'),
    path('hostels/<uuid:hostel_pk>/announcements/<uuid:pk>/', announcement_detail, name='announcement_detail'),
    path('hostels/<uuid:hostel_pk>/announcements/<uuid:pk>/publish/', announcement_publish, name='announcement_publish'),

    # Caller's feed
    path('me/announcements/', views.MyAnnouncementsView.as_view(), name='my_announcements'),
]
