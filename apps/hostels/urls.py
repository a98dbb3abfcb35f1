# apps/hostels/urls.py

from django.urls import path
from . import views

app_name = 'hostels'

LIST = {'get': 'list', 'post': 'create'}
DETAIL = {'get': 'retrieve', 'put': 'update', 'patch': 'partial_update', 'delete': 'destroy'}
READ_ONLY_DETAIL = {'get': 'retrieve'}

hostel_list = views.AdminHostelViewSet.as_view(LIST)
hostel_detail = views.AdminHostelViewSet.as_view(DETAIL)

floor_list = views.FloorViewSet.as_view(LIST)
floor_detail = views.FloorViewSet.as_view(DETAIL)

room_list = views.RoomViewSet.as_view(LIST)
room_detail = views.RoomViewSet.as_view(DETAIL)
room_occupants = views.RoomViewSet.as_view({'get': 'occupants'})

student_list = views.StudentViewSet.as_view(LIST)
student_detail = views.StudentViewSet.as_view(DETAIL)
student_assign_room = views.StudentViewSet.as_view({'post': 'assign_room'})
student_vacate = views.StudentViewSet.as_view({'post': 'vacate'})

warden_list = views.WardenViewSet.as_view(LIST)
warden_detail = views.WardenViewSet.as_view(DETAIL)

cleaning_list = views.CleaningRequestViewSet.as_view(LIST)
cleaning_detail = views.CleaningRequestViewSet.as_view(
    {'get': 'retrieve', 'put': 'update', 'patch': 'partial_update'}
)
cleaning_start = views.CleaningRequestViewSet.as_view({'post': 'start'})
cleaning_complete = views.CleaningRequestViewSet.as_view({'post': 'complete'})
cleaning_reject = views.CleaningRequestViewSet.as_view({'post': 'reject'})

urlpatterns = [
    # Platform administration
    path('admin/hostels/', hostel_list, name='admin_hostel_list'),
    path('admin/hostels/<uuid:pk>/', hostel_detail, name='admin_hostel_detail'),

    # Hostel overview
    path('hostels/<uuid:hostel_pk>/', views.HostelDetailView.as_view(), name='hostel_detail'),
    path('hostels/<uuid:hostel_pk>/stats/', views.HostelStatsView.as_view(), name='hostel_stats'),

    # Floors and rooms
    path('hostels/<uuid:hostel_pk>/floors/', floor_list, name='floor_list'),
    path('hostels/<uuid:hostel_pk>/floors/<uuid:pk>/', floor_detail, name='floor_detail'),
    path('hostels/<uuid:hostel_pk>/rooms/', room_list, name='room_list'),
    path('hostels/<uuid:hostel_pk>/rooms/<uuid:pk>/', room_detail, name='room_detail'),
    path('hostels/<uuid:hostel_pk>/rooms/<uuid:pk>/occupants/', room_occupants, name='room_occupants'),

    # Residents and wardens
    path('hostels/<uuid:hostel_pk>/students/', student_list, name='student_list'),
    path('hostels/<uuid:hostel_pk>/students/<uuid:pk>/', student_detail, name='student_detail'),
    path('hostels/<uuid:hostel_pk>/students/<uuid:pk>/assign-room/', student_assign_room, name='student_assign_room'),
    path('hostels/<uuid:hostel_pk>/students/<uuid:pk>/vacate/', student_vacate, name='student_vacate'),
    path('hostels/<uuid:hostel_pk>/wardens/', warden_list, name='warden_list'),
    path('hostels/<uuid:hostel_pk>/wardens/<uuid:pk>/', warden_detail, name='warden_detail'),

    # Cleaning workflow
    path('hostels/<uuid:hostel_pk>/cleaning-requests/', cleaning_list, name='cleaning_request_list'),
    path('hostels/<uuid:hostel_pk>/cleaning-requests/<uuid:pk>/', cleaning_detail, name='cleaning_request_detail'),
    path('hostels/<uuid:hostel_pk>/cleaning-requests/<uuid:pk>/start/', cleaning_start, name='cleaning_request_start'),
    path('hostels/<uuid:hostel_pk>/cleaning-requests/<uuid:pk>/complete/', cleaning_complete, name='cleaning_request_complete'),
    path('hostels/<uuid:hostel_pk>/cleaning-requests/<uuid:pk>/reject/', cleaning_reject, name='cleaning_request_reject'),

    # Caller's own records
    path('me/room/', views.MyRoomView.as_view(), name='my_room'),
    path('me/cleaning-requests/', views.MyCleaningRequestView.as_view(), name='my_cleaning_requests'),
]
