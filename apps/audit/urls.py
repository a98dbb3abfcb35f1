from django.urls import path
from . import views

app_name = 'audit'

urlpatterns = [
    path('admin/audit-logs/', views.AdminAuditLogListView.as_view(), name='admin_auditlog_list'),
    path('hostels/<uuid:hostel_pk>/audit-logs/', views.HostelAuditLogListView.as_view(), name='hostel_auditlog_list'),
]
