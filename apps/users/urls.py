# apps/users/urls.py

from django.urls import path
from . import views

app_name = 'users'

user_list = views.AdminUserViewSet.as_view({'get': 'list', 'post': 'create'})
user_detail = views.AdminUserViewSet.as_view({'get': 'retrieve', 'put': 'update', 'patch': 'partial_update'})
user_token = views.AdminUserViewSet.as_view({'post': 'token'})

binding_list = views.RoleBindingViewSet.as_view({'get': 'list', 'post': 'create'})
binding_detail = views.RoleBindingViewSet.as_view({'get': 'retrieve', 'delete': 'destroy'})

urlpatterns = [
    # Authentication
    path('auth/token/', views.ObtainTokenView.as_view(), name='obtain_token'),

    # Platform administration
    path('admin/users/', user_list, name='admin_user_list'),
    path('admin/users/<uuid:pk>/', user_detail, name='admin_user_detail'),
    path('admin/users/<uuid:pk>/token/', user_token, name='admin_user_token'),
    path('admin/role-bindings/', binding_list, name='admin_role_binding_list'),
    path('admin/role-bindings/<uuid:pk>/', binding_detail, name='admin_role_binding_detail'),

    # Profile
    path('me/', views.MeView.as_view(), name='me'),
    path('me/password/', views.ChangePasswordView.as_view(), name='change_password'),
]
