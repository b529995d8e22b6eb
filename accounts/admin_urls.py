from django.urls import path

from .views import AdminUserListView, AdminUserRoleView, AdminUserDeleteView, AdminStatsView

urlpatterns = [
    path('users/', AdminUserListView.as_view(), name='admin-user-list'),
    path('users/<int:pk>/role/', AdminUserRoleView.as_view(), name='admin-user-role'),
    path('users/<int:pk>/', AdminUserDeleteView.as_view(), name='admin-user-delete'),
    path('stats/', AdminStatsView.as_view(), name='admin-stats'),
]
