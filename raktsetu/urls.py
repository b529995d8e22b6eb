from django.contrib import admin
from django.urls import include, path

from accounts.views import ProfileView
from reminders.views import MyNotificationListView

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/profile/', ProfileView.as_view(), name='profile'),
    path('api/admin/', include('accounts.admin_urls')),
    path('api/hospital/', include('inventory.urls')),
    path('api/hospital/', include('reminders.urls')),
    path('api/hospitals/', include('hospitals.urls')),
    path('api/requests/', include('bloodrequests.urls')),
    path('api/notifications/', MyNotificationListView.as_view(), name='my-notifications'),
]
