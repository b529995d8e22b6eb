from django.urls import path
from . import views

urlpatterns = [
    path('reminders/', views.EligibleDonorListView.as_view(), name='reminder-list'),
    path('reminders/send/', views.SendAllRemindersView.as_view(), name='reminder-send'),
    path('reminders/send-single/', views.SendSingleReminderView.as_view(), name='reminder-send-single'),
]
