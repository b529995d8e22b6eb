from django.urls import path
from . import views

urlpatterns = [
    path('', views.BloodRequestListCreateView.as_view(), name='request-list'),
    path('<int:pk>/', views.BloodRequestDetailView.as_view(), name='request-detail'),
]
