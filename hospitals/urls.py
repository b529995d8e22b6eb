from django.urls import path
from . import views

urlpatterns = [
    path('', views.HospitalListView.as_view(), name='hospital-list'),
    path('search/', views.HospitalSearchView.as_view(), name='hospital-search'),
    path('nearby/', views.HospitalNearbyView.as_view(), name='hospital-nearby'),
    path('cities/', views.CityListView.as_view(), name='hospital-cities'),
    path('<int:pk>/', views.HospitalDetailView.as_view(), name='hospital-detail'),
]
