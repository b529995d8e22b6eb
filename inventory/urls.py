from django.urls import path
from . import views

urlpatterns = [
    path('inventory/', views.InventoryListView.as_view(), name='inventory-list'),
    path('inventory/add/', views.InventoryAddView.as_view(), name='inventory-add'),
    path('inventory/update/', views.InventoryUpdateView.as_view(), name='inventory-update'),
    path('inventory/reduce/', views.InventoryReduceView.as_view(), name='inventory-reduce'),
]
