"""
URL configuration for Parking API endpoints.
"""

from django.urls import path
from .views import ParkingViewSet

urlpatterns = [
    path('nearby/',
         ParkingViewSet.as_view({'get': 'nearby'}),
         name='parking-nearby'),
]
