"""
URL configuration for Driving Compliance API endpoints.

Provides URL routing for driving time status, session start/stop
and driving history.
"""

from django.urls import path
from .views import DrivingComplianceViewSet

urlpatterns = [
    path('status/',
         DrivingComplianceViewSet.as_view({'get': 'current_status'}),
         name='compliance-status'),
    path('start/',
         DrivingComplianceViewSet.as_view({'post': 'start'}),
         name='compliance-start'),
    path('stop/',
         DrivingComplianceViewSet.as_view({'post': 'stop'}),
         name='compliance-stop'),
    path('history/',
         DrivingComplianceViewSet.as_view({'get': 'history'}),
         name='compliance-history'),
]

# API Documentation - Available Endpoints:
"""
GET Endpoints:
- /api/compliance/status/?lat=<float>&lng=<float> - Current driving time status and violations
- /api/compliance/history/?days=<int> - Sessions and daily driving totals for the trailing window

POST Endpoints:
- /api/compliance/start/ - Start a driving session (409 if one is active)
- /api/compliance/stop/ - Stop the active driving session (404 if none)
"""
