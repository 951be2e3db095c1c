"""
URL configuration for driving_api project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.1/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def api_root(request):
    """API root endpoint with available endpoints."""
    return JsonResponse({
        'message': 'Driving Time Compliance API',
        'version': '1.0',
        'endpoints': {
            'compliance': '/api/compliance/',
            'parking': '/api/parking/',
            'admin': '/admin/',
        },
        'documentation': {
            'compliance': {
                'description': 'EC 561/2006 driving time tracking and break advisory',
                'endpoints': {
                    'status': 'GET /api/compliance/status/?lat=<float>&lng=<float> - Current driving time status',
                    'start': 'POST /api/compliance/start/ - Start a driving session',
                    'stop': 'POST /api/compliance/stop/ - Stop the active driving session',
                    'history': 'GET /api/compliance/history/?days=<int> - Sessions and daily totals',
                }
            },
            'parking': {
                'description': 'Truck parking lookup',
                'endpoints': {
                    'nearby': 'GET /api/parking/nearby/?lat=<float>&lng=<float>&radius_km=<float> - Parking near a point',
                }
            }
        }
    })


urlpatterns = [
    # Admin interface
    path("admin/", admin.site.urls),

    # API root
    path("api/", api_root, name='api-root'),

    # Driving time compliance API
    path("api/compliance/", include("driving_compliance.urls")),

    # Truck parking API
    path("api/parking/", include("parking.urls")),
]
