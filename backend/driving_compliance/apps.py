"""
Driving compliance app configuration.
"""

from django.apps import AppConfig


class DrivingComplianceConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'driving_compliance'
    verbose_name = 'Driving Time Compliance'
