from django.contrib import admin

from .models import DrivingSession


@admin.register(DrivingSession)
class DrivingSessionAdmin(admin.ModelAdmin):
    list_display = [
        'driver',
        'started_at',
        'ended_at',
        'total_driving_min',
        'is_compliant',
    ]
    list_filter = ['is_compliant', 'started_at']
    search_fields = ['driver__username']
    readonly_fields = [
        'id',
        'started_at',
        'ended_at',
        'total_driving_min',
        'is_compliant',
        'violations',
        'created_at',
        'updated_at',
    ]
    ordering = ['-started_at']
