from django.contrib import admin

from .models import TruckPark


@admin.register(TruckPark)
class TruckParkAdmin(admin.ModelAdmin):
    list_display = ['name', 'country', 'total_spaces', 'has_security', 'is_free', 'current_occupancy_pct']
    list_filter = ['country', 'has_security', 'has_showers', 'is_free']
    search_fields = ['name', 'address']
