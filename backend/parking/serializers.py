"""
Parking API Serializers.
"""

from rest_framework import serializers

from common.validators import validate_latitude, validate_longitude


class NearbyParkingQuerySerializer(serializers.Serializer):
    """Query parameters for the nearby parking endpoint."""

    lat = serializers.FloatField(validators=[validate_latitude])
    lng = serializers.FloatField(validators=[validate_longitude])
    radius_km = serializers.FloatField(
        required=False,
        min_value=0.1,
        max_value=500,
        help_text="Search radius in kilometres"
    )
