"""
Common validators and utilities for the driving compliance application.

This module contains shared validation logic and utility functions used
across multiple Django apps.
"""

from django.core.validators import BaseValidator


class GPSCoordinateValidator(BaseValidator):
    """
    Validator for GPS coordinates (latitude/longitude).

    Ensures coordinates are within valid ranges:
    - Latitude: -90 to 90 degrees
    - Longitude: -180 to 180 degrees
    """

    def __init__(self, coordinate_type="latitude"):
        self.coordinate_type = coordinate_type

        if coordinate_type == "latitude":
            self.limit_value = (-90, 90)
            self.message = "Latitude must be between -90 and 90 degrees."
        elif coordinate_type == "longitude":
            self.limit_value = (-180, 180)
            self.message = "Longitude must be between -180 and 180 degrees."
        else:
            raise ValueError("coordinate_type must be 'latitude' or 'longitude'")

    def compare(self, value, limit_value):
        min_val, max_val = limit_value
        return not (min_val <= float(value) <= max_val)

    def clean(self, value):
        return float(value)


def validate_latitude(value):
    """Validate latitude coordinate."""
    validator = GPSCoordinateValidator("latitude")
    validator(value)


def validate_longitude(value):
    """Validate longitude coordinate."""
    validator = GPSCoordinateValidator("longitude")
    validator(value)


EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LATITUDE = 111.0


def calculate_distance_km(lat1, lon1, lat2, lon2):
    """
    Calculate the great circle distance between two points
    on the earth (specified in decimal degrees).

    Returns distance in kilometres.
    """
    from math import radians, cos, sin, asin, sqrt

    # Convert decimal degrees to radians
    lon1, lat1, lon2, lat2 = map(radians, [lon1, lat1, lon2, lat2])

    # Haversine formula
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * asin(sqrt(a))

    return c * EARTH_RADIUS_KM


def bounding_box(lat, lng, radius_km):
    """
    Approximate bounding box around a point.

    Returns (min_lat, max_lat, min_lng, max_lng). Longitude spread widens
    with latitude; near the poles the full longitude range is used.
    """
    from math import cos, radians

    lat_delta = radius_km / KM_PER_DEGREE_LATITUDE
    cos_lat = cos(radians(lat))
    if cos_lat < 0.01:
        lng_delta = 180.0
    else:
        lng_delta = min(180.0, radius_km / (KM_PER_DEGREE_LATITUDE * cos_lat))

    return (
        max(-90.0, lat - lat_delta),
        min(90.0, lat + lat_delta),
        max(-180.0, lng - lng_delta),
        min(180.0, lng + lng_delta),
    )
