"""
Truck Park model.

Stores truck parking locations with their facilities so drivers can be
pointed to a place to take a required break or daily rest.
"""

import uuid
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator


class TruckPark(models.Model):
    """
    Truck parking location.

    Coordinates are stored as decimal degrees; distance searches use a
    bounding-box prefilter followed by great circle distance.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200, help_text="Name of the parking")
    address = models.CharField(max_length=300, blank=True)
    country = models.CharField(
        max_length=2,
        help_text="ISO 3166-1 alpha-2 country code"
    )

    # Geographic coordinates
    latitude = models.DecimalField(
        max_digits=10,
        decimal_places=7,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
        help_text="Latitude in decimal degrees"
    )
    longitude = models.DecimalField(
        max_digits=10,
        decimal_places=7,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
        help_text="Longitude in decimal degrees"
    )

    total_spaces = models.PositiveIntegerField(null=True, blank=True)

    # Facilities
    has_security = models.BooleanField(default=False)
    has_camera = models.BooleanField(default=False)
    has_fence = models.BooleanField(default=False)
    has_electricity = models.BooleanField(default=False)
    has_water = models.BooleanField(default=False)
    has_toilets = models.BooleanField(default=False)
    has_showers = models.BooleanField(default=False)
    has_restaurant = models.BooleanField(default=False)
    has_shop = models.BooleanField(default=False)
    has_adblue = models.BooleanField(default=False)
    has_wifi = models.BooleanField(default=False)

    # Occupancy (crowdsourced)
    current_occupancy_pct = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
        help_text="Last reported occupancy in percent"
    )
    last_occupancy_update = models.DateTimeField(null=True, blank=True)

    # Pricing
    price_per_night_eur = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    is_free = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'truck_parks'
        verbose_name = 'Truck Park'
        verbose_name_plural = 'Truck Parks'
        indexes = [
            models.Index(fields=['latitude', 'longitude'], name='truck_parks_latitud_5e8a21_idx'),
            models.Index(fields=['country'], name='truck_parks_country_9f14c3_idx'),
        ]
        constraints = [
            models.UniqueConstraint(fields=['name', 'country'], name='unique_truck_park_per_country'),
        ]

    def __str__(self):
        return f"{self.name} ({self.country})"

    def calculate_distance_to(self, lat, lng):
        """Calculate distance to given coordinates in kilometres."""
        from common.validators import calculate_distance_km
        return calculate_distance_km(
            float(self.latitude), float(self.longitude),
            lat, lng
        )

    def to_summary(self, distance_km=None):
        """Convert to the parking summary returned to drivers."""
        return {
            'id': str(self.id),
            'name': self.name,
            'address': self.address,
            'country': self.country,
            'latitude': float(self.latitude),
            'longitude': float(self.longitude),
            'distance_km': round(distance_km, 2) if distance_km is not None else None,
            'total_spaces': self.total_spaces,
            'has_security': self.has_security,
            'has_showers': self.has_showers,
            'has_toilets': self.has_toilets,
            'has_restaurant': self.has_restaurant,
            'is_free': self.is_free,
            'price_per_night_eur': float(self.price_per_night_eur) if self.price_per_night_eur is not None else None,
            'current_occupancy_pct': self.current_occupancy_pct,
            'source': 'local',
        }
