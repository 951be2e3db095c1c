"""
Parking Locator Service.

Finds truck parking near a position, nearest first. Local truck parks are
searched first; OpenStreetMap is consulted only when enabled and nothing
local is within range.

Single Responsibility: parking lookup by distance only.
"""

import logging
from typing import Dict, List, Optional

import requests
from django.conf import settings
from django.db import DatabaseError

from common.validators import bounding_box
from driving_compliance.exceptions import CollaboratorUnavailable
from ..models import TruckPark
from .overpass_service import OverpassParkingService

logger = logging.getLogger(__name__)


class ParkingLocatorService:
    """
    Service for locating truck parking around a driver.

    "Nothing found" is a normal outcome and returns an empty result;
    CollaboratorUnavailable is raised only when a data source fails.
    """

    MAX_RESULTS = 50

    def __init__(self, overpass: Optional[OverpassParkingService] = None):
        self.default_radius_km = getattr(settings, "PARKING_SEARCH_RADIUS_KM", 50)
        self.use_overpass = getattr(settings, "PARKING_OVERPASS_FALLBACK", False)
        self.overpass = overpass or OverpassParkingService()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def find_parking_nearby(
        self,
        lat: float,
        lng: float,
        radius_km: Optional[float] = None,
        limit: int = MAX_RESULTS,
    ) -> List[Dict]:
        """
        Find local truck parks within ``radius_km``, nearest first.

        Args:
            lat: Latitude to search around
            lng: Longitude to search around
            radius_km: Search radius in kilometres
            limit: Maximum number of results

        Returns:
            List of parking summaries with ``distance_km``
        """
        if radius_km is None:
            radius_km = self.default_radius_km
        min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_km)

        try:
            candidates = list(
                TruckPark.objects.filter(
                    latitude__range=(min_lat, max_lat),
                    longitude__range=(min_lng, max_lng),
                )
            )
        except DatabaseError as e:
            self.logger.error(f"Truck park query failed: {str(e)}")
            raise CollaboratorUnavailable("Parking store unavailable") from e

        results = []
        for park in candidates:
            distance = park.calculate_distance_to(lat, lng)
            if distance <= radius_km:
                results.append((distance, park))

        results.sort(key=lambda item: item[0])
        return [park.to_summary(distance) for distance, park in results[:limit]]

    def find_nearest_parking(self, lat: float, lng: float) -> Optional[Dict]:
        """
        Return the nearest truck parking, or None if none is in range.

        Raises:
            CollaboratorUnavailable: a data source failed
        """
        nearby = self.find_parking_nearby(lat, lng, limit=1)
        if nearby:
            return nearby[0]

        if not self.use_overpass:
            return None

        try:
            osm_parkings = self.overpass.find_parking_near(lat, lng, self.default_radius_km)
        except (requests.exceptions.RequestException, ValueError) as e:
            raise CollaboratorUnavailable("Overpass API unavailable") from e

        return osm_parkings[0] if osm_parkings else None
