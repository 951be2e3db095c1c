"""
OpenStreetMap Overpass API Service

Fetches HGV parking and rest areas from OpenStreetMap using the Overpass
API. Used as a fallback when no local truck park is close enough.

Single Responsibility: OSM parking fetching and parsing
"""

import logging
import requests
from typing import Dict, List, Optional
from django.conf import settings

from common.validators import bounding_box, calculate_distance_km

logger = logging.getLogger(__name__)


class OverpassParkingService:
    """
    Service for fetching truck parking from OpenStreetMap Overpass API.

    Handles:
    - Querying HGV parking and motorway rest areas in a bounding box
    - Parsing OSM elements into parking summaries
    """

    def __init__(self):
        """Initialize Overpass service with configuration."""
        self.base_url = getattr(
            settings, "OVERPASS_API_URL", "https://overpass-api.de/api/interpreter"
        )
        self.timeout = getattr(settings, "OVERPASS_TIMEOUT", 10)

    def find_parking_near(self, lat: float, lng: float, radius_km: float) -> List[Dict]:
        """
        Fetch truck parking within ``radius_km`` of a point, nearest first.

        Raises:
            requests.exceptions.RequestException: the API could not be reached
            ValueError: the response was not valid JSON
        """
        min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius_km)
        query = self._build_overpass_query(min_lat, min_lng, max_lat, max_lng)

        logger.info(
            f"Fetching OSM truck parking for bbox: [{min_lat:.3f}, {min_lng:.3f}, {max_lat:.3f}, {max_lng:.3f}]"
        )

        try:
            response = requests.post(
                self.base_url, data={"data": query}, timeout=self.timeout
            )
            response.raise_for_status()
            elements = response.json().get("elements", [])
        except requests.exceptions.RequestException as e:
            logger.error(f"Overpass API request failed: {str(e)}")
            raise

        parkings = []
        for element in elements:
            parking = self._parse_element(element, lat, lng)
            if parking and parking["distance_km"] <= radius_km:
                parkings.append(parking)

        parkings.sort(key=lambda p: p["distance_km"])
        logger.info(f"Retrieved {len(parkings)} OSM truck parkings within {radius_km} km")
        return parkings

    def _build_overpass_query(self, min_lat, min_lon, max_lat, max_lon):
        bbox = f"{min_lat},{min_lon},{max_lat},{max_lon}"
        return f"""
[out:json][timeout:{self.timeout}];
(
  node["amenity"="parking"]["hgv"~"yes|designated"]({bbox});
  way["amenity"="parking"]["hgv"~"yes|designated"]({bbox});
  node["highway"="rest_area"]({bbox});
  way["highway"="rest_area"]({bbox});
);
out center tags;
"""

    def _parse_element(self, element: Dict, lat: float, lng: float) -> Optional[Dict]:
        if element.get("type") == "node":
            el_lat, el_lng = element.get("lat"), element.get("lon")
        else:
            center = element.get("center", {})
            el_lat, el_lng = center.get("lat"), center.get("lon")

        if el_lat is None or el_lng is None:
            return None

        tags = element.get("tags", {})
        name = tags.get("name") or (
            "Rest area" if tags.get("highway") == "rest_area" else "Truck parking"
        )
        capacity = tags.get("capacity:hgv") or tags.get("capacity")
        fee = tags.get("fee")

        return {
            "id": f"osm:{element.get('type')}/{element.get('id')}",
            "name": name,
            "address": tags.get("addr:street", ""),
            "country": tags.get("addr:country", ""),
            "latitude": float(el_lat),
            "longitude": float(el_lng),
            "distance_km": round(calculate_distance_km(lat, lng, float(el_lat), float(el_lng)), 2),
            "total_spaces": int(capacity) if capacity and capacity.isdigit() else None,
            "has_security": tags.get("supervised") == "yes",
            "has_showers": tags.get("shower") == "yes",
            "has_toilets": tags.get("toilets") == "yes",
            "has_restaurant": tags.get("restaurant") == "yes",
            "is_free": fee == "no",
            "price_per_night_eur": None,
            "current_occupancy_pct": None,
            "source": "osm",
        }
