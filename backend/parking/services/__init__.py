"""
Parking Services Package.

Services:
- ParkingLocatorService: Nearest truck parking lookup
- OverpassParkingService: OpenStreetMap truck parking fallback
"""

from .parking_locator import ParkingLocatorService
from .overpass_service import OverpassParkingService

__all__ = [
    'ParkingLocatorService',
    'OverpassParkingService',
]
