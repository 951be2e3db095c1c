"""
Break Advisory Service.

Attaches a nearby truck parking suggestion when a driver's mandatory
break is close. The lookup is best-effort: any failure leaves the
suggestion empty and never fails the compliance status.
"""

import logging
from typing import Dict, Optional

from .rule_evaluator import ComplianceSnapshot

logger = logging.getLogger(__name__)


class BreakAdvisoryService:
    """
    Service for suggesting parking ahead of a required break.

    The driver's position comes from the caller; nothing here tracks
    location.
    """

    def __init__(self, locator=None):
        if locator is None:
            from parking.services import ParkingLocatorService
            locator = ParkingLocatorService()
        self.locator = locator
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def advise(
        self,
        snapshot: ComplianceSnapshot,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Optional[Dict]:
        """
        Return the nearest parking if a break is due soon, else None.

        Args:
            snapshot: Evaluated compliance snapshot
            latitude: Driver's last known latitude
            longitude: Driver's last known longitude
        """
        if not snapshot.suggest_parking:
            return None

        if latitude is None or longitude is None:
            self.logger.debug("Break is due soon but no driver position was supplied")
            return None

        try:
            parking = self.locator.find_nearest_parking(latitude, longitude)
        except Exception as e:
            self.logger.warning(
                f"Parking lookup failed near ({latitude:.4f}, {longitude:.4f}): {str(e)}"
            )
            return None

        if parking:
            self.logger.info(
                f"Suggesting parking '{parking.get('name')}' "
                f"{parking.get('distance_km')} km away, "
                f"{snapshot.time_until_break_min} min until break"
            )
        return parking
