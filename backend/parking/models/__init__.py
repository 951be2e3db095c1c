"""
Parking models package.

This package contains the truck parking locations used for
break and rest suggestions.
"""

from .truck_park import TruckPark

__all__ = ['TruckPark']
