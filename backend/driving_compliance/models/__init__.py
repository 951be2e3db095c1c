"""
Driving compliance models package.

This package contains the persisted driving session records that
all driving time totals are computed from.
"""

from .driving_session import DrivingSession

__all__ = ['DrivingSession']
