"""
Rolling Window Aggregator Service.

Computes continuous, daily, weekly and biweekly driving totals for a driver
from persisted sessions plus the live session, recomputed on every call.

Window boundaries:
- day: local midnight to midnight
- week: ISO week, Monday 00:00 to the next Monday 00:00
- biweek: the current and the preceding ISO week

A session counts entirely toward the window holding its start time.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Tuple

from django.utils import timezone

from ..models import DrivingSession
from .session_store import SessionStoreService

logger = logging.getLogger(__name__)


def elapsed_driving_minutes(started_at: datetime, until: datetime) -> int:
    """Minutes between two instants, partial minutes rounded up."""
    seconds = (until - started_at).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / 60)


def local_day_bounds(now: datetime, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Start and end of the local calendar day containing ``now``."""
    local_now = timezone.localtime(now, tz)
    start = _local_midnight(local_now.date(), tz)
    end = _local_midnight(local_now.date() + timedelta(days=1), tz)
    return start, end


def iso_week_bounds(now: datetime, tz: tzinfo, weeks: int = 1) -> Tuple[datetime, datetime]:
    """
    Start and end of the ISO week containing ``now``.

    With ``weeks`` > 1 the start moves back to cover that many weeks
    ending with the current one.
    """
    local_date = timezone.localtime(now, tz).date()
    monday = local_date - timedelta(days=local_date.weekday())
    start = _local_midnight(monday - timedelta(weeks=weeks - 1), tz)
    end = _local_midnight(monday + timedelta(weeks=1), tz)
    return start, end


def _local_midnight(day, tz: tzinfo) -> datetime:
    return timezone.make_aware(datetime.combine(day, datetime.min.time()), tz)


@dataclass(frozen=True)
class DrivingTotals:
    """Driving minutes per rolling window at a given instant."""
    continuous_min: int
    daily_min: int
    weekly_min: int
    biweekly_min: int
    active_session: Optional[DrivingSession] = None


class WindowAggregatorService:
    """
    Service for computing driving totals per time window.

    Closed sessions contribute their stored ``total_driving_min``; the active
    session contributes its elapsed minutes to each window its start falls in.
    """

    def __init__(self, store: Optional[SessionStoreService] = None):
        self.store = store or SessionStoreService()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def compute(
        self,
        driver,
        now: datetime,
        tz: Optional[tzinfo] = None,
        active_session: Optional[DrivingSession] = None,
        active_minutes: Optional[int] = None,
    ) -> DrivingTotals:
        """
        Compute driving totals for ``driver`` as of ``now``.

        Args:
            driver: The driver whose sessions are aggregated
            now: Instant the totals are computed for
            tz: Zone defining local days and weeks (current zone by default)
            active_session: Already loaded active session, skips the lookup
            active_minutes: Minutes to count for the active session instead
                of its elapsed time (used when closing it)

        Returns:
            DrivingTotals for the continuous, daily, weekly and biweekly windows
        """
        tz = tz or timezone.get_current_timezone()

        active = active_session or self.store.find_active_session(driver)
        if active is None:
            continuous = 0
        elif active_minutes is not None:
            continuous = active_minutes
        else:
            continuous = elapsed_driving_minutes(active.started_at, now)

        windows = {
            'daily': local_day_bounds(now, tz),
            'weekly': iso_week_bounds(now, tz),
            'biweekly': iso_week_bounds(now, tz, weeks=2),
        }

        totals = {}
        for name, (start, end) in windows.items():
            total = self.store.sum_driving_minutes(driver, start, end)
            if active and start <= active.started_at < end:
                total += continuous
            totals[name] = total

        self.logger.debug(
            f"Driving totals for driver {driver.pk}: continuous={continuous} "
            f"daily={totals['daily']} weekly={totals['weekly']} biweekly={totals['biweekly']}"
        )

        return DrivingTotals(
            continuous_min=continuous,
            daily_min=totals['daily'],
            weekly_min=totals['weekly'],
            biweekly_min=totals['biweekly'],
            active_session=active,
        )
