"""
Compliance Engine.

Entry point used by the request layer. Wires the session lifecycle,
window aggregation, rule evaluation and break advisory services into
the status, start, stop and history operations.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, Optional

from django.conf import settings
from django.utils import timezone

from ..models import DrivingSession
from .break_advisory import BreakAdvisoryService
from .rule_evaluator import ComplianceSnapshot, DrivingRuleEvaluator
from .session_lifecycle import SessionLifecycleService
from .session_store import SessionStoreService
from .window_aggregator import WindowAggregatorService

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Driving time compliance operations for one request.

    All totals are recomputed from stored sessions on every call.
    """

    DEFAULT_HISTORY_DAYS = 7

    def __init__(
        self,
        store: Optional[SessionStoreService] = None,
        evaluator: Optional[DrivingRuleEvaluator] = None,
        advisory: Optional[BreakAdvisoryService] = None,
    ):
        self.store = store or SessionStoreService()
        self.evaluator = evaluator or DrivingRuleEvaluator(
            parking_lead_min=getattr(settings, "BREAK_ADVISORY_LEAD_MINUTES", None)
        )
        self.aggregator = WindowAggregatorService(store=self.store)
        self.lifecycle = SessionLifecycleService(
            store=self.store, aggregator=self.aggregator, evaluator=self.evaluator
        )
        self._advisory = advisory
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def advisory(self) -> BreakAdvisoryService:
        if self._advisory is None:
            self._advisory = BreakAdvisoryService()
        return self._advisory

    def status(
        self,
        driver,
        now: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> ComplianceSnapshot:
        """
        Compute the driver's current compliance snapshot.

        Never writes. Storage failures propagate as CollaboratorUnavailable;
        parking lookup failures only leave ``nearest_parking`` empty.
        """
        now = now or timezone.now()
        totals = self.aggregator.compute(driver, now)
        snapshot = self.evaluator.evaluate(
            totals.continuous_min, totals.daily_min, totals.weekly_min
        )

        active = totals.active_session
        snapshot = replace(
            snapshot,
            biweekly_driving_min=totals.biweekly_min,
            is_driving=active is not None,
            session_started_at=active.started_at if active else None,
        )

        nearest_parking = self.advisory.advise(snapshot, latitude, longitude)
        if nearest_parking is not None:
            snapshot = replace(snapshot, nearest_parking=nearest_parking)

        if snapshot.violations:
            self.logger.info(
                f"Driver {driver.pk} has {len(snapshot.violations)} driving time violations"
            )
        return snapshot

    def start(self, driver, now: Optional[datetime] = None) -> DrivingSession:
        """Start a driving session; raises SessionConflictError if one is active."""
        return self.lifecycle.start_session(driver, now or timezone.now())

    def stop(self, driver, now: Optional[datetime] = None) -> DrivingSession:
        """Stop the active driving session; raises SessionNotFoundError if none."""
        return self.lifecycle.stop_session(driver, now or timezone.now())

    def history(
        self,
        driver,
        now: Optional[datetime] = None,
        window_days: int = DEFAULT_HISTORY_DAYS,
    ) -> Dict:
        """
        Sessions started within the trailing ``window_days`` and their daily totals.

        Returns:
            Dict with ``sessions`` (newest first) and ``daily_summary``
            (one row per local start date, newest first)
        """
        now = now or timezone.now()
        since = now - timedelta(days=window_days)
        tz = timezone.get_current_timezone()

        sessions = self.store.list_sessions(driver, since)
        daily_summary = self.store.daily_summary(driver, since, tz)

        self.logger.debug(
            f"History for driver {driver.pk}: {len(sessions)} sessions over {window_days} days"
        )
        return {
            'sessions': sessions,
            'daily_summary': daily_summary,
        }
