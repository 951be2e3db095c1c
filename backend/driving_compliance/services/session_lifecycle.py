"""
Session Lifecycle Service.

Starts and stops driving sessions while keeping at most one active
session per driver. Stopping a session fixes its driving minutes and
classifies it against the driving time rules.

Single Responsibility: driving session state transitions only.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from django.db import transaction

from ..exceptions import SessionNotFoundError
from ..models import DrivingSession
from .rule_evaluator import DrivingRuleEvaluator
from .session_store import SessionStoreService
from .window_aggregator import WindowAggregatorService, elapsed_driving_minutes

logger = logging.getLogger(__name__)


class SessionLifecycleService:
    """
    Service for driving session start/stop transitions.

    Start relies on the database's active-session constraint for atomicity;
    stop holds a row lock on the active session until it is closed.
    """

    # A stopped session always records at least this much driving
    MIN_SESSION_DRIVING_MIN = 1

    def __init__(
        self,
        store: Optional[SessionStoreService] = None,
        aggregator: Optional[WindowAggregatorService] = None,
        evaluator: Optional[DrivingRuleEvaluator] = None,
    ):
        self.store = store or SessionStoreService()
        self.aggregator = aggregator or WindowAggregatorService(store=self.store)
        self.evaluator = evaluator or DrivingRuleEvaluator()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def start_session(self, driver, now: datetime) -> DrivingSession:
        """
        Start a new driving session at ``now``.

        Raises:
            SessionConflictError: an active session already exists
        """
        session = self.store.insert_session(driver, started_at=now)
        self.logger.info(f"Driver {driver.pk} started driving session {session.id}")
        return session

    def stop_session(self, driver, now: datetime) -> DrivingSession:
        """
        Stop the driver's active session at ``now``.

        Driving minutes are rounded up to the next whole minute and never
        fall below one. The session is classified with the driver's daily
        and weekly totals as of ``now``.

        Raises:
            SessionNotFoundError: the driver has no active session
        """
        with transaction.atomic():
            session = self.store.lock_active_session(driver)
            if session is None:
                raise SessionNotFoundError()

            # ended_at must stay strictly after started_at
            ended_at = max(now, session.started_at + timedelta(seconds=1))
            total_driving_min = max(
                self.MIN_SESSION_DRIVING_MIN,
                elapsed_driving_minutes(session.started_at, ended_at),
            )

            totals = self.aggregator.compute(
                driver, ended_at, active_session=session, active_minutes=total_driving_min
            )
            snapshot = self.evaluator.evaluate(
                totals.continuous_min, totals.daily_min, totals.weekly_min
            )

            closed = self.store.close_session(
                session.id,
                ended_at=ended_at,
                total_driving_min=total_driving_min,
                violations=snapshot.violations,
                is_compliant=snapshot.is_compliant,
            )
            if closed is None:
                raise SessionNotFoundError()

        self.logger.info(
            f"Driver {driver.pk} stopped driving session {closed.id} "
            f"after {total_driving_min} min ({len(snapshot.violations)} violations)"
        )
        return closed
