"""
Session Store Service.

Reads and writes persisted driving session records through the Django ORM.
All database failures surface as CollaboratorUnavailable so callers never
mistake a storage outage for "no driving recorded".

Single Responsibility: driving session persistence only.
"""

import logging
from datetime import datetime, tzinfo
from typing import Dict, List, Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from ..exceptions import CollaboratorUnavailable, SessionConflictError
from ..models import DrivingSession

logger = logging.getLogger(__name__)

ACTIVE_SESSION_CONSTRAINT = 'one_active_session_per_driver'


class SessionStoreService:
    """
    Storage adapter for driving sessions.

    The single-active-session invariant is enforced by the
    ``one_active_session_per_driver`` constraint; this adapter only
    translates a violation of it into SessionConflictError.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def find_active_session(self, driver) -> Optional[DrivingSession]:
        """Return the driver's active session, or None."""
        try:
            return (
                DrivingSession.objects.filter(driver=driver, ended_at__isnull=True)
                .order_by('-started_at')
                .first()
            )
        except DatabaseError as e:
            self.logger.error(f"Active session lookup failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    def insert_session(self, driver, started_at: datetime) -> DrivingSession:
        """
        Insert a new active session.

        Raises:
            SessionConflictError: the driver already has an active session
            CollaboratorUnavailable: the database could not be reached
        """
        try:
            with transaction.atomic():
                return DrivingSession.objects.create(driver=driver, started_at=started_at)
        except IntegrityError as e:
            if not self._is_active_session_conflict(e):
                self.logger.error(f"Session insert rejected for driver {driver.pk}: {str(e)}")
                raise CollaboratorUnavailable("Session store rejected the insert") from e
            # The conflicting session may already have been stopped concurrently
            existing = self.find_active_session(driver)
            raise SessionConflictError(
                session_id=existing.id if existing else None
            ) from e
        except DatabaseError as e:
            self.logger.error(f"Session insert failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    @staticmethod
    def _is_active_session_conflict(error: IntegrityError) -> bool:
        """
        Whether an IntegrityError comes from the one-active-session constraint.

        PostgreSQL names the constraint; SQLite reports the unique column.
        """
        message = str(error)
        if ACTIVE_SESSION_CONSTRAINT in message:
            return True
        return 'UNIQUE' in message.upper() and 'driver_id' in message

    def lock_active_session(self, driver) -> Optional[DrivingSession]:
        """
        Return the active session with a row lock held.

        Must be called inside ``transaction.atomic()``.
        """
        try:
            return (
                DrivingSession.objects.select_for_update()
                .filter(driver=driver, ended_at__isnull=True)
                .first()
            )
        except DatabaseError as e:
            self.logger.error(f"Active session lock failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    def close_session(
        self,
        session_id,
        ended_at: datetime,
        total_driving_min: int,
        violations: List[str],
        is_compliant: bool,
    ) -> Optional[DrivingSession]:
        """
        Close an active session and return the updated record.

        Only rows that are still active are touched, so a closed session is
        never rewritten. Returns None when no active row matched.
        """
        try:
            updated = DrivingSession.objects.filter(
                id=session_id, ended_at__isnull=True
            ).update(
                ended_at=ended_at,
                total_driving_min=total_driving_min,
                violations=violations,
                is_compliant=is_compliant,
            )
            if not updated:
                return None
            return DrivingSession.objects.get(id=session_id)
        except DatabaseError as e:
            self.logger.error(f"Closing session {session_id} failed: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    def sum_driving_minutes(self, driver, from_ts: datetime, to_ts: datetime) -> int:
        """
        Sum stored driving minutes of sessions started in [from_ts, to_ts).

        Active sessions have no stored total and contribute nothing.
        """
        try:
            result = DrivingSession.objects.filter(
                driver=driver,
                started_at__gte=from_ts,
                started_at__lt=to_ts,
            ).aggregate(total=Sum('total_driving_min', default=0))
            return int(result['total'])
        except DatabaseError as e:
            self.logger.error(f"Driving minutes aggregation failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    def list_sessions(self, driver, since: datetime) -> List[DrivingSession]:
        """Return sessions started at or after ``since``, newest first."""
        try:
            return list(
                DrivingSession.objects.filter(driver=driver, started_at__gte=since)
                .order_by('-started_at')
            )
        except DatabaseError as e:
            self.logger.error(f"Session listing failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e

    def daily_summary(self, driver, since: datetime, tz: tzinfo) -> List[Dict]:
        """
        Aggregate sessions started at or after ``since`` by local start date.

        Returns rows with date, total_driving, total_break, total_distance
        and session_count, newest date first.
        """
        try:
            rows = (
                DrivingSession.objects.filter(driver=driver, started_at__gte=since)
                .annotate(date=TruncDate('started_at', tzinfo=tz))
                .values('date')
                .annotate(
                    total_driving=Sum('total_driving_min', default=0),
                    total_break=Sum('total_break_min', default=0),
                    total_distance=Sum('distance_km'),
                    session_count=Count('id'),
                )
                .order_by('-date')
            )
            return [
                {
                    'date': row['date'],
                    'total_driving': int(row['total_driving']),
                    'total_break': int(row['total_break']),
                    'total_distance': float(row['total_distance']) if row['total_distance'] is not None else 0.0,
                    'session_count': row['session_count'],
                }
                for row in rows
            ]
        except DatabaseError as e:
            self.logger.error(f"Daily summary failed for driver {driver.pk}: {str(e)}")
            raise CollaboratorUnavailable("Session store unavailable") from e
