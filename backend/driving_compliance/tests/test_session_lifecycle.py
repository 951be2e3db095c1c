"""
Tests for driving session start/stop transitions.
"""

import random
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest
from django.db import IntegrityError, connections, transaction
from django.utils import timezone

from driving_compliance.exceptions import SessionConflictError, SessionNotFoundError
from driving_compliance.models import DrivingSession
from driving_compliance.services.session_lifecycle import SessionLifecycleService
from driving_compliance.services.session_store import SessionStoreService


def local(*args):
    return timezone.make_aware(datetime(*args))


@pytest.mark.django_db
class TestSessionStart:
    """Test starting a driving session."""

    def setup_method(self):
        self.lifecycle = SessionLifecycleService()

    def test_start_creates_active_session(self, driver):
        now = local(2024, 1, 17, 8, 0)

        session = self.lifecycle.start_session(driver, now)

        assert session.started_at == now
        assert session.ended_at is None
        assert session.total_driving_min is None
        assert session.is_active
        assert DrivingSession.objects.filter(driver=driver).count() == 1

    def test_start_twice_conflicts(self, driver):
        first = self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 0))

        with pytest.raises(SessionConflictError) as exc_info:
            self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 5))

        assert exc_info.value.session_id == first.id
        assert DrivingSession.objects.filter(driver=driver, ended_at__isnull=True).count() == 1

    def test_drivers_are_independent(self, driver, other_driver):
        self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 0))
        self.lifecycle.start_session(other_driver, local(2024, 1, 17, 8, 0))

        assert DrivingSession.objects.filter(ended_at__isnull=True).count() == 2

    def test_database_rejects_second_active_session(self, driver):
        """The constraint holds even when the service is bypassed."""
        DrivingSession.objects.create(driver=driver, started_at=local(2024, 1, 17, 8, 0))

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DrivingSession.objects.create(driver=driver, started_at=local(2024, 1, 17, 9, 0))

    def test_conflict_when_active_session_stops_during_insert(self, driver):
        """A rejected insert is a conflict even if the blocking session is gone by lookup time."""
        DrivingSession.objects.create(driver=driver, started_at=local(2024, 1, 17, 8, 0))

        class StoppedMeanwhileStore(SessionStoreService):
            def find_active_session(self, driver):
                DrivingSession.objects.filter(driver=driver, ended_at__isnull=True).update(
                    ended_at=local(2024, 1, 17, 9, 0), total_driving_min=60
                )
                return super().find_active_session(driver)

        with pytest.raises(SessionConflictError) as exc_info:
            StoppedMeanwhileStore().insert_session(driver, local(2024, 1, 17, 9, 5))

        assert exc_info.value.session_id is None
        assert not DrivingSession.objects.filter(driver=driver, ended_at__isnull=True).exists()


@pytest.mark.django_db
class TestSessionStop:
    """Test stopping a driving session."""

    def setup_method(self):
        self.lifecycle = SessionLifecycleService()

    def test_stop_without_active_session(self, driver):
        with pytest.raises(SessionNotFoundError):
            self.lifecycle.stop_session(driver, local(2024, 1, 17, 8, 0))

    def test_stop_after_stop(self, driver):
        self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 0))
        self.lifecycle.stop_session(driver, local(2024, 1, 17, 9, 0))

        with pytest.raises(SessionNotFoundError):
            self.lifecycle.stop_session(driver, local(2024, 1, 17, 9, 1))

    def test_immediate_stop_records_one_minute(self, driver):
        start = local(2024, 1, 17, 8, 0)
        self.lifecycle.start_session(driver, start)

        session = self.lifecycle.stop_session(driver, start + timedelta(seconds=1))

        assert session.total_driving_min == 1
        assert session.ended_at == start + timedelta(seconds=1)

    def test_stop_at_start_instant_moves_end_forward(self, driver):
        start = local(2024, 1, 17, 8, 0)
        self.lifecycle.start_session(driver, start)

        session = self.lifecycle.stop_session(driver, start)

        assert session.ended_at > session.started_at
        assert session.total_driving_min == 1

    def test_partial_minutes_round_up(self, driver):
        start = local(2024, 1, 17, 8, 0)
        self.lifecycle.start_session(driver, start)

        session = self.lifecycle.stop_session(driver, start + timedelta(minutes=90, seconds=1))

        assert session.total_driving_min == 91

    def test_compliant_session(self, driver):
        self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 0))

        session = self.lifecycle.stop_session(driver, local(2024, 1, 17, 12, 30))

        assert session.total_driving_min == 270
        assert session.is_compliant is True
        assert session.violations == []

    def test_continuous_violation_recorded(self, driver):
        self.lifecycle.start_session(driver, local(2024, 1, 17, 6, 0))

        session = self.lifecycle.stop_session(driver, local(2024, 1, 17, 11, 0))

        assert session.total_driving_min == 300
        assert session.is_compliant is False
        assert session.violations == ["Exceeded max continuous driving (300/270 min)"]

    def test_daily_violation_includes_earlier_sessions(self, driver):
        DrivingSession.objects.create(
            driver=driver,
            started_at=local(2024, 1, 17, 1, 0),
            ended_at=local(2024, 1, 17, 10, 40),
            total_driving_min=580,
        )
        self.lifecycle.start_session(driver, local(2024, 1, 17, 12, 0))

        session = self.lifecycle.stop_session(driver, local(2024, 1, 17, 12, 30))

        assert session.violations == ["Exceeded max daily driving (610/600 min)"]
        assert session.is_compliant is False

    def test_closed_session_is_not_rewritten(self, driver):
        self.lifecycle.start_session(driver, local(2024, 1, 17, 8, 0))
        closed = self.lifecycle.stop_session(driver, local(2024, 1, 17, 9, 0))

        result = self.lifecycle.store.close_session(
            closed.id,
            ended_at=local(2024, 1, 17, 10, 0),
            total_driving_min=120,
            violations=[],
            is_compliant=True,
        )

        assert result is None
        closed.refresh_from_db()
        assert closed.total_driving_min == 60
        assert closed.ended_at == local(2024, 1, 17, 9, 0)


@pytest.mark.django_db
class TestSingleActiveSessionInvariant:
    """Randomized start/stop sequences never leave two active sessions."""

    def test_random_sequences(self, driver, other_driver):
        lifecycle = SessionLifecycleService()
        rng = random.Random(561)
        now = local(2024, 1, 15, 6, 0)
        active = {driver.pk: False, other_driver.pk: False}

        for _ in range(60):
            user = rng.choice([driver, other_driver])
            now += timedelta(minutes=rng.randint(1, 90))

            if rng.random() < 0.5:
                try:
                    lifecycle.start_session(user, now)
                    assert not active[user.pk]
                    active[user.pk] = True
                except SessionConflictError:
                    assert active[user.pk]
            else:
                try:
                    lifecycle.stop_session(user, now)
                    assert active[user.pk]
                    active[user.pk] = False
                except SessionNotFoundError:
                    assert not active[user.pk]

            for pk in active:
                open_count = DrivingSession.objects.filter(
                    driver_id=pk, ended_at__isnull=True
                ).count()
                assert open_count == (1 if active[pk] else 0)


@pytest.mark.django_db(transaction=True)
class TestConcurrentSessionTransitions:
    """Concurrent starts and stops from separate connections."""

    WORKERS = 8

    def run_concurrently(self, task):
        barrier = threading.Barrier(self.WORKERS)

        def worker(index):
            try:
                barrier.wait()
                return task(index)
            finally:
                connections.close_all()

        with ThreadPoolExecutor(max_workers=self.WORKERS) as pool:
            return list(pool.map(worker, range(self.WORKERS)))

    def test_only_one_concurrent_start_succeeds(self, driver):
        now = local(2024, 1, 17, 8, 0)

        def start(index):
            try:
                SessionLifecycleService().start_session(driver, now)
                return 'started'
            except SessionConflictError:
                return 'conflict'

        outcomes = self.run_concurrently(start)

        assert outcomes.count('started') == 1
        assert outcomes.count('conflict') == self.WORKERS - 1
        assert DrivingSession.objects.filter(driver=driver, ended_at__isnull=True).count() == 1

    def test_random_concurrent_sequences(self, driver):
        base = local(2024, 1, 15, 6, 0)

        def run_sequence(index):
            rng = random.Random(561 + index)
            lifecycle = SessionLifecycleService()
            counts = {'started': 0, 'stopped': 0}
            for step in range(10):
                now = base + timedelta(minutes=step * 30 + rng.randint(0, 29))
                if rng.random() < 0.5:
                    try:
                        lifecycle.start_session(driver, now)
                        counts['started'] += 1
                    except SessionConflictError:
                        pass
                else:
                    try:
                        lifecycle.stop_session(driver, now)
                        counts['stopped'] += 1
                    except SessionNotFoundError:
                        pass
            return counts

        results = self.run_concurrently(run_sequence)
        started = sum(r['started'] for r in results)
        stopped = sum(r['stopped'] for r in results)

        open_count = DrivingSession.objects.filter(driver=driver, ended_at__isnull=True).count()
        assert open_count <= 1
        assert started - stopped == open_count
        assert DrivingSession.objects.filter(driver=driver).count() == started
        for session in DrivingSession.objects.filter(driver=driver, ended_at__isnull=False):
            assert session.ended_at > session.started_at
            assert session.total_driving_min >= 1
