"""
Tests for the driving time rule evaluator.

The evaluator is pure, so no database or clock is needed.
"""

import pytest

from driving_compliance.services.rule_evaluator import ComplianceSnapshot, DrivingRuleEvaluator


class TestDrivingRuleConstants:
    """Test regulation thresholds."""

    def test_thresholds(self):
        """Thresholds match EC 561/2006 in minutes."""
        assert DrivingRuleEvaluator.MAX_CONTINUOUS_DRIVING_MIN == 270
        assert DrivingRuleEvaluator.BREAK_DURATION_MIN == 45
        assert DrivingRuleEvaluator.MAX_DAILY_DRIVING_MIN == 540
        assert DrivingRuleEvaluator.MAX_EXTENDED_DAILY_MIN == 600
        assert DrivingRuleEvaluator.MIN_DAILY_REST_MIN == 660
        assert DrivingRuleEvaluator.MIN_REDUCED_DAILY_REST_MIN == 540
        assert DrivingRuleEvaluator.MAX_WEEKLY_DRIVING_MIN == 3360
        assert DrivingRuleEvaluator.MAX_BIWEEKLY_DRIVING_MIN == 5400


class TestDrivingRuleEvaluator:
    """Test rule evaluation."""

    def setup_method(self):
        self.evaluator = DrivingRuleEvaluator()

    def test_no_driving(self):
        """A rested driver has the full continuous allowance and no violations."""
        snapshot = self.evaluator.evaluate(0, 0, 0)

        assert snapshot.violations == []
        assert snapshot.time_until_break_min == 270
        assert snapshot.next_required_break_min == 0
        assert snapshot.next_daily_rest_min == 660
        assert snapshot.is_compliant
        assert not snapshot.suggest_parking

    def test_continuous_limit_reached_is_not_a_violation(self):
        """Reaching 270 minutes requires a break but is not yet a violation."""
        snapshot = self.evaluator.evaluate(270, 0, 0)

        assert snapshot.next_required_break_min == 45
        assert snapshot.time_until_break_min == 0
        assert snapshot.violations == []

    def test_all_violations_reported_together(self):
        """Continuous, daily and weekly breaches are all listed, in that order."""
        snapshot = self.evaluator.evaluate(300, 650, 3500)

        assert snapshot.violations == [
            "Exceeded max continuous driving (300/270 min)",
            "Exceeded max daily driving (650/600 min)",
            "Exceeded max weekly driving (3500/3360 min)",
        ]
        assert not snapshot.is_compliant

    def test_daily_violation_uses_extended_limit(self):
        """Driving past 9 hours is allowed; only 10 hours is enforced."""
        assert self.evaluator.evaluate(0, 600, 0).violations == []
        assert self.evaluator.evaluate(0, 601, 0).violations == [
            "Exceeded max daily driving (601/600 min)"
        ]

    def test_weekly_violation_only(self):
        """A weekly breach is reported even when the other rules hold."""
        snapshot = self.evaluator.evaluate(10, 100, 3361)

        assert snapshot.violations == ["Exceeded max weekly driving (3361/3360 min)"]

    def test_time_until_break_never_negative(self):
        snapshot = self.evaluator.evaluate(400, 400, 400)

        assert snapshot.time_until_break_min == 0
        assert snapshot.next_required_break_min == 45

    @pytest.mark.parametrize("continuous,expected", [
        (239, False),
        (240, True),
        (270, True),
        (310, True),
    ])
    def test_parking_suggested_within_30_minutes_of_break(self, continuous, expected):
        assert self.evaluator.evaluate(continuous, 0, 0).suggest_parking is expected

    def test_custom_parking_lead(self):
        evaluator = DrivingRuleEvaluator(parking_lead_min=60)

        assert evaluator.evaluate(210, 0, 0).suggest_parking
        assert not evaluator.evaluate(209, 0, 0).suggest_parking

    def test_evaluate_is_deterministic(self):
        """Same inputs always yield equal snapshots."""
        first = self.evaluator.evaluate(123, 456, 789)
        second = self.evaluator.evaluate(123, 456, 789)

        assert first == second
        assert isinstance(first, ComplianceSnapshot)

    def test_biweekly_total_is_not_enforced(self):
        """The 90-hour fortnight limit is carried but never reported."""
        snapshot = self.evaluator.evaluate(0, 0, 3000)

        assert snapshot.violations == []
        assert self.evaluator.get_limits()['max_biweekly_driving_min'] == 5400
