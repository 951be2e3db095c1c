"""
Tests for the break advisory parking suggestions.
"""

from driving_compliance.exceptions import CollaboratorUnavailable
from driving_compliance.services.break_advisory import BreakAdvisoryService
from driving_compliance.services.rule_evaluator import DrivingRuleEvaluator


class FakeLocator:
    """Parking locator double recording its calls."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def find_nearest_parking(self, lat, lng):
        self.calls.append((lat, lng))
        if self.error:
            raise self.error
        return self.result


PARKING = {'id': 'p-1', 'name': 'Autohof Peine', 'distance_km': 4.2}


class TestBreakAdvisoryService:
    """Test when parking is looked up and how failures degrade."""

    def setup_method(self):
        self.evaluator = DrivingRuleEvaluator()

    def test_no_lookup_when_break_is_far(self):
        locator = FakeLocator(result=PARKING)
        advisory = BreakAdvisoryService(locator=locator)

        result = advisory.advise(self.evaluator.evaluate(200, 200, 200), 52.3, 10.2)

        assert result is None
        assert locator.calls == []

    def test_lookup_when_break_is_due_soon(self):
        locator = FakeLocator(result=PARKING)
        advisory = BreakAdvisoryService(locator=locator)

        result = advisory.advise(self.evaluator.evaluate(240, 240, 240), 52.3, 10.2)

        assert result == PARKING
        assert locator.calls == [(52.3, 10.2)]

    def test_lookup_when_break_is_overdue(self):
        locator = FakeLocator(result=PARKING)
        advisory = BreakAdvisoryService(locator=locator)

        assert advisory.advise(self.evaluator.evaluate(300, 300, 300), 52.3, 10.2) == PARKING

    def test_no_position_means_no_suggestion(self):
        locator = FakeLocator(result=PARKING)
        advisory = BreakAdvisoryService(locator=locator)

        assert advisory.advise(self.evaluator.evaluate(260, 260, 260)) is None
        assert advisory.advise(self.evaluator.evaluate(260, 260, 260), 52.3, None) is None
        assert locator.calls == []

    def test_nothing_nearby(self):
        advisory = BreakAdvisoryService(locator=FakeLocator(result=None))

        assert advisory.advise(self.evaluator.evaluate(260, 260, 260), 52.3, 10.2) is None

    def test_locator_failure_degrades_to_none(self):
        locator = FakeLocator(error=CollaboratorUnavailable("Overpass API unavailable"))
        advisory = BreakAdvisoryService(locator=locator)

        assert advisory.advise(self.evaluator.evaluate(260, 260, 260), 52.3, 10.2) is None

    def test_unexpected_locator_error_degrades_to_none(self):
        locator = FakeLocator(error=RuntimeError("boom"))
        advisory = BreakAdvisoryService(locator=locator)

        assert advisory.advise(self.evaluator.evaluate(260, 260, 260), 52.3, 10.2) is None
