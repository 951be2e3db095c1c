"""
Driving Rule Evaluator.

Applies the EC 561/2006 driving time thresholds to driving totals and
produces a compliance snapshot with all breached rules.

Rules applied:
- 4.5 hours (270 min) continuous driving, then a 45-minute break
- 10 hours (600 min) extended daily driving limit
- 56 hours (3360 min) weekly driving limit

Rules carried only as reference values:
- 9 hours (540 min) normal daily driving
- 11 hours (660 min) normal daily rest, 9 hours (540 min) reduced rest
- 90 hours (5400 min) over two consecutive weeks

The evaluator has no clock and no storage access, so its output depends
only on its arguments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ComplianceSnapshot:
    """Derived, non-persisted view of a driver's driving time standing."""
    continuous_driving_min: int
    daily_driving_min: int
    weekly_driving_min: int
    time_until_break_min: int
    next_required_break_min: int
    next_daily_rest_min: int
    violations: List[str] = field(default_factory=list)
    suggest_parking: bool = False

    # Filled in by the compliance engine
    biweekly_driving_min: int = 0
    is_driving: bool = False
    session_started_at: Optional[datetime] = None
    nearest_parking: Optional[Dict] = None

    @property
    def is_compliant(self) -> bool:
        return not self.violations


class DrivingRuleEvaluator:
    """
    Evaluator for EC 561/2006 driving time rules.

    Every rule is checked independently; a violation is reported only when
    the limit is exceeded, not when it is reached.
    """

    # Driving time regulation constants (minutes)
    MAX_CONTINUOUS_DRIVING_MIN = 270  # 4.5 hours
    BREAK_DURATION_MIN = 45
    MAX_DAILY_DRIVING_MIN = 540  # 9 hours
    MAX_EXTENDED_DAILY_MIN = 600  # 10 hours, allowed twice a week
    MIN_DAILY_REST_MIN = 660  # 11 hours
    MIN_REDUCED_DAILY_REST_MIN = 540  # 9 hours
    MAX_WEEKLY_DRIVING_MIN = 3360  # 56 hours
    MAX_BIWEEKLY_DRIVING_MIN = 5400  # 90 hours

    # Parking is suggested this many minutes before the break is due
    PARKING_LEAD_MIN = 30

    def __init__(self, parking_lead_min: Optional[int] = None):
        self.parking_lead_min = (
            self.PARKING_LEAD_MIN if parking_lead_min is None else parking_lead_min
        )

    def evaluate(self, continuous_min: int, daily_min: int, weekly_min: int) -> ComplianceSnapshot:
        """
        Classify driving totals against the driving time rules.

        Args:
            continuous_min: Minutes driven in the active session
            daily_min: Minutes driven today
            weekly_min: Minutes driven this week

        Returns:
            ComplianceSnapshot with break timing and violations
        """
        return ComplianceSnapshot(
            continuous_driving_min=continuous_min,
            daily_driving_min=daily_min,
            weekly_driving_min=weekly_min,
            time_until_break_min=max(0, self.MAX_CONTINUOUS_DRIVING_MIN - continuous_min),
            next_required_break_min=(
                self.BREAK_DURATION_MIN
                if continuous_min >= self.MAX_CONTINUOUS_DRIVING_MIN
                else 0
            ),
            next_daily_rest_min=self.MIN_DAILY_REST_MIN,
            violations=self.detect_violations(continuous_min, daily_min, weekly_min),
            suggest_parking=continuous_min >= self.MAX_CONTINUOUS_DRIVING_MIN - self.parking_lead_min,
        )

    def detect_violations(self, continuous_min: int, daily_min: int, weekly_min: int) -> List[str]:
        """Return one message per exceeded rule, continuous first, weekly last."""
        violations = []

        if continuous_min > self.MAX_CONTINUOUS_DRIVING_MIN:
            violations.append(
                f"Exceeded max continuous driving ({continuous_min}/{self.MAX_CONTINUOUS_DRIVING_MIN} min)"
            )

        if daily_min > self.MAX_EXTENDED_DAILY_MIN:
            violations.append(
                f"Exceeded max daily driving ({daily_min}/{self.MAX_EXTENDED_DAILY_MIN} min)"
            )

        if weekly_min > self.MAX_WEEKLY_DRIVING_MIN:
            violations.append(
                f"Exceeded max weekly driving ({weekly_min}/{self.MAX_WEEKLY_DRIVING_MIN} min)"
            )

        return violations

    def get_limits(self) -> Dict[str, int]:
        """Regulatory limits reported alongside a snapshot."""
        return {
            'max_driving_before_break': self.MAX_CONTINUOUS_DRIVING_MIN,
            'max_daily_driving_min': self.MAX_DAILY_DRIVING_MIN,
            'max_extended_daily_driving_min': self.MAX_EXTENDED_DAILY_MIN,
            'max_weekly_driving_min': self.MAX_WEEKLY_DRIVING_MIN,
            'max_biweekly_driving_min': self.MAX_BIWEEKLY_DRIVING_MIN,
        }
