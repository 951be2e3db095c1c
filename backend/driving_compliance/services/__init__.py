"""
Driving Compliance Services Package.

This package contains the business logic for EC 561/2006 driving
time tracking.

Services:
- SessionStoreService: Driving session persistence
- WindowAggregatorService: Continuous/daily/weekly/biweekly totals
- DrivingRuleEvaluator: Driving time rule classification
- SessionLifecycleService: Session start/stop transitions
- BreakAdvisoryService: Parking suggestions before a required break
- ComplianceEngine: Status, start, stop and history operations
"""

from .session_store import SessionStoreService
from .window_aggregator import WindowAggregatorService, DrivingTotals
from .rule_evaluator import DrivingRuleEvaluator, ComplianceSnapshot
from .session_lifecycle import SessionLifecycleService
from .break_advisory import BreakAdvisoryService
from .compliance_engine import ComplianceEngine

__all__ = [
    'SessionStoreService',
    'WindowAggregatorService',
    'DrivingTotals',
    'DrivingRuleEvaluator',
    'ComplianceSnapshot',
    'SessionLifecycleService',
    'BreakAdvisoryService',
    'ComplianceEngine',
]
