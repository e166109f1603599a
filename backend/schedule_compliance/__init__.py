"""Labor regulation compliance evaluation for employee schedules."""

from .types import (
    ComplianceResult,
    ComplianceSummary,
    EmployeeInput,
    EvaluationInput,
    Finding,
    FindingType,
    MaxHoursFinding,
    OvertimeFinding,
    OvertimePeriod,
    Regulation,
    RestTimeFinding,
    RestTransition,
)
from .config import setup_logging, validate_config
from .periods import WEEK_START, InvalidTimezoneError
from .engine import ComplianceEngine, evaluate
from .collectors import (
    BaseCollector,
    MaxHoursCollector,
    OvertimeCollector,
    RestTimeCollector,
)

__all__ = [
    "ComplianceResult",
    "ComplianceSummary",
    "EmployeeInput",
    "EvaluationInput",
    "Finding",
    "FindingType",
    "MaxHoursFinding",
    "OvertimeFinding",
    "OvertimePeriod",
    "Regulation",
    "RestTimeFinding",
    "RestTransition",
    "setup_logging",
    "validate_config",
    "WEEK_START",
    "InvalidTimezoneError",
    "ComplianceEngine",
    "evaluate",
    "BaseCollector",
    "MaxHoursCollector",
    "OvertimeCollector",
    "RestTimeCollector",
]
