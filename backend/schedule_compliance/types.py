"""Type definitions for the schedule compliance evaluator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Union


class FindingType(str, Enum):
    """Discriminant of a compliance finding."""
    REST_TIME = "rest_time"
    MAX_HOURS = "max_hours"
    OVERTIME = "overtime"


class OvertimePeriod(str, Enum):
    """Granularity of an overtime aggregate."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Regulation:
    """Labor-regulation thresholds. ``None`` disables the matching check."""
    min_rest_period_minutes: Optional[int] = None
    max_daily_minutes: Optional[int] = None
    overtime_daily_threshold_minutes: Optional[int] = None
    overtime_weekly_threshold_minutes: Optional[int] = None
    overtime_monthly_threshold_minutes: Optional[int] = None


@dataclass(frozen=True)
class RestTransition:
    """Gap between the end of one work interval and the start of the next."""
    from_end_iso: str
    to_start_iso: str


@dataclass(frozen=True)
class EmployeeInput:
    """Per-employee working time, already aggregated by calendar day."""
    employee_id: str
    actual_minutes_by_day: dict[str, int] = field(default_factory=dict)
    scheduled_minutes_by_day: dict[str, int] = field(default_factory=dict)
    rest_transitions: tuple[RestTransition, ...] = ()

    def combined_minutes_by_day(self) -> dict[str, int]:
        """Actual plus scheduled minutes per day, keys sorted ascending."""
        combined: dict[str, int] = {}
        for day in sorted(set(self.actual_minutes_by_day) | set(self.scheduled_minutes_by_day)):
            combined[day] = (
                self.actual_minutes_by_day.get(day, 0)
                + self.scheduled_minutes_by_day.get(day, 0)
            )
        return combined


@dataclass(frozen=True)
class EvaluationInput:
    """Everything one evaluation needs."""
    timezone: str
    regulation: Regulation = field(default_factory=Regulation)
    employees: tuple[EmployeeInput, ...] = ()


@dataclass(frozen=True)
class RestTimeFinding:
    """Rest between two work intervals shorter than the configured minimum."""
    employee_id: str
    from_end_iso: str
    to_start_iso: str
    rest_minutes: int
    min_rest_period_minutes: int
    type: Literal[FindingType.REST_TIME] = field(default=FindingType.REST_TIME, init=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "type": self.type.value,
            "employee_id": self.employee_id,
            "from_end_iso": self.from_end_iso,
            "to_start_iso": self.to_start_iso,
            "rest_minutes": self.rest_minutes,
            "min_rest_period_minutes": self.min_rest_period_minutes,
        }


@dataclass(frozen=True)
class MaxHoursFinding:
    """Combined minutes of one day above the daily ceiling."""
    employee_id: str
    day: str
    total_minutes: int
    max_daily_minutes: int
    type: Literal[FindingType.MAX_HOURS] = field(default=FindingType.MAX_HOURS, init=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "type": self.type.value,
            "employee_id": self.employee_id,
            "day": self.day,
            "total_minutes": self.total_minutes,
            "max_daily_minutes": self.max_daily_minutes,
        }


@dataclass(frozen=True)
class OvertimeFinding:
    """Aggregate minutes of a day, week or month above its overtime threshold."""
    employee_id: str
    period: OvertimePeriod
    period_key: str  # "YYYY-MM-DD" for daily/weekly, "YYYY-MM" for monthly
    total_minutes: int
    threshold_minutes: int
    type: Literal[FindingType.OVERTIME] = field(default=FindingType.OVERTIME, init=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "type": self.type.value,
            "employee_id": self.employee_id,
            "period": self.period.value,
            "period_key": self.period_key,
            "total_minutes": self.total_minutes,
            "threshold_minutes": self.threshold_minutes,
        }


Finding = Union[RestTimeFinding, MaxHoursFinding, OvertimeFinding]


@dataclass(frozen=True)
class ComplianceSummary:
    """Finding counts, derived from a list of findings."""
    total_findings: int
    by_type: dict[FindingType, int]

    @classmethod
    def from_findings(cls, findings: tuple[Finding, ...]) -> "ComplianceSummary":
        by_type = {finding_type: 0 for finding_type in FindingType}
        for finding in findings:
            by_type[finding.type] += 1
        return cls(total_findings=len(findings), by_type=by_type)

    def to_dict(self) -> dict:
        return {
            "total_findings": self.total_findings,
            "by_type": {k.value: v for k, v in self.by_type.items()},
        }


@dataclass(frozen=True)
class ComplianceResult:
    """Result of a compliance evaluation."""
    findings: tuple[Finding, ...] = ()

    @property
    def summary(self) -> ComplianceSummary:
        return ComplianceSummary.from_findings(self.findings)

    @property
    def is_compliant(self) -> bool:
        return not self.findings

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "findings": [f.to_dict() for f in self.findings],
            "summary": self.summary.to_dict(),
        }
