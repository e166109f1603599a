from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_TIMEZONE
from .periods import InvalidTimezoneError, parse_day, resolve_timezone
from .types import (
    ComplianceResult,
    EmployeeInput,
    EvaluationInput,
    Finding,
    Regulation,
    RestTransition,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegulationSchema(CamelModel):
    min_rest_period_minutes: Optional[int] = Field(default=None, ge=0)
    max_daily_minutes: Optional[int] = Field(default=None, ge=0)
    overtime_daily_threshold_minutes: Optional[int] = Field(default=None, ge=0)
    overtime_weekly_threshold_minutes: Optional[int] = Field(default=None, ge=0)
    overtime_monthly_threshold_minutes: Optional[int] = Field(default=None, ge=0)

    def to_regulation(self) -> Regulation:
        return Regulation(**self.model_dump())


class RestTransitionSchema(CamelModel):
    # Kept as raw strings; unparseable instants are skipped during evaluation.
    from_end_iso: str
    to_start_iso: str


class EmployeeInputSchema(CamelModel):
    employee_id: str
    actual_minutes_by_day: dict[str, int] = {}
    scheduled_minutes_by_day: dict[str, int] = {}
    rest_transitions: list[RestTransitionSchema] = []

    @field_validator("actual_minutes_by_day", "scheduled_minutes_by_day")
    @classmethod
    def check_minutes_by_day(cls, value: dict[str, int]) -> dict[str, int]:
        for day, minutes in value.items():
            if parse_day(day) is None:
                raise ValueError(f"day key must be YYYY-MM-DD, got {day!r}")
            if minutes < 0:
                raise ValueError(f"minutes for {day} must not be negative")
        return value

    def to_employee_input(self) -> EmployeeInput:
        return EmployeeInput(
            employee_id=self.employee_id,
            actual_minutes_by_day=dict(self.actual_minutes_by_day),
            scheduled_minutes_by_day=dict(self.scheduled_minutes_by_day),
            rest_transitions=tuple(
                RestTransition(t.from_end_iso, t.to_start_iso) for t in self.rest_transitions
            ),
        )


class EvaluationRequest(CamelModel):
    """Compliance evaluation request."""
    timezone: str = DEFAULT_TIMEZONE
    regulation: RegulationSchema = RegulationSchema()
    employees: list[EmployeeInputSchema] = []

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            resolve_timezone(value)
        except InvalidTimezoneError as e:
            raise ValueError(str(e)) from e
        return value

    def to_input(self) -> EvaluationInput:
        return EvaluationInput(
            timezone=self.timezone,
            regulation=self.regulation.to_regulation(),
            employees=tuple(e.to_employee_input() for e in self.employees),
        )


class FindingSchema(CamelModel):
    """A single compliance finding. Fields not used by ``type`` are None."""
    type: Literal["rest_time", "max_hours", "overtime"]
    employee_id: str
    from_end_iso: Optional[str] = None
    to_start_iso: Optional[str] = None
    rest_minutes: Optional[int] = None
    min_rest_period_minutes: Optional[int] = None
    day: Optional[str] = None
    max_daily_minutes: Optional[int] = None
    period: Optional[Literal["daily", "weekly", "monthly"]] = None
    period_key: Optional[str] = None
    total_minutes: Optional[int] = None
    threshold_minutes: Optional[int] = None

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingSchema":
        return cls(**finding.to_dict())


class FindingCountsSchema(CamelModel):
    rest_time: int = 0
    max_hours: int = 0
    overtime: int = 0


class SummarySchema(CamelModel):
    total_findings: int
    by_type: FindingCountsSchema


class EvaluationResponse(CamelModel):
    """Compliance evaluation response."""
    findings: list[FindingSchema]
    summary: SummarySchema

    @classmethod
    def from_result(cls, result: ComplianceResult) -> "EvaluationResponse":
        summary = result.summary.to_dict()
        return cls(
            findings=[FindingSchema.from_finding(f) for f in result.findings],
            summary=SummarySchema(
                total_findings=summary["total_findings"],
                by_type=FindingCountsSchema(**summary["by_type"]),
            ),
        )
