"""Build evaluator input for a schedule window from loaded records.

Work periods (clocked time) become actual minutes, planned shifts become
scheduled minutes, and both are merged into one timeline to derive the rest
transitions that start inside the window.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable, Mapping, Optional

from dateutil import parser

from .config import LOOKBACK_DAYS
from .engine import evaluate
from .fingerprint import build_fingerprint, sorted_counts_json
from .periods import resolve_timezone, round_minutes
from .types import (
    ComplianceResult,
    EmployeeInput,
    EvaluationInput,
    Regulation,
    RestTransition,
)


@dataclass(frozen=True)
class WorkPeriodRecord:
    """A completed clock-in/clock-out period."""
    employee_id: str
    start_time: datetime  # timezone-aware
    end_time: datetime  # timezone-aware
    duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class ShiftRecord:
    """A planned shift assigned to an employee."""
    employee_id: Optional[str]
    date: date
    start_time: str  # HH:MM or HH:MM:SS, local to the organization timezone
    end_time: str


@dataclass(frozen=True)
class WorkInterval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class WindowEvaluation:
    """Evaluation of one organization's schedule window."""
    organization_id: str
    result: ComplianceResult
    fingerprint: str


@dataclass(frozen=True)
class PublishAcknowledgment:
    """What gets recorded when a schedule is published despite findings."""
    organization_id: str
    actor_employee_id: str
    published_range_start: date
    published_range_end: date
    warning_count_total: int
    warning_counts_by_type: str  # sorted JSON
    evaluation_fingerprint: str

    @classmethod
    def from_evaluation(
        cls,
        evaluation: WindowEvaluation,
        actor_employee_id: str,
        published_range_start: date,
        published_range_end: date,
    ) -> "PublishAcknowledgment":
        summary = evaluation.result.summary
        return cls(
            organization_id=evaluation.organization_id,
            actor_employee_id=actor_employee_id,
            published_range_start=published_range_start,
            published_range_end=published_range_end,
            warning_count_total=summary.total_findings,
            warning_counts_by_type=sorted_counts_json(
                {k.value: v for k, v in summary.by_type.items()}
            ),
            evaluation_fingerprint=evaluation.fingerprint,
        )


def normalize_regulation(values: Optional[Mapping[str, Optional[int]]]) -> Regulation:
    """Regulation from a stored mapping; missing or null fields stay unset."""
    if not values:
        return Regulation()
    return Regulation(**{
        f.name: values[f.name]
        for f in fields(Regulation)
        if values.get(f.name) is not None
    })


def effective_regulation(
    employee_ids: Iterable[str],
    policies: Mapping[str, Optional[Mapping[str, Optional[int]]]],
) -> Regulation:
    """The first regulation found among the employees' policies, in order."""
    for employee_id in employee_ids:
        values = policies.get(employee_id)
        if values is not None:
            return normalize_regulation(values)
    return Regulation()


def _utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc)


def _minutes_between(start: datetime, end: datetime) -> int:
    return round_minutes(_utc(end) - _utc(start))


def _add_minutes(target: dict[str, int], day_key: str, minutes: int) -> None:
    if minutes <= 0:
        return
    target[day_key] = target.get(day_key, 0) + minutes


def shift_interval(day: date, start_time: str, end_time: str, zone: tzinfo) -> Optional[WorkInterval]:
    """
    Localized interval of a planned shift.

    A shift whose end is at or before its start ends on the next day.
    Returns None if either time does not parse.
    """
    try:
        start = parser.isoparse(f"{day.isoformat()}T{start_time}").replace(tzinfo=zone)
        end = parser.isoparse(f"{day.isoformat()}T{end_time}").replace(tzinfo=zone)
    except (ValueError, OverflowError):
        return None

    if end <= start:
        end += timedelta(days=1)

    return WorkInterval(start=start, end=end)


def window_bounds(start_date: date, end_date: date, zone: tzinfo) -> tuple[datetime, datetime]:
    """Start of the first day and end of the last day of a window."""
    return (
        datetime.combine(start_date, time.min, tzinfo=zone),
        datetime.combine(end_date, time.max, tzinfo=zone),
    )


def lookback_start(start_date: date, zone: tzinfo, days: int = LOOKBACK_DAYS) -> datetime:
    """Earliest work-period start needed to evaluate a window."""
    return datetime.combine(start_date - timedelta(days=days), time.min, tzinfo=zone)


def build_employee_input(
    employee_id: str,
    work_periods: Iterable[WorkPeriodRecord],
    shifts: Iterable[ShiftRecord],
    zone: tzinfo,
    window_start: date,
    window_end: date,
) -> EmployeeInput:
    """Aggregate one employee's records into evaluator input."""
    actual_minutes_by_day: dict[str, int] = {}
    scheduled_minutes_by_day: dict[str, int] = {}
    intervals: list[WorkInterval] = []

    for period in work_periods:
        start = period.start_time.astimezone(zone)
        end = period.end_time.astimezone(zone)
        minutes = period.duration_minutes
        if minutes is None:
            minutes = max(0, _minutes_between(start, end))

        _add_minutes(actual_minutes_by_day, start.date().isoformat(), minutes)
        intervals.append(WorkInterval(start=start, end=end))

    for shift in shifts:
        interval = shift_interval(shift.date, shift.start_time, shift.end_time, zone)
        if interval is None:
            continue

        minutes = max(0, _minutes_between(interval.start, interval.end))
        _add_minutes(scheduled_minutes_by_day, interval.start.date().isoformat(), minutes)
        intervals.append(interval)

    intervals.sort(key=lambda i: _utc(i.start))

    window_start_dt, window_end_dt = (_utc(b) for b in window_bounds(window_start, window_end, zone))
    transitions: list[RestTransition] = []
    for previous, current in zip(intervals, intervals[1:]):
        current_start = _utc(current.start)
        if current_start > _utc(previous.end) and window_start_dt <= current_start <= window_end_dt:
            transitions.append(RestTransition(
                from_end_iso=previous.end.isoformat(),
                to_start_iso=current.start.isoformat(),
            ))

    return EmployeeInput(
        employee_id=employee_id,
        actual_minutes_by_day=actual_minutes_by_day,
        scheduled_minutes_by_day=scheduled_minutes_by_day,
        rest_transitions=tuple(transitions),
    )


def evaluate_schedule_window(
    organization_id: str,
    start_date: date,
    end_date: date,
    timezone_name: str,
    shifts: Iterable[ShiftRecord],
    work_periods: Iterable[WorkPeriodRecord],
    policies: Mapping[str, Optional[Mapping[str, Optional[int]]]],
) -> WindowEvaluation:
    """
    Evaluate every employee with an assigned shift in the window.

    Args:
        organization_id: Organization the records belong to
        start_date: First day of the window
        end_date: Last day of the window
        timezone_name: IANA zone of the organization
        shifts: Planned shifts; unassigned or out-of-window ones are ignored
        work_periods: Completed work periods; only those starting between the
            lookback start and the end of the window are used
        policies: employee_id -> regulation mapping of the effective policy

    Returns:
        WindowEvaluation with the result and its fingerprint
    """
    zone = resolve_timezone(timezone_name)

    window_shifts = [
        s for s in shifts
        if s.employee_id is not None and start_date <= s.date <= end_date
    ]
    employee_ids = sorted({s.employee_id for s in window_shifts})

    earliest = lookback_start(start_date, zone)
    _, latest = window_bounds(start_date, end_date, zone)
    periods_by_employee: dict[str, list[WorkPeriodRecord]] = {}
    for period in work_periods:
        if period.employee_id in employee_ids and earliest <= period.start_time <= latest:
            periods_by_employee.setdefault(period.employee_id, []).append(period)

    employees = tuple(
        build_employee_input(
            employee_id,
            periods_by_employee.get(employee_id, []),
            [s for s in window_shifts if s.employee_id == employee_id],
            zone,
            start_date,
            end_date,
        )
        for employee_id in employee_ids
    )

    result = evaluate(EvaluationInput(
        timezone=timezone_name,
        regulation=effective_regulation(employee_ids, policies),
        employees=employees,
    ))

    return WindowEvaluation(
        organization_id=organization_id,
        result=result,
        fingerprint=build_fingerprint(organization_id, start_date, end_date, timezone_name, result),
    )
