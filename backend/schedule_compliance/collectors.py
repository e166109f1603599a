"""Finding collectors, one per regulation category."""

from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import tzinfo
from typing import Callable, Optional

from .periods import month_key, rest_minutes, week_key
from .types import (
    EmployeeInput,
    Finding,
    MaxHoursFinding,
    OvertimeFinding,
    OvertimePeriod,
    Regulation,
    RestTimeFinding,
)


class BaseCollector(ABC):
    """Base class for compliance collectors."""

    @abstractmethod
    def collect(
        self,
        regulation: Regulation,
        employees: tuple[EmployeeInput, ...],
        zone: tzinfo,
    ) -> list[Finding]:
        """Return the findings of this category for all employees."""
        pass


class RestTimeCollector(BaseCollector):
    """Flags rest between consecutive work intervals below the minimum."""

    def collect(
        self,
        regulation: Regulation,
        employees: tuple[EmployeeInput, ...],
        zone: tzinfo,
    ) -> list[Finding]:
        threshold = regulation.min_rest_period_minutes
        if threshold is None:
            return []

        findings: list[Finding] = []
        for employee in employees:
            for transition in employee.rest_transitions:
                minutes = rest_minutes(transition.from_end_iso, transition.to_start_iso)
                if minutes is None:
                    continue

                if minutes < threshold:
                    findings.append(RestTimeFinding(
                        employee_id=employee.employee_id,
                        from_end_iso=transition.from_end_iso,
                        to_start_iso=transition.to_start_iso,
                        rest_minutes=minutes,
                        min_rest_period_minutes=threshold,
                    ))
        return findings


class MaxHoursCollector(BaseCollector):
    """Flags days whose combined minutes exceed the daily ceiling."""

    def collect(
        self,
        regulation: Regulation,
        employees: tuple[EmployeeInput, ...],
        zone: tzinfo,
    ) -> list[Finding]:
        threshold = regulation.max_daily_minutes
        if threshold is None:
            return []

        findings: list[Finding] = []
        for employee in employees:
            for day, total in employee.combined_minutes_by_day().items():
                if total > threshold:
                    findings.append(MaxHoursFinding(
                        employee_id=employee.employee_id,
                        day=day,
                        total_minutes=total,
                        max_daily_minutes=threshold,
                    ))
        return findings


def _bucket_totals(
    minutes_by_day: dict[str, int],
    key_for: Callable[[str], Optional[str]],
) -> dict[str, int]:
    """Sum day totals per bucket key, keys sorted ascending."""
    totals: dict[str, int] = defaultdict(int)
    for day, minutes in minutes_by_day.items():
        key = key_for(day)
        if key is None:
            continue
        totals[key] += minutes
    return dict(sorted(totals.items()))


class OvertimeCollector(BaseCollector):
    """Flags daily, weekly and monthly totals above their overtime thresholds.

    The three sub-checks are gated independently and never deduplicated
    against each other. Per employee the output is daily findings, then
    weekly, then monthly.
    """

    def collect(
        self,
        regulation: Regulation,
        employees: tuple[EmployeeInput, ...],
        zone: tzinfo,
    ) -> list[Finding]:
        findings: list[Finding] = []
        for employee in employees:
            combined = employee.combined_minutes_by_day()
            findings.extend(self._daily(employee, combined, regulation))
            findings.extend(self._weekly(employee, combined, regulation, zone))
            findings.extend(self._monthly(employee, combined, regulation, zone))
        return findings

    @staticmethod
    def _over_threshold(
        employee_id: str,
        period: OvertimePeriod,
        totals: dict[str, int],
        threshold: Optional[int],
    ) -> list[Finding]:
        if threshold is None:
            return []
        return [
            OvertimeFinding(
                employee_id=employee_id,
                period=period,
                period_key=key,
                total_minutes=total,
                threshold_minutes=threshold,
            )
            for key, total in totals.items()
            if total > threshold
        ]

    def _daily(
        self,
        employee: EmployeeInput,
        combined: dict[str, int],
        regulation: Regulation,
    ) -> list[Finding]:
        return self._over_threshold(
            employee.employee_id,
            OvertimePeriod.DAILY,
            combined,
            regulation.overtime_daily_threshold_minutes,
        )

    def _weekly(
        self,
        employee: EmployeeInput,
        combined: dict[str, int],
        regulation: Regulation,
        zone: tzinfo,
    ) -> list[Finding]:
        threshold = regulation.overtime_weekly_threshold_minutes
        if threshold is None:
            return []
        totals = _bucket_totals(combined, lambda day: week_key(day, zone))
        return self._over_threshold(employee.employee_id, OvertimePeriod.WEEKLY, totals, threshold)

    def _monthly(
        self,
        employee: EmployeeInput,
        combined: dict[str, int],
        regulation: Regulation,
        zone: tzinfo,
    ) -> list[Finding]:
        threshold = regulation.overtime_monthly_threshold_minutes
        if threshold is None:
            return []
        totals = _bucket_totals(combined, lambda day: month_key(day, zone))
        return self._over_threshold(employee.employee_id, OvertimePeriod.MONTHLY, totals, threshold)
