import pytest

from schedule_compliance.types import (
    EmployeeInput,
    EvaluationInput,
    Regulation,
    RestTransition,
)


@pytest.fixture
def berlin_regulation():
    """Thresholds used by the Berlin reference scenario."""
    return Regulation(
        min_rest_period_minutes=660,
        max_daily_minutes=590,
        overtime_daily_threshold_minutes=500,
        overtime_weekly_threshold_minutes=1000,
        overtime_monthly_threshold_minutes=1100,
    )


@pytest.fixture
def make_employee():
    """Factory to create EmployeeInput objects."""
    def _make_employee(
        employee_id: str = "emp_1",
        actual: dict[str, int] = None,
        scheduled: dict[str, int] = None,
        transitions: list[tuple[str, str]] = None,
    ) -> EmployeeInput:
        return EmployeeInput(
            employee_id=employee_id,
            actual_minutes_by_day=actual or {},
            scheduled_minutes_by_day=scheduled or {},
            rest_transitions=tuple(RestTransition(a, b) for a, b in transitions or []),
        )
    return _make_employee


@pytest.fixture
def make_input():
    """Factory to create EvaluationInput objects."""
    def _make_input(
        employees: list[EmployeeInput],
        regulation: Regulation = None,
        timezone: str = "Europe/Berlin",
    ) -> EvaluationInput:
        return EvaluationInput(
            timezone=timezone,
            regulation=regulation or Regulation(),
            employees=tuple(employees),
        )
    return _make_input


@pytest.fixture
def berlin_employee(make_employee):
    """emp_1 with 540 actual minutes, 600 scheduled minutes and a 540-minute rest."""
    return make_employee(
        actual={"2026-02-18": 540},
        scheduled={"2026-02-19": 600},
        transitions=[("2026-02-18T23:00:00+01:00", "2026-02-19T08:00:00+01:00")],
    )
