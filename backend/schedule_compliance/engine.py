"""Compliance evaluation engine that orchestrates all collectors."""

import logging

from .collectors import (
    BaseCollector,
    MaxHoursCollector,
    OvertimeCollector,
    RestTimeCollector,
)
from .periods import resolve_timezone
from .types import ComplianceResult, EvaluationInput, Finding

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Main engine for schedule compliance evaluation.

    Runs the collectors in a fixed order (rest time, max hours, overtime)
    and concatenates their findings. Holds no state between calls.
    """

    def __init__(self):
        """Initialize with all collectors, in output order."""
        self.collectors: list[BaseCollector] = [
            RestTimeCollector(),
            MaxHoursCollector(),
            OvertimeCollector(),
        ]

    def evaluate(self, evaluation: EvaluationInput) -> ComplianceResult:
        """
        Derive every regulation violation in the input.

        Args:
            evaluation: Timezone, regulation thresholds and per-employee data

        Returns:
            ComplianceResult with findings in collector order

        Raises:
            InvalidTimezoneError: If employees are present and the timezone
                is not a known IANA zone
        """
        if not evaluation.employees:
            return ComplianceResult()

        zone = resolve_timezone(evaluation.timezone)

        findings: list[Finding] = []
        for collector in self.collectors:
            findings.extend(collector.collect(evaluation.regulation, evaluation.employees, zone))

        result = ComplianceResult(findings=tuple(findings))
        logger.debug(
            f"Evaluated {len(evaluation.employees)} employee(s) in {evaluation.timezone}: "
            f"{result.summary.to_dict()}"
        )
        return result


def evaluate(evaluation: EvaluationInput) -> ComplianceResult:
    """Evaluate schedule compliance with the default collectors."""
    return ComplianceEngine().evaluate(evaluation)
