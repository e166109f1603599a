"""Stable fingerprints of evaluation results."""

import hashlib
import json
from datetime import date
from typing import Mapping

from .types import ComplianceResult


def _canonical_json(value) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def build_fingerprint(
    organization_id: str,
    start_date: date,
    end_date: date,
    timezone: str,
    result: ComplianceResult,
) -> str:
    """
    SHA-256 hex digest identifying an evaluated schedule window.

    Findings are sorted by their canonical JSON first, so two results with
    the same findings in a different order share a fingerprint.
    """
    findings = sorted(
        (f.to_dict() for f in result.findings),
        key=_canonical_json,
    )
    payload = {
        "organization_id": organization_id,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "timezone": timezone,
        "summary": result.summary.to_dict(),
        "findings": findings,
    }
    return hashlib.sha256(_canonical_json(payload).encode("utf-8")).hexdigest()


def sorted_counts_json(counts: Mapping[str, int]) -> str:
    """Compact JSON object of counts with keys in sorted order."""
    return json.dumps({key: counts[key] for key in sorted(counts)}, separators=(",", ":"))
