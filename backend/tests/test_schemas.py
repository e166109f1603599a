import logging

import pytest
from pydantic import ValidationError

from schedule_compliance import config, evaluate
from schedule_compliance.schemas import EvaluationRequest, EvaluationResponse
from schedule_compliance.types import Regulation


BERLIN_REQUEST = {
    "timezone": "Europe/Berlin",
    "regulation": {
        "minRestPeriodMinutes": 660,
        "maxDailyMinutes": 590,
        "overtimeDailyThresholdMinutes": 500,
        "overtimeWeeklyThresholdMinutes": 1000,
        "overtimeMonthlyThresholdMinutes": 1100,
    },
    "employees": [
        {
            "employeeId": "emp_1",
            "actualMinutesByDay": {"2026-02-18": 540},
            "scheduledMinutesByDay": {"2026-02-19": 600},
            "restTransitions": [
                {
                    "fromEndIso": "2026-02-18T23:00:00+01:00",
                    "toStartIso": "2026-02-19T08:00:00+01:00",
                },
            ],
        },
    ],
}


class TestEvaluationRequest:

    def test_camel_case_request(self):
        evaluation = EvaluationRequest.model_validate(BERLIN_REQUEST).to_input()

        assert evaluation.timezone == "Europe/Berlin"
        assert evaluation.regulation.min_rest_period_minutes == 660
        assert evaluation.employees[0].scheduled_minutes_by_day == {"2026-02-19": 600}
        assert evaluation.employees[0].rest_transitions[0].to_start_iso == "2026-02-19T08:00:00+01:00"

    def test_missing_thresholds_stay_unset(self):
        evaluation = EvaluationRequest.model_validate({"regulation": {"maxDailyMinutes": 600}}).to_input()

        assert evaluation.regulation == Regulation(max_daily_minutes=600)

    def test_defaults(self):
        request = EvaluationRequest()

        assert request.timezone == config.DEFAULT_TIMEZONE
        assert request.to_input().employees == ()

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate({"timezone": "Europe/Atlantis"})

    def test_malformed_day_key(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate({
                "employees": [{"employeeId": "emp_1", "actualMinutesByDay": {"18.02.2026": 60}}],
            })

    def test_negative_minutes(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate({
                "employees": [{"employeeId": "emp_1", "scheduledMinutesByDay": {"2026-02-18": -5}}],
            })

    def test_negative_threshold(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate({"regulation": {"maxDailyMinutes": -1}})

    def test_malformed_transition_is_accepted(self):
        """Bad instants are not a validation error; evaluation skips them."""
        request = EvaluationRequest.model_validate({
            "regulation": {"minRestPeriodMinutes": 660},
            "employees": [{
                "employeeId": "emp_1",
                "restTransitions": [{"fromEndIso": "??", "toStartIso": "2026-02-19T08:00:00+01:00"}],
            }],
        })

        assert evaluate(request.to_input()).findings == ()


class TestEvaluationResponse:

    def test_berlin_response(self):
        result = evaluate(EvaluationRequest.model_validate(BERLIN_REQUEST).to_input())

        response = EvaluationResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)

        assert response["summary"] == {
            "totalFindings": 6,
            "byType": {"restTime": 1, "maxHours": 1, "overtime": 4},
        }
        assert response["findings"][0] == {
            "type": "rest_time",
            "employeeId": "emp_1",
            "fromEndIso": "2026-02-18T23:00:00+01:00",
            "toStartIso": "2026-02-19T08:00:00+01:00",
            "restMinutes": 540,
            "minRestPeriodMinutes": 660,
        }
        assert response["findings"][-1] == {
            "type": "overtime",
            "employeeId": "emp_1",
            "period": "monthly",
            "periodKey": "2026-02",
            "totalMinutes": 1140,
            "thresholdMinutes": 1100,
        }

    def test_empty_response(self):
        result = evaluate(EvaluationRequest().to_input())

        response = EvaluationResponse.from_result(result).model_dump(by_alias=True)

        assert response == {
            "findings": [],
            "summary": {
                "totalFindings": 0,
                "byType": {"restTime": 0, "maxHours": 0, "overtime": 0},
            },
        }


class TestConfig:

    def test_defaults_are_valid(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
        monkeypatch.setattr(config, "DEFAULT_TIMEZONE", "UTC")
        monkeypatch.setattr(config, "LOOKBACK_DAYS", 35)

        config.validate_config()

    def test_invalid_values_are_reported(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "CHATTY")
        monkeypatch.setattr(config, "DEFAULT_TIMEZONE", "Nowhere/Special")
        monkeypatch.setattr(config, "LOOKBACK_DAYS", -1)

        with pytest.raises(RuntimeError) as exc_info:
            config.validate_config()

        message = str(exc_info.value)
        assert "SCHEDULE_COMPLIANCE_LOG_LEVEL=CHATTY" in message
        assert "SCHEDULE_COMPLIANCE_DEFAULT_TIMEZONE=Nowhere/Special" in message
        assert "SCHEDULE_COMPLIANCE_LOOKBACK_DAYS=-1" in message

    def test_logging_hooks_are_public(self):
        import schedule_compliance

        assert schedule_compliance.setup_logging is config.setup_logging
        assert schedule_compliance.validate_config is config.validate_config
        assert "setup_logging" in schedule_compliance.__all__

    def test_setup_logging_runs_once(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(config, "_logging_configured", False)
        monkeypatch.setattr(root, "handlers", [])
        level = root.level

        try:
            config.setup_logging()
            config.setup_logging()
        finally:
            root.setLevel(level)

        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == config.LOG_FORMAT
