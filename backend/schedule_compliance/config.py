"""Environment configuration and logging setup.

The evaluator only emits records through module loggers and never installs
handlers itself. Applications that embed it call ``validate_config()`` at
startup and ``setup_logging()`` once to get console output at
``SCHEDULE_COMPLIANCE_LOG_LEVEL``.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("SCHEDULE_COMPLIANCE_LOG_LEVEL", "INFO").upper()
DEFAULT_TIMEZONE = os.getenv("SCHEDULE_COMPLIANCE_DEFAULT_TIMEZONE", "UTC")
LOOKBACK_DAYS = int(os.getenv("SCHEDULE_COMPLIANCE_LOOKBACK_DAYS", "35"))

LOG_FORMAT = "%(name)-12s: %(levelname)-8s %(message)s"

_logging_configured = False


def validate_config() -> None:
    from .periods import InvalidTimezoneError, resolve_timezone

    invalid = []
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        invalid.append(f"SCHEDULE_COMPLIANCE_LOG_LEVEL={LOG_LEVEL}")
    try:
        resolve_timezone(DEFAULT_TIMEZONE)
    except InvalidTimezoneError:
        invalid.append(f"SCHEDULE_COMPLIANCE_DEFAULT_TIMEZONE={DEFAULT_TIMEZONE}")
    if LOOKBACK_DAYS < 0:
        invalid.append(f"SCHEDULE_COMPLIANCE_LOOKBACK_DAYS={LOOKBACK_DAYS}")

    if invalid:
        raise RuntimeError(
            f"Invalid schedule compliance environment variables: {', '.join(invalid)}. "
            "Please fix these in your .env file."
        )


def setup_logging():
    """Attach a console handler to the root logger, once per process."""
    global _logging_configured
    if _logging_configured:
        return

    logger = logging.getLogger()
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(LOG_LEVEL)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console)

    _logging_configured = True
