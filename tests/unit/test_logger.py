"""Tests for logger configuration."""

import logging

from app.config import get_settings
from app.utils.logger import StructuredFormatter, logger


def test_level_comes_from_settings():
    assert logger.level == getattr(logging, get_settings().log_level.upper())


def test_structured_formatter_includes_extras():
    record = logging.LogRecord("lichinga_jobs", logging.INFO, __file__, 1, "job.created", None, None)
    record.job_id = 7
    record.correlation_id = "abc"

    line = StructuredFormatter().format(record)

    assert '"job_id": 7' in line
    assert '"correlation_id": "abc"' in line
    assert '"message": "job.created"' in line
