import json

import pytest
import structlog
from structlog.testing import capture_logs

from src.academy.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_events_carry_module_name():
    log = get_logger("src.academy.schedule")
    with capture_logs() as logs:
        log.info("schedule_merged", classes=2)
    assert logs == [
        {"event": "schedule_merged", "classes": 2, "module": "src.academy.schedule", "log_level": "info"}
    ]


def test_json_output_goes_to_stderr(capsys):
    setup_logging(json_output=True, log_level="DEBUG", cache_loggers=False)
    get_logger("src.academy.cli").debug("records_loaded", count=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    line = json.loads(captured.err.strip().splitlines()[-1])
    assert line["event"] == "records_loaded"
    assert line["module"] == "src.academy.cli"
    assert line["level"] == "debug"
    assert "timestamp" in line


def test_level_filters_lower_events(capsys):
    setup_logging(json_output=True, log_level="WARNING", cache_loggers=False)
    get_logger("src.academy.stats").info("student_monthly_stats")
    assert capsys.readouterr().err == ""
