from __future__ import annotations

import json
import logging

from survey_analytics.core.config import Settings
from survey_analytics.core.logging import PACKAGE_LOGGER, JsonFormatter, configure_logging


def test_settings_defaults(monkeypatch) -> None:
    for key in ("SURVEY_DATA_PATH", "LOG_LEVEL", "LOG_JSON", "CHART_MAX_OPTIONS"):
        monkeypatch.delenv(key, raising=False)

    current = Settings()

    assert current.survey_data_path.name == "surveys.json"
    assert current.survey_data_path.is_absolute()
    assert current.log_level == "INFO"
    assert current.log_json is False
    assert current.chart_max_options == 10


def test_settings_read_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SURVEY_DATA_PATH", f"  {tmp_path / 'custom.json'}  ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_JSON", "yes")
    monkeypatch.setenv("CHART_MAX_OPTIONS", "-3")

    current = Settings()

    assert current.survey_data_path == (tmp_path / "custom.json").resolve()
    assert current.log_level == "DEBUG"
    assert current.log_json is True
    assert current.chart_max_options == 10


def test_configure_logging_is_idempotent() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    original_handlers = list(logger.handlers)
    original_level = logger.level
    original_propagate = logger.propagate
    try:
        configure_logging(level="warning", json_output=True)
        configure_logging(level="warning", json_output=True)

        ours = [h for h in logger.handlers if getattr(h, "_survey_analytics", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JsonFormatter)
        assert logger.level == logging.WARNING
    finally:
        logger.handlers[:] = original_handlers
        logger.setLevel(original_level)
        logger.propagate = original_propagate


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("survey_analytics.test", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    record.survey_id = "abc"
    record.opaque = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "hello there"
    assert payload["level"] == "INFO"
    assert payload["survey_id"] == "abc"
    assert isinstance(payload["opaque"], str)
