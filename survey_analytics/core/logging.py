from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from survey_analytics.core.config import settings

PACKAGE_LOGGER = "survey_analytics"

_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    # One JSON object per line; extras passed via extra={} are kept when serializable.
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value, ensure_ascii=False)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | None = None, json_output: bool | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this again replaces the handler instead of stacking a new one, so
    Streamlit reruns do not duplicate log lines.
    """

    resolved_level = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolved_level)

    for handler in list(logger.handlers):
        if getattr(handler, "_survey_analytics", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._survey_analytics = True  # type: ignore[attr-defined]
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ["JsonFormatter", "configure_logging", "PACKAGE_LOGGER"]
