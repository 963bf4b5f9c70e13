from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _positive_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class Settings:

    def __init__(self) -> None:
        data_path = _strip_or_none(os.getenv("SURVEY_DATA_PATH")) or "data/surveys.json"
        self.survey_data_path = Path(data_path).expanduser().resolve()

        self.log_level = (_strip_or_none(os.getenv("LOG_LEVEL")) or "INFO").upper()

        log_json = _strip_or_none(os.getenv("LOG_JSON"))
        self.log_json = bool(log_json and log_json.lower() in _TRUTHY)

        self.chart_max_options = _positive_int(_strip_or_none(os.getenv("CHART_MAX_OPTIONS")), 10)


settings = Settings()
