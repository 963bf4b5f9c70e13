from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from survey_analytics.core.config import settings
from survey_analytics.models.response import SurveyResponse
from survey_analytics.models.survey import Survey

logger = logging.getLogger(__name__)


class SurveyNotFoundError(KeyError):
    """Raised when a survey id is not present in the store."""


class ResponseNotFoundError(KeyError):
    """Raised when a response id is not present in the store."""


class SurveyDatabaseInterface(Protocol):
    """Minimal interface for the survey and response providers."""

    def save_survey(self, survey: Survey) -> Survey: ...

    def load_survey(self, survey_id: str) -> Optional[Survey]: ...

    def list_surveys(self) -> List[Survey]: ...

    def add_response(self, survey_id: str, response: SurveyResponse) -> SurveyResponse: ...

    def load_responses(self, survey_id: str) -> List[SurveyResponse]: ...

    def delete_response(self, survey_id: str, response_id: str) -> None: ...

    def response_count(self, survey_id: str) -> int: ...


class JsonSurveyDatabase(SurveyDatabaseInterface):
    """File-backed store holding surveys and their responses in one JSON document."""

    def __init__(self, storage_path: Path) -> None:
        self._path = Path(storage_path)
        self._lock = threading.Lock()

    def save_survey(self, survey: Survey) -> Survey:
        stored = survey if survey.id else survey.model_copy(update={"id": uuid.uuid4().hex})
        with self._lock:
            payload = self._read_all_unlocked()
            entry = payload["surveys"].get(stored.id, {})
            record = stored.model_dump(mode="json")
            record["responseCount"] = entry.get("responseCount", 0)
            payload["surveys"][stored.id] = record
            self._write_all_unlocked(payload)
        return stored

    def load_survey(self, survey_id: str) -> Optional[Survey]:
        with self._lock:
            raw_survey = self._read_all_unlocked()["surveys"].get(survey_id)
        if raw_survey is None:
            return None
        return Survey.model_validate(raw_survey)

    def list_surveys(self) -> List[Survey]:
        with self._lock:
            raw_surveys = list(self._read_all_unlocked()["surveys"].values())
        return [Survey.model_validate(raw) for raw in raw_surveys]

    def add_response(self, survey_id: str, response: SurveyResponse) -> SurveyResponse:
        stored = response.model_copy(
            update={"id": response.id or uuid.uuid4().hex, "survey_id": survey_id}
        )
        with self._lock:
            payload = self._read_all_unlocked()
            survey_entry = payload["surveys"].get(survey_id)
            if survey_entry is None:
                raise SurveyNotFoundError(survey_id)
            payload["responses"].setdefault(survey_id, []).append(stored.model_dump(mode="json"))
            survey_entry["responseCount"] = survey_entry.get("responseCount", 0) + 1
            self._write_all_unlocked(payload)
        return stored

    def load_responses(self, survey_id: str) -> List[SurveyResponse]:
        with self._lock:
            raw_responses = list(self._read_all_unlocked()["responses"].get(survey_id, []))
        return [SurveyResponse.model_validate(raw) for raw in raw_responses]

    def delete_response(self, survey_id: str, response_id: str) -> None:
        with self._lock:
            payload = self._read_all_unlocked()
            responses = payload["responses"].get(survey_id, [])
            remaining = [raw for raw in responses if raw.get("id") != response_id]
            if len(remaining) == len(responses):
                raise ResponseNotFoundError(response_id)
            payload["responses"][survey_id] = remaining
            survey_entry = payload["surveys"].get(survey_id)
            if survey_entry is not None:
                survey_entry["responseCount"] = max(0, survey_entry.get("responseCount", 0) - 1)
            self._write_all_unlocked(payload)

    def response_count(self, survey_id: str) -> int:
        with self._lock:
            survey_entry = self._read_all_unlocked()["surveys"].get(survey_id)
        if survey_entry is None:
            raise SurveyNotFoundError(survey_id)
        return int(survey_entry.get("responseCount", 0))

    def _read_all_unlocked(self) -> Dict[str, Any]:
        empty: Dict[str, Any] = {"surveys": {}, "responses": {}}
        if not self._path.is_file():
            return empty
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Survey store at %s is not valid JSON; treating it as empty", self._path)
            return empty
        if not isinstance(payload, dict):
            return empty
        payload.setdefault("surveys", {})
        payload.setdefault("responses", {})
        return payload

    def _write_all_unlocked(self, payload: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


_DATABASE_INSTANCE: Optional[SurveyDatabaseInterface] = None
_DATABASE_LOCK = threading.Lock()


def get_survey_database() -> SurveyDatabaseInterface:
    """Return the shared survey database instance."""

    global _DATABASE_INSTANCE
    if _DATABASE_INSTANCE is None:
        with _DATABASE_LOCK:
            if _DATABASE_INSTANCE is None:
                _DATABASE_INSTANCE = JsonSurveyDatabase(settings.survey_data_path)
    return _DATABASE_INSTANCE


__all__ = [
    "JsonSurveyDatabase",
    "ResponseNotFoundError",
    "SurveyDatabaseInterface",
    "SurveyNotFoundError",
    "get_survey_database",
]
