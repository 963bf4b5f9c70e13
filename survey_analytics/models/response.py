from __future__ import annotations

import math
from typing import Any, List

from pydantic import AliasChoices, BaseModel, Field, field_validator

from survey_analytics.models.survey import coerce_identifier


def coerce_number(value: Any) -> float | None:
    """Return a finite float for numbers and numeric strings, otherwise ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


class ResponseAnswer(BaseModel):
    """One question's value within a response; ``value`` keeps whatever shape was submitted."""

    question_id: str | None = Field(default=None, validation_alias=AliasChoices("question_id", "questionId"))
    value: Any = Field(default=None, validation_alias=AliasChoices("value", "answer"))

    model_config = {"extra": "ignore"}

    @field_validator("question_id", mode="before")
    @classmethod
    def _coerce_question_id(cls, value: Any) -> Any:
        return coerce_identifier(value)


class SurveyResponse(BaseModel):
    """A respondent's submission, completed or still in progress."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    survey_id: str | None = Field(default=None, validation_alias=AliasChoices("survey_id", "surveyId", "survey"))
    is_completed: bool = Field(default=False, validation_alias=AliasChoices("is_completed", "isCompleted"))
    time_spent: float | None = Field(default=None, validation_alias=AliasChoices("time_spent", "timeSpent"))
    progress: float = 0
    answers: List[ResponseAnswer] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("id", "survey_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("is_completed", mode="before")
    @classmethod
    def _coerce_completed(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes"}
        return bool(value)

    @field_validator("time_spent", mode="before")
    @classmethod
    def _coerce_time_spent(cls, value: Any) -> float | None:
        return coerce_number(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _coerce_progress(cls, value: Any) -> float:
        number = coerce_number(value)
        if number is None:
            return 0
        return min(max(number, 0), 100)

    @field_validator("answers", mode="before")
    @classmethod
    def _default_answers(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = ["ResponseAnswer", "SurveyResponse", "coerce_number"]
