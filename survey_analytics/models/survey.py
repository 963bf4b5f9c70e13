from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import AliasChoices, BaseModel, Field, field_validator


class QuestionType(str, Enum):
    """Question types understood by the analytics pipeline."""

    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    RATING = "rating"
    STAR_RATING = "star_rating"
    RANKING = "ranking"


CHOICE_TYPES = frozenset({QuestionType.MULTIPLE_CHOICE.value, QuestionType.RANKING.value})
RATING_TYPES = frozenset({QuestionType.RATING.value, QuestionType.STAR_RATING.value})
TEXT_TYPES = frozenset({QuestionType.SHORT_TEXT.value, QuestionType.LONG_TEXT.value})


def coerce_identifier(value: Any) -> Any:
    """Normalise database identifiers (ObjectId, {"$oid": ...}, ints) to strings."""

    if value is None or isinstance(value, str):
        return value
    if isinstance(value, dict) and "$oid" in value:
        return str(value["$oid"])
    return str(value)


class QuestionOption(BaseModel):
    """A selectable option of a choice or ranking question."""

    label: str = Field(default="", validation_alias=AliasChoices("label", "text"))
    value: str | None = None

    model_config = {"extra": "ignore"}

    @field_validator("label", mode="before")
    @classmethod
    def _stringify_label(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    @property
    def resolved_value(self) -> str:
        """Return the stored value, falling back to the label when absent."""

        if self.value is not None and self.value.strip():
            return self.value.strip()
        return self.label.strip()


class RatingSettings(BaseModel):
    """Scale bounds and captions for rating questions."""

    min_value: float | None = Field(default=None, validation_alias=AliasChoices("min_value", "minValue"))
    max_value: float | None = Field(default=None, validation_alias=AliasChoices("max_value", "maxValue"))
    min_label: str | None = Field(default=None, validation_alias=AliasChoices("min_label", "minLabel"))
    max_label: str | None = Field(default=None, validation_alias=AliasChoices("max_label", "maxLabel"))

    model_config = {"extra": "ignore"}


class Question(BaseModel):
    """A single survey prompt; ``type`` stays a plain string so unknown types survive."""

    id: str = Field(validation_alias=AliasChoices("id", "_id", "questionId"))
    order: int = 0
    type: str
    text: str = ""
    description: str | None = None
    required: bool = False
    options: List[QuestionOption] = Field(default_factory=list)
    settings: RatingSettings | None = None

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("options", mode="before")
    @classmethod
    def _default_options(cls, value: Any) -> Any:
        return [] if value is None else value


class Survey(BaseModel):
    """A survey definition: metadata plus its ordered questions."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    description: str | None = None
    status: str = "draft"
    questions: List[Question] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("questions", mode="before")
    @classmethod
    def _default_questions(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = [
    "CHOICE_TYPES",
    "coerce_identifier",
    "RATING_TYPES",
    "TEXT_TYPES",
    "Question",
    "QuestionOption",
    "QuestionType",
    "RatingSettings",
    "Survey",
]
