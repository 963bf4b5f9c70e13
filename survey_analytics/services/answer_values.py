from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple, Union

from survey_analytics.models.response import coerce_number
from survey_analytics.models.survey import CHOICE_TYPES, RATING_TYPES, TEXT_TYPES
from survey_analytics.services.question_index import QuestionMeta


@dataclass(frozen=True, slots=True)
class ChoiceAnswer:
    """Selections of a multiple choice or ranking question, one entry per pick."""

    selections: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RatingAnswer:
    """A rating value; ``None`` when the submitted value was not numeric."""

    value: float | None


@dataclass(frozen=True, slots=True)
class TextAnswer:
    text: str


@dataclass(frozen=True, slots=True)
class OpaqueAnswer:
    """Answer to a question whose type the pipeline does not understand."""


ResolvedAnswer = Union[ChoiceAnswer, RatingAnswer, TextAnswer, OpaqueAnswer]


def is_empty_value(value: Any) -> bool:
    """Return True for ``None``, blank strings and lists holding nothing but empties."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return all(is_empty_value(item) for item in value)
    return False


def format_scalar(value: Any) -> str:
    """Stringify an answer element; integral floats drop their trailing ``.0``."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    return str(value)


def resolve_answer(meta: QuestionMeta, value: Any) -> ResolvedAnswer:
    """Turn a raw submitted value into the variant matching the question type.

    Callers are expected to have rejected empty values with ``is_empty_value``.
    """

    if meta.type in CHOICE_TYPES:
        items = value if isinstance(value, (list, tuple)) else [value]
        return ChoiceAnswer(
            selections=tuple(format_scalar(item) for item in items if not is_empty_value(item))
        )
    if meta.type in RATING_TYPES:
        return RatingAnswer(value=coerce_number(value))
    if meta.type in TEXT_TYPES:
        if isinstance(value, (list, tuple)):
            text = ", ".join(format_scalar(item) for item in value if not is_empty_value(item))
        else:
            text = format_scalar(value)
        return TextAnswer(text=text)
    return OpaqueAnswer()


__all__ = [
    "ChoiceAnswer",
    "OpaqueAnswer",
    "RatingAnswer",
    "ResolvedAnswer",
    "TextAnswer",
    "format_scalar",
    "is_empty_value",
    "resolve_answer",
]
