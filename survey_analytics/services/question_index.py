from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from survey_analytics.models.survey import Question


@dataclass(frozen=True, slots=True)
class QuestionMeta:
    """Lookup entry describing one question for the length of an aggregation call."""

    question_id: str
    text: str
    type: str
    order: int
    position: int
    option_labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.order, self.position)

    def label_for(self, value: str) -> str:
        """Return the declared label for ``value`` or the value itself when undeclared."""

        return self.option_labels.get(value) or value


QuestionIndex = Dict[str, QuestionMeta]


def build_question_index(questions: Iterable[Question]) -> QuestionIndex:
    """Map question ids to their metadata.

    Duplicate ids resolve to the last declaration, including its order and
    array position. An empty question list yields an empty index.
    """

    index: QuestionIndex = {}
    for position, question in enumerate(questions):
        labels: Dict[str, str] = {}
        for option in question.options:
            labels[option.resolved_value] = option.label or option.resolved_value

        index[question.id] = QuestionMeta(
            question_id=question.id,
            text=question.text,
            type=question.type,
            order=question.order,
            position=position,
            option_labels=labels,
        )
    return index


def ordered_questions(index: QuestionIndex) -> List[QuestionMeta]:
    """Return metadata sorted by declared order, ties broken by array position."""

    return sorted(index.values(), key=lambda meta: meta.sort_key)


__all__ = ["QuestionIndex", "QuestionMeta", "build_question_index", "ordered_questions"]
