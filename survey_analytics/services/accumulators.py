from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from survey_analytics.services.answer_values import (
    ChoiceAnswer,
    OpaqueAnswer,
    RatingAnswer,
    ResolvedAnswer,
    TextAnswer,
    format_scalar,
)
from survey_analytics.services.question_index import QuestionIndex, QuestionMeta


@dataclass(slots=True)
class ValueTally:
    """Counter that remembers the order in which each key was first seen."""

    counts: Dict[str, int] = field(default_factory=dict)
    first_seen: Dict[str, int] = field(default_factory=dict)

    def add(self, key: str) -> None:
        if key not in self.counts:
            self.first_seen[key] = len(self.first_seen)
            self.counts[key] = 0
        self.counts[key] += 1

    def ranked(self) -> List[Tuple[str, int]]:
        """Return ``(key, count)`` pairs, highest count first, then first seen."""

        return sorted(
            self.counts.items(),
            key=lambda item: (-item[1], self.first_seen[item[0]]),
        )

    def total(self) -> int:
        return sum(self.counts.values())

    def __len__(self) -> int:
        return len(self.counts)


@dataclass(slots=True)
class QuestionAccumulator:
    """Running counters for one question during a single aggregation call."""

    meta: QuestionMeta
    reached: int = 0
    total_answers: int = 0
    text_count: int = 0
    choices: ValueTally = field(default_factory=ValueTally)
    ratings: ValueTally = field(default_factory=ValueTally)

    def record(self, answer: ResolvedAnswer) -> None:
        """Fold one non-empty answer into the tallies.

        Choice answers add one to ``total_answers`` per selection, so choice
        counts always add up to it. Non-numeric ratings count as answers but
        stay out of the histogram.
        """

        if isinstance(answer, ChoiceAnswer):
            for selection in answer.selections:
                self.choices.add(selection)
            self.total_answers += len(answer.selections)
        elif isinstance(answer, RatingAnswer):
            if answer.value is not None:
                self.ratings.add(format_scalar(answer.value))
            self.total_answers += 1
        elif isinstance(answer, TextAnswer):
            self.text_count += 1
            self.total_answers += 1
        elif isinstance(answer, OpaqueAnswer):
            self.total_answers += 1


def init_accumulators(index: QuestionIndex) -> Dict[str, QuestionAccumulator]:
    return {question_id: QuestionAccumulator(meta=meta) for question_id, meta in index.items()}


def ordered_accumulators(accumulators: Dict[str, QuestionAccumulator]) -> List[QuestionAccumulator]:
    return sorted(accumulators.values(), key=lambda acc: acc.meta.sort_key)


__all__ = [
    "QuestionAccumulator",
    "ValueTally",
    "init_accumulators",
    "ordered_accumulators",
]
