from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Set

from survey_analytics.models.analytics import AnalyticsTotals
from survey_analytics.models.response import SurveyResponse
from survey_analytics.services.accumulators import QuestionAccumulator
from survey_analytics.services.answer_values import is_empty_value, resolve_answer
from survey_analytics.services.question_index import QuestionIndex

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResponseTotals:
    """Running completion counters collected while streaming responses."""

    completed: int = 0
    partial: int = 0
    time_spent_sum: float = 0.0
    time_spent_count: int = 0
    unknown_answers: int = 0
    empty_answers: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.partial

    @property
    def average_completion_time(self) -> float:
        if self.time_spent_count == 0:
            return 0.0
        return self.time_spent_sum / self.time_spent_count

    def add_response(self, response: SurveyResponse) -> None:
        """Count a response as completed or partial; only completed ones are timed."""

        if response.is_completed:
            self.completed += 1
            if response.time_spent is not None:
                self.time_spent_sum += response.time_spent
                self.time_spent_count += 1
        else:
            self.partial += 1

    def to_model(self) -> AnalyticsTotals:
        return AnalyticsTotals(
            total_responses=self.total,
            completed_responses=self.completed,
            partial_responses=self.partial,
            average_completion_time_seconds=self.average_completion_time,
        )


def classify_response(
    response: SurveyResponse,
    index: QuestionIndex,
    accumulators: Dict[str, QuestionAccumulator],
    totals: ResponseTotals,
) -> None:
    """Fold a single response into ``totals`` and the per-question accumulators."""

    totals.add_response(response)

    reached_here: Set[str] = set()
    for answer in response.answers:
        question_id = answer.question_id
        meta = index.get(question_id) if question_id is not None else None
        if meta is None:
            totals.unknown_answers += 1
            continue
        if is_empty_value(answer.value):
            totals.empty_answers += 1
            continue

        accumulators[question_id].record(resolve_answer(meta, answer.value))
        reached_here.add(question_id)

    for question_id in reached_here:
        accumulators[question_id].reached += 1


def classify_responses(
    responses: Iterable[SurveyResponse],
    index: QuestionIndex,
    accumulators: Dict[str, QuestionAccumulator],
) -> ResponseTotals:
    """Stream every response exactly once and return the completion totals."""

    totals = ResponseTotals()
    for response in responses:
        classify_response(response, index, accumulators, totals)

    if totals.unknown_answers or totals.empty_answers:
        logger.debug(
            "Skipped %d answers for unknown questions and %d empty answers across %d responses",
            totals.unknown_answers,
            totals.empty_answers,
            totals.total,
        )
    return totals


__all__ = ["ResponseTotals", "classify_response", "classify_responses"]
