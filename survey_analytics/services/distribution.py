from __future__ import annotations

from typing import Any, Dict, List

from survey_analytics.models.analytics import (
    ChoiceOptionStat,
    ChoiceQuestionAnalytics,
    QuestionAnalytics,
    RatingBucket,
    RatingQuestionAnalytics,
    TextQuestionAnalytics,
    UnknownQuestionAnalytics,
)
from survey_analytics.models.survey import CHOICE_TYPES, RATING_TYPES, TEXT_TYPES
from survey_analytics.services.accumulators import QuestionAccumulator, ordered_accumulators


def percentage(count: int, total: int) -> float:
    """Share of ``count`` in ``total`` as a percentage; zero when nothing was answered."""

    if total <= 0:
        return 0.0
    return count / total * 100


def _rating_number(key: str) -> int | float:
    number = float(key)
    return int(number) if number.is_integer() else number


def _base_fields(accumulator: QuestionAccumulator) -> Dict[str, Any]:
    meta = accumulator.meta
    return {
        "question_id": meta.question_id,
        "question_text": meta.text,
        "type": meta.type,
        "order": meta.order,
        "total_answers": accumulator.total_answers,
        "reached": accumulator.reached,
    }


def format_question(accumulator: QuestionAccumulator) -> QuestionAnalytics:
    meta = accumulator.meta
    total = accumulator.total_answers

    if meta.type in CHOICE_TYPES:
        options = [
            ChoiceOptionStat(
                value=value,
                label=meta.label_for(value),
                count=count,
                percentage=percentage(count, total),
            )
            for value, count in accumulator.choices.ranked()
        ]
        return ChoiceQuestionAnalytics(**_base_fields(accumulator), options=options)

    if meta.type in RATING_TYPES:
        buckets = [
            RatingBucket(
                value=_rating_number(key),
                count=count,
                percentage=percentage(count, total),
            )
            for key, count in accumulator.ratings.counts.items()
        ]
        buckets.sort(key=lambda bucket: bucket.value)
        return RatingQuestionAnalytics(**_base_fields(accumulator), distribution=buckets)

    if meta.type in TEXT_TYPES:
        return TextQuestionAnalytics(**_base_fields(accumulator), text_count=accumulator.text_count)

    return UnknownQuestionAnalytics(**_base_fields(accumulator))


def build_question_reports(accumulators: Dict[str, QuestionAccumulator]) -> List[QuestionAnalytics]:
    return [format_question(accumulator) for accumulator in ordered_accumulators(accumulators)]


__all__ = ["build_question_reports", "format_question", "percentage"]
