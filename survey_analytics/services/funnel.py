from __future__ import annotations

from typing import Dict, List

from survey_analytics.models.analytics import FunnelStep
from survey_analytics.services.accumulators import QuestionAccumulator, ordered_accumulators


def build_funnel(accumulators: Dict[str, QuestionAccumulator]) -> List[FunnelStep]:
    """Project reached counts into question order to show where respondents drop off."""

    return [
        FunnelStep(
            question_id=accumulator.meta.question_id,
            question_text=accumulator.meta.text,
            order=accumulator.meta.order,
            reached=accumulator.reached,
        )
        for accumulator in ordered_accumulators(accumulators)
    ]


__all__ = ["build_funnel"]
