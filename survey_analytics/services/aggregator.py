"""Pure analytics over an already loaded survey and its responses.

Nothing here touches storage: callers fetch the survey and its responses and
hand over a snapshot. Inputs are never mutated, so concurrent calls need no
coordination.
"""

from __future__ import annotations

import logging
from typing import Sequence

from survey_analytics.models.analytics import ResponseSummary, SurveyAnalyticsReport
from survey_analytics.models.response import SurveyResponse
from survey_analytics.models.survey import Survey
from survey_analytics.services.accumulators import init_accumulators
from survey_analytics.services.distribution import build_question_reports
from survey_analytics.services.funnel import build_funnel
from survey_analytics.services.question_index import build_question_index
from survey_analytics.services.response_classifier import ResponseTotals, classify_responses

logger = logging.getLogger(__name__)


def aggregate_survey_responses(
    survey: Survey,
    responses: Sequence[SurveyResponse],
) -> SurveyAnalyticsReport:
    """Compute totals, the reach funnel and per-question distributions."""

    index = build_question_index(survey.questions)
    accumulators = init_accumulators(index)
    totals = classify_responses(responses, index, accumulators)

    report = SurveyAnalyticsReport(
        survey_id=survey.id,
        title=survey.title,
        status=survey.status,
        totals=totals.to_model(),
        funnel=build_funnel(accumulators),
        questions=build_question_reports(accumulators),
    )
    logger.debug(
        "Aggregated survey %s: %d questions, %d responses",
        survey.id,
        len(index),
        totals.total,
    )
    return report


def summarize_responses(
    survey_id: str | None,
    responses: Sequence[SurveyResponse],
) -> ResponseSummary:
    """Return completion counts and the average completion time only."""

    totals = ResponseTotals()
    for response in responses:
        totals.add_response(response)

    return ResponseSummary(
        survey_id=survey_id,
        completed_responses=totals.completed,
        partial_responses=totals.partial,
        total_responses=totals.total,
        average_time_spent=totals.average_completion_time,
    )


__all__ = ["aggregate_survey_responses", "summarize_responses"]
