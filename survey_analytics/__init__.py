"""Response analytics for survey funnels and answer distributions."""

from survey_analytics.services.aggregator import aggregate_survey_responses, summarize_responses

__all__ = ["aggregate_survey_responses", "summarize_responses"]
