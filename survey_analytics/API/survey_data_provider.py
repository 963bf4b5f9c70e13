from __future__ import annotations

from typing import List, Tuple

from survey_analytics.models.analytics import ResponseSummary, SurveyAnalyticsReport
from survey_analytics.models.response import SurveyResponse
from survey_analytics.models.survey import Survey
from survey_analytics.services.aggregator import aggregate_survey_responses, summarize_responses
from survey_analytics.services.survey_database import (
    SurveyDatabaseInterface,
    SurveyNotFoundError,
    get_survey_database,
)


class SurveyAnalyticsProvider:
    """Fetch a survey with its responses, then hand the snapshot to the aggregator."""

    def __init__(self, database: SurveyDatabaseInterface | None = None) -> None:
        self._database = database or get_survey_database()

    def list_surveys(self) -> List[Survey]:
        return self._database.list_surveys()

    def get_snapshot(self, survey_id: str) -> Tuple[Survey, List[SurveyResponse]]:
        """Return the survey definition and all of its responses, completed or partial."""

        survey = self._database.load_survey(survey_id)
        if survey is None:
            raise SurveyNotFoundError(f"Unknown survey id: {survey_id}")
        return survey, self._database.load_responses(survey_id)

    def get_report(self, survey_id: str) -> SurveyAnalyticsReport:
        survey, responses = self.get_snapshot(survey_id)
        return aggregate_survey_responses(survey, responses)

    def get_summary(self, survey_id: str) -> ResponseSummary:
        _, responses = self.get_snapshot(survey_id)
        return summarize_responses(survey_id, responses)


__all__ = ["SurveyAnalyticsProvider"]
