from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import AliasGenerator, BaseModel, Field
from pydantic.alias_generators import to_camel

# Reports are built with snake_case names and serialised with camelCase
# aliases (``model_dump(by_alias=True)``), which is what report consumers read.
_REPORT_CONFIG = {
    "extra": "forbid",
    "alias_generator": AliasGenerator(serialization_alias=to_camel),
}


class AnalyticsTotals(BaseModel):
    """Response counts and average completion time for one survey."""

    total_responses: int = 0
    completed_responses: int = 0
    partial_responses: int = 0
    average_completion_time_seconds: float = 0.0

    model_config = _REPORT_CONFIG


class FunnelStep(BaseModel):
    """How many responses reached a question."""

    question_id: str
    question_text: str
    order: int
    reached: int

    model_config = _REPORT_CONFIG


class ChoiceOptionStat(BaseModel):
    value: str
    label: str
    count: int
    percentage: float

    model_config = _REPORT_CONFIG


class RatingBucket(BaseModel):
    value: Union[int, float]
    count: int
    percentage: float

    model_config = _REPORT_CONFIG


class _QuestionAnalyticsBase(BaseModel):
    question_id: str
    question_text: str
    type: str
    order: int
    total_answers: int
    reached: int

    model_config = _REPORT_CONFIG


class ChoiceQuestionAnalytics(_QuestionAnalyticsBase):
    """Observed option counts for multiple choice and ranking questions."""

    kind: Literal["choice"] = Field(default="choice", frozen=True)
    options: List[ChoiceOptionStat] = Field(default_factory=list)


class RatingQuestionAnalytics(_QuestionAnalyticsBase):
    """Histogram of numeric ratings, lowest value first."""

    kind: Literal["rating"] = Field(default="rating", frozen=True)
    distribution: List[RatingBucket] = Field(default_factory=list)


class TextQuestionAnalytics(_QuestionAnalyticsBase):
    """Free text questions only report how many answers were given."""

    kind: Literal["text"] = Field(default="text", frozen=True)
    text_count: int = 0


class UnknownQuestionAnalytics(_QuestionAnalyticsBase):
    """Questions of an unsupported type carry the base fields only."""

    kind: Literal["unknown"] = Field(default="unknown", frozen=True)


QuestionAnalytics = Annotated[
    Union[
        ChoiceQuestionAnalytics,
        RatingQuestionAnalytics,
        TextQuestionAnalytics,
        UnknownQuestionAnalytics,
    ],
    Field(discriminator="kind"),
]


class SurveyAnalyticsReport(BaseModel):
    """Funnel, totals and per-question distributions for one survey."""

    survey_id: str | None = None
    title: str | None = None
    status: str | None = None
    totals: AnalyticsTotals = Field(default_factory=AnalyticsTotals)
    funnel: List[FunnelStep] = Field(default_factory=list)
    questions: List[QuestionAnalytics] = Field(default_factory=list)

    model_config = _REPORT_CONFIG

    def to_payload(self) -> dict:
        """Return the camelCase dictionary handed to report consumers."""

        return self.model_dump(by_alias=True)


class ResponseSummary(BaseModel):
    """Lightweight response counts without per-question work."""

    survey_id: str | None = None
    completed_responses: int = 0
    partial_responses: int = 0
    total_responses: int = 0
    average_time_spent: float = 0.0

    model_config = _REPORT_CONFIG


__all__ = [
    "AnalyticsTotals",
    "ChoiceOptionStat",
    "ChoiceQuestionAnalytics",
    "FunnelStep",
    "QuestionAnalytics",
    "RatingBucket",
    "RatingQuestionAnalytics",
    "ResponseSummary",
    "SurveyAnalyticsReport",
    "TextQuestionAnalytics",
    "UnknownQuestionAnalytics",
]
