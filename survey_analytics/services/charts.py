from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from survey_analytics.core.config import settings
from survey_analytics.models.analytics import (
    ChoiceQuestionAnalytics,
    QuestionAnalytics,
    RatingQuestionAnalytics,
    SurveyAnalyticsReport,
    TextQuestionAnalytics,
)


class ChartType(str, Enum):
    """Supported chart shapes for survey visualisations."""

    BAR = "bar"
    PIE = "pie"


@dataclass(frozen=True)
class ChartData:
    """Structured payload describing a chart for the UI layer."""

    chart_type: ChartType
    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    title: str
    question_id: str | None = None
    question_text: str | None = None
    description: str | None = None
    metadata: dict[str, int | float | str] = field(default_factory=dict)

    def to_series(self) -> List[Tuple[str, float]]:
        """Return data as a list of (label, value) tuples."""

        return list(zip(self.labels, self.values))

    def as_dict(self) -> dict[str, float]:
        """Return data as a simple label -> value mapping."""

        return {label: value for label, value in zip(self.labels, self.values)}


class SurveyChartBuilder:
    """Prepare chart-ready data from an analytics report."""

    def __init__(self, report: SurveyAnalyticsReport, *, max_options: int | None = None) -> None:
        if report is None:
            raise ValueError("report must be provided")
        resolved_max = settings.chart_max_options if max_options is None else max_options
        if resolved_max <= 0:
            raise ValueError("max_options must be a positive integer")

        self._report = report
        self._max_options = resolved_max

    def completion_summary(self) -> ChartData:
        """Return a chart comparing completed and partial responses."""

        totals = self._report.totals
        return ChartData(
            chart_type=ChartType.BAR,
            labels=("Completed", "Partial"),
            values=(float(totals.completed_responses), float(totals.partial_responses)),
            title="Response completion overview",
            description="Completed submissions versus responses still in progress.",
            metadata={
                "total_responses": totals.total_responses,
                "average_completion_time_seconds": totals.average_completion_time_seconds,
            },
        )

    def funnel_chart(self) -> ChartData:
        """Return how many responses reached each question, in question order."""

        steps = self._report.funnel
        return ChartData(
            chart_type=ChartType.BAR,
            labels=tuple(step.question_text or step.question_id for step in steps),
            values=tuple(float(step.reached) for step in steps),
            title="Response funnel",
            description="Responses with a non-empty answer for each question.",
            metadata={"total_responses": self._report.totals.total_responses},
        )

    def question_chart(
        self,
        question_id: str,
        *,
        chart_type: ChartType | str | None = None,
    ) -> ChartData:
        """Return chart data for a single survey question."""

        position, question = self._find_question(question_id)
        resolved_type = self._resolve_chart_type(chart_type, question)
        labels, values, description = self._distribution(question)
        return ChartData(
            chart_type=resolved_type,
            labels=labels,
            values=values,
            title=f"Responses for question {position + 1}",
            question_id=question.question_id,
            question_text=question.question_text,
            description=description,
            metadata={"kind": question.kind, "total_answers": question.total_answers},
        )

    def all_question_charts(self, *, chart_type: ChartType | str | None = None) -> List[ChartData]:
        """Return chart data for each question with at least one recorded answer."""

        requested = ChartType.BAR if chart_type is None else ChartType(chart_type)
        charts: List[ChartData] = []
        for question in self._report.questions:
            if question.total_answers == 0 or question.kind == "unknown":
                continue
            # Pie only makes sense for choice questions; the rest fall back to bars.
            if requested == ChartType.PIE and question.kind != "choice":
                requested_for_question = ChartType.BAR
            else:
                requested_for_question = requested
            charts.append(self.question_chart(question.question_id, chart_type=requested_for_question))
        return charts

    def _find_question(self, question_id: str) -> Tuple[int, QuestionAnalytics]:
        for position, question in enumerate(self._report.questions):
            if question.question_id == question_id:
                return position, question
        raise KeyError(f"Unknown question id: {question_id}")

    def _resolve_chart_type(
        self,
        chart_type: ChartType | str | None,
        question: QuestionAnalytics,
    ) -> ChartType:
        if chart_type is None:
            return ChartType.BAR

        if isinstance(chart_type, str):
            try:
                resolved = ChartType(chart_type)
            except ValueError as exc:
                raise ValueError(f"Unknown chart type: {chart_type}") from exc
        else:
            resolved = chart_type

        if resolved == ChartType.PIE and question.kind != "choice":
            raise ValueError("Pie charts are only supported for choice questions.")

        return resolved

    def _distribution(self, question: QuestionAnalytics) -> Tuple[Tuple[str, ...], Tuple[float, ...], str]:
        if isinstance(question, ChoiceQuestionAnalytics):
            top = question.options[: self._max_options]
            labels = [option.label for option in top]
            values = [float(option.count) for option in top]
            remainder = sum(option.count for option in question.options[self._max_options:])
            if remainder:
                labels.append("Other")
                values.append(float(remainder))
            return tuple(labels), tuple(values), "Selections per option, most chosen first."

        if isinstance(question, RatingQuestionAnalytics):
            return (
                tuple(str(bucket.value) for bucket in question.distribution),
                tuple(float(bucket.count) for bucket in question.distribution),
                "How often each rating value was given.",
            )

        if isinstance(question, TextQuestionAnalytics):
            return ("Text answers",), (float(question.text_count),), "Number of free-text answers received."

        return ("Answers",), (float(question.total_answers),), "Answers recorded for an unsupported question type."


__all__ = [
    "ChartData",
    "ChartType",
    "SurveyChartBuilder",
]
