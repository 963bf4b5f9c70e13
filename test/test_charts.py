from __future__ import annotations

import pytest

from survey_analytics import aggregate_survey_responses
from survey_analytics.services.charts import ChartType, SurveyChartBuilder


@pytest.fixture
def report(mixed_survey, build_response):
    responses = [
        build_response({"q-color": ["red", "green"], "q-score": 4, "q-text": "nice"}, time_spent=10),
        build_response({"q-color": "red", "q-score": 2}, completed=False),
        build_response({"q-color": "blue"}, completed=False),
    ]
    return aggregate_survey_responses(mixed_survey, responses)


def test_completion_summary(report) -> None:
    chart = SurveyChartBuilder(report).completion_summary()

    assert chart.as_dict() == {"Completed": 1.0, "Partial": 2.0}
    assert chart.metadata["total_responses"] == 3


def test_funnel_chart_uses_question_text(report) -> None:
    chart = SurveyChartBuilder(report).funnel_chart()

    assert chart.to_series() == [
        ("Favourite colour", 3.0),
        ("How satisfied are you?", 2.0),
        ("Anything else?", 1.0),
        ("Rate each feature", 0.0),
    ]


def test_choice_chart_groups_overflow_as_other(report) -> None:
    chart = SurveyChartBuilder(report, max_options=2).question_chart("q-color", chart_type="pie")

    assert chart.chart_type == ChartType.PIE
    assert chart.to_series() == [("Red", 2.0), ("Green", 1.0), ("Other", 1.0)]
    assert chart.title == "Responses for question 1"


def test_rating_chart_rejects_pie(report) -> None:
    builder = SurveyChartBuilder(report)

    assert builder.question_chart("q-score").labels == ("2", "4")
    with pytest.raises(ValueError):
        builder.question_chart("q-score", chart_type=ChartType.PIE)
    with pytest.raises(ValueError):
        builder.question_chart("q-score", chart_type="donut")
    with pytest.raises(KeyError):
        builder.question_chart("missing")


def test_all_question_charts_skip_unanswered(report) -> None:
    charts = SurveyChartBuilder(report).all_question_charts(chart_type="pie")

    assert [chart.question_id for chart in charts] == ["q-color", "q-score", "q-text"]
    assert [chart.chart_type for chart in charts] == [ChartType.PIE, ChartType.BAR, ChartType.BAR]
    assert charts[2].as_dict() == {"Text answers": 1.0}


def test_invalid_builder_arguments(report) -> None:
    with pytest.raises(ValueError):
        SurveyChartBuilder(report, max_options=0)
    with pytest.raises(ValueError):
        SurveyChartBuilder(None)  # type: ignore[arg-type]
