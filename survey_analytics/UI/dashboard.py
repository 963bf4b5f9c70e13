from __future__ import annotations

import streamlit as st

from survey_analytics.API.survey_data_provider import SurveyAnalyticsProvider
from survey_analytics.core.logging import configure_logging
from survey_analytics.models.analytics import SurveyAnalyticsReport
from survey_analytics.services.charts import ChartData, SurveyChartBuilder


@st.cache_resource
def _get_provider() -> SurveyAnalyticsProvider:
    """Return a shared provider backed by the configured survey store."""

    configure_logging()
    return SurveyAnalyticsProvider()


def run_app() -> None:
    """Entry point for the Streamlit analytics dashboard."""

    st.set_page_config(page_title="Survey Analytics", page_icon="📊", layout="wide")

    provider = _get_provider()
    surveys = provider.list_surveys()
    if not surveys:
        st.info("No surveys found in the configured survey store.")
        return

    titles = {survey.id: survey.title or survey.id for survey in surveys}
    selected_id = st.selectbox(
        "Survey",
        options=list(titles),
        format_func=lambda survey_id: titles[survey_id],
    )
    if selected_id is None:
        return

    report = provider.get_report(selected_id)
    _render_totals(report)

    builder = SurveyChartBuilder(report)
    st.header("Funnel")
    if report.funnel:
        _render_chart(builder.funnel_chart())
    else:
        st.info("This survey has no questions yet.")

    st.header("Questions")
    charts = builder.all_question_charts()
    if not charts:
        st.info("No answers have been recorded for this survey yet.")
    for chart in charts:
        st.subheader(chart.question_text or chart.title)
        _render_chart(chart)


def _render_totals(report: SurveyAnalyticsReport) -> None:
    totals = report.totals
    total_col, completed_col, partial_col, time_col = st.columns(4)
    total_col.metric("Responses", totals.total_responses)
    completed_col.metric("Completed", totals.completed_responses)
    partial_col.metric("Partial", totals.partial_responses)
    time_col.metric("Avg. completion time", f"{totals.average_completion_time_seconds:.0f}s")


def _render_chart(chart: ChartData) -> None:
    if chart.description:
        st.caption(chart.description)
    st.bar_chart(
        {"label": list(chart.labels), "count": list(chart.values)},
        x="label",
        y="count",
    )
