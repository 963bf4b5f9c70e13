from __future__ import annotations

import os
from typing import Any, Dict, List

import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("CHART_MAX_OPTIONS", "10")

from survey_analytics.models.response import SurveyResponse  # noqa: E402
from survey_analytics.models.survey import Survey  # noqa: E402


def make_survey(*questions: Dict[str, Any], survey_id: str = "survey-1", title: str = "Feedback") -> Survey:
    return Survey.model_validate({"_id": survey_id, "title": title, "status": "published", "questions": list(questions)})


def make_response(answers: Dict[str, Any] | List[tuple], *, completed: bool = True, time_spent: Any = None) -> SurveyResponse:
    pairs = answers.items() if isinstance(answers, dict) else answers
    return SurveyResponse.model_validate(
        {
            "isCompleted": completed,
            "timeSpent": time_spent,
            "answers": [{"questionId": question_id, "answer": value} for question_id, value in pairs],
        }
    )


@pytest.fixture
def mixed_survey() -> Survey:
    return make_survey(
        {"_id": "q-text", "order": 2, "type": "short_text", "text": "Anything else?"},
        {
            "_id": "q-color",
            "order": 0,
            "type": "multiple_choice",
            "text": "Favourite colour",
            "options": [
                {"text": "Red", "value": "red"},
                {"text": "Green", "value": "green"},
                {"text": "Blue"},
            ],
        },
        {"_id": "q-score", "order": 1, "type": "star_rating", "text": "How satisfied are you?"},
        {"_id": "q-matrix", "order": 3, "type": "matrix", "text": "Rate each feature"},
    )


@pytest.fixture
def build_survey():
    return make_survey


@pytest.fixture
def build_response():
    return make_response
