"""Tests for POST /api/ai/subject."""

from unittest.mock import Mock, patch

import openai

from planner.services import subjects


def _completion(content):
    message = Mock()
    message.content = content
    choice = Mock()
    choice.message = message
    response = Mock()
    response.choices = [choice]
    return response


def test_stock_suggestions_without_api_key(client):
    response = client.post("/api/ai/subject", json={"tone": "friendly"})
    assert response.status_code == 200
    assert response.json() == {"suggestions": subjects.STOCK_SUBJECTS}


def test_empty_body_is_accepted(client):
    response = client.post("/api/ai/subject")
    assert response.status_code == 200
    assert len(response.json()["suggestions"]) == 3


def test_suggestions_from_openai(client):
    mock_client = Mock()
    mock_client.chat.completions.create.return_value = _completion(
        '1. Spring sale starts today\n2) "Last chance for early birds"\n- Your invitation inside\n- extra line'
    )

    with patch.object(subjects, "OPENAI_API_KEY", "sk-test"), \
         patch.object(subjects, "get_openai_client", return_value=mock_client):
        response = client.post("/api/ai/subject", json={"tone": "urgent"})

    assert response.status_code == 200
    assert response.json()["suggestions"] == [
        "Spring sale starts today",
        "Last chance for early birds",
        "Your invitation inside",
    ]
    kwargs = mock_client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"][-1]["content"] == "Tone: urgent"


def test_openai_failure_falls_back(client):
    mock_client = Mock()
    mock_client.chat.completions.create.side_effect = openai.OpenAIError("quota exceeded")

    with patch.object(subjects, "OPENAI_API_KEY", "sk-test"), \
         patch.object(subjects, "get_openai_client", return_value=mock_client):
        response = client.post("/api/ai/subject", json={"tone": "calm"})

    assert response.status_code == 200
    assert response.json()["suggestions"] == subjects.STOCK_SUBJECTS
