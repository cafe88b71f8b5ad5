"""Tests for the OpenAI-backed corrector."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from language_tutor_bot.ai.client import OpenAICorrector
from language_tutor_bot.ai.prompts import build_correction_prompt, build_practice_prompt
from language_tutor_bot.models.correction import ErrorType


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def corrector(openai_client):
    return OpenAICorrector(api_key="test-key", client=openai_client)


class TestCorrect:
    async def test_returns_result(self, corrector, openai_client):
        payload = {
            "corrected": "Correct sentence.",
            "explanation": "Explanation.",
            "errorType": "grammar",
            "reply": "Good job!",
        }
        openai_client.chat.completions.create.return_value = _completion(json.dumps(payload))

        result = await corrector.correct("Wrong sentence.", "English", "general")

        assert result.corrected == "Correct sentence."
        assert result.error_type is ErrorType.GRAMMAR
        assert result.reply == "Good job!"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"] == {"type": "json_object"}
        assert "Wrong sentence." in kwargs["messages"][0]["content"]

    async def test_null_content_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.return_value = _completion(None)
        assert await corrector.correct("test message", "English") is None

    async def test_api_error_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("API Error")
        assert await corrector.correct("test message", "English") is None

    async def test_invalid_json_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.return_value = _completion("not json")
        assert await corrector.correct("test message", "English") is None

    async def test_unknown_category_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.return_value = _completion(
            json.dumps({"corrected": "x", "errorType": "spelling", "reply": "y"})
        )
        assert await corrector.correct("test message", "English") is None


class TestPractice:
    async def test_returns_exercise(self, corrector, openai_client):
        payload = {"type": "translation", "sentence": "Hello", "correct_answer": "Olá"}
        openai_client.chat.completions.create.return_value = _completion(json.dumps(payload))

        exercise = await corrector.practice("Spanish", "grammar")

        assert exercise.sentence == "Hello"
        assert exercise.correct_answer == "Olá"
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert '"grammar"' in kwargs["messages"][0]["content"]

    async def test_null_content_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.return_value = _completion("")
        assert await corrector.practice("Spanish") is None

    async def test_api_error_returns_none(self, corrector, openai_client):
        openai_client.chat.completions.create.side_effect = RuntimeError("API Error")
        assert await corrector.practice("Spanish") is None


class TestPrompts:
    def test_correction_prompt_defaults_context(self):
        prompt = build_correction_prompt("Olá", "English", "Portuguese")
        assert 'The current conversation topic is: "general"' in prompt
        assert '"reply"' in prompt

    def test_correction_prompt_includes_context(self):
        prompt = build_correction_prompt("Olá", "English", "Portuguese", context="travel")
        assert '"travel"' in prompt

    def test_practice_prompt_constrains_languages(self):
        prompt = build_practice_prompt("French", "English", "tense")
        assert 'between "French" and "English"' in prompt
        assert 'Targeted error type: "tense"' in prompt
