"""Smoke tests for the HTTP transport."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from language_tutor_bot.api.routes import router
from language_tutor_bot.app import Container
from language_tutor_bot.config import Settings
from language_tutor_bot.core.router import UNEXPECTED_FAILURE
from language_tutor_bot.main import create_app


@pytest.fixture
def container(store, corrector):
    return Container(Settings(openai_api_key="test-key"), store=store, corrector=corrector)


@pytest.fixture
def client(container):
    app = FastAPI()
    app.include_router(router)
    app.state.container = container
    with TestClient(app) as c:
        yield c


class TestHealthCheck:
    def test_health_returns_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestMessages:
    def test_command_round_trip(self, client):
        response = client.post("/api/messages", json={"user_id": 42, "text": "/language French"})
        assert response.status_code == 200
        assert response.json() == {"reply": 'Target language set to: "French"'}

    def test_gate_applies(self, client):
        response = client.post("/api/messages", json={"user_id": 42, "text": "Bonjour"})
        assert response.json()["reply"].startswith("Please set your target language first")

    def test_invalid_body(self, client):
        response = client.post("/api/messages", json={"user_id": "abc"})
        assert response.status_code == 422

    def test_store_outage_returns_plain_message(self, container):
        container.router = MagicMock()
        container.router.handle = AsyncMock(side_effect=RedisConnectionError("down"))
        app = FastAPI()
        app.include_router(router)
        app.state.container = container

        with TestClient(app) as c:
            response = c.post("/api/messages", json={"user_id": 1, "text": "hi"})

        assert response.status_code == 503
        assert response.json() == {"reply": UNEXPECTED_FAILURE}


def test_create_app_uses_supplied_container(container):
    app = create_app(container)
    with TestClient(app) as c:
        response = c.post("/api/messages", json={"user_id": 5, "text": "/start"})
    assert "Welcome, language learner!" in response.json()["reply"]
