"""Tests for the HTTP API."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from yandex_ai_chat.core.history import PromptHistory
from yandex_ai_chat.main import create_app
from yandex_ai_chat.models.schemas import OrchestrationResult
from yandex_ai_chat.utils.errors import (
    ConfigurationError,
    NotSupportedError,
    RemoteServiceError,
    TimeoutError,
    ValidationError,
)


@pytest.fixture
def orchestrator():
    orchestrator = MagicMock()
    orchestrator.dispatch = AsyncMock(return_value=OrchestrationResult(code="print('hi')"))
    orchestrator.cascade = AsyncMock(
        return_value=OrchestrationResult(code="v3", analysis="ok", image=b"\x89PNG")
    )
    return orchestrator


@pytest.fixture
def app(tmp_path, orchestrator):
    # Lifespan is not run; components are placed on app.state directly
    app = create_app()
    app.state.orchestrator = orchestrator
    app.state.history = PromptHistory(tmp_path / "history.json")
    app.state.speech = None
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "yandex-ai-chat"


def test_health(client):
    assert client.get("/health/").json()["status"] == "healthy"
    assert client.get("/health/ready").json()["ready"] is True


def test_orchestrate_returns_present_fields_only(client, orchestrator):
    response = client.post("/orchestrate", json={"prompt": "hello world", "mode": "code"})

    assert response.status_code == 200
    assert response.json() == {"code": "print('hi')"}
    args, kwargs = orchestrator.dispatch.await_args
    assert args == ("hello world", "code")
    assert kwargs == {"deadline": None}


def test_orchestrate_passes_deadline(client, orchestrator):
    client.post("/orchestrate", json={"prompt": "p", "mode": "code", "timeout_seconds": 30})

    deadline = orchestrator.dispatch.await_args.kwargs["deadline"]
    assert 0 < deadline.remaining() <= 30


def test_cascade_encodes_image(client):
    response = client.post("/orchestrate/cascade", json={"prompt": "build a cache"})

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "v3"
    assert body["analysis"] == "ok"
    assert base64.b64decode(body["image_base64"]) == b"\x89PNG"


def test_prompt_recorded_even_when_orchestration_fails(client, app, orchestrator):
    orchestrator.dispatch.side_effect = RemoteServiceError("yandexgpt", "down", 500, "down")

    response = client.post("/orchestrate", json={"prompt": "fails", "mode": "code"})

    assert response.status_code == 502
    assert "down" in response.json()["detail"]
    assert [e.prompt for e in app.state.history.entries] == ["fails"]


@pytest.mark.parametrize("error, status_code", [
    (ValidationError("Prompt cannot be empty."), 422),
    (TimeoutError("Image generation timed out"), 504),
    (NotSupportedError("Microphone capture is not supported."), 501),
    (ConfigurationError("YANDEX_FOLDER_ID and YANDEX_API_KEY must both be set."), 503),
])
def test_error_mapping(client, orchestrator, error, status_code):
    orchestrator.dispatch.side_effect = error

    response = client.post("/orchestrate", json={"prompt": " ", "mode": "code"})

    assert response.status_code == status_code
    assert response.json() == {"detail": str(error)}


def test_unconfigured_returns_503(client, app):
    app.state.orchestrator = None

    response = client.post("/orchestrate", json={"prompt": "p", "mode": "code"})

    assert response.status_code == 503
    assert client.get("/health/ready").json()["ready"] is False


def test_history_search_and_clear(client, app):
    app.state.history.add("Generate REST API")
    app.state.history.add("Refactor auth")

    found = client.get("/history", params={"q": "rest"}).json()
    assert [e["prompt"] for e in found] == ["Generate REST API"]

    assert client.delete("/history").json() == {"cleared": True}
    assert client.get("/history").json() == []


def test_voice_transcribe(client, app):
    speech = MagicMock()
    speech.recognize_from_bytes = AsyncMock(return_value="сделай рефакторинг")
    app.state.speech = speech

    response = client.post("/voice/transcribe", content=b"OggS-audio")

    assert response.status_code == 200
    assert response.json() == {"text": "сделай рефакторинг"}
    speech.recognize_from_bytes.assert_awaited_once_with(b"OggS-audio")


def test_voice_unconfigured(client):
    assert client.post("/voice/transcribe", content=b"x").status_code == 503
