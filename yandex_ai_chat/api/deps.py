"""Request-scoped accessors for components stored on app.state."""

from typing import Optional

from fastapi import HTTPException, Request

from ..core.history import PromptHistory
from ..core.orchestrator import Orchestrator
from ..providers.speechkit import SpeechKitClient
from ..utils.deadline import Deadline

NOT_CONFIGURED = "Yandex folder id and API key are not configured."


def get_orchestrator(request: Request) -> Orchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail=NOT_CONFIGURED)
    return orchestrator


def get_history(request: Request) -> PromptHistory:
    history = getattr(request.app.state, "history", None)
    if history is None:
        raise HTTPException(status_code=503, detail="Prompt history is not available.")
    return history


def get_speech_client(request: Request) -> SpeechKitClient:
    client = getattr(request.app.state, "speech", None)
    if client is None:
        raise HTTPException(status_code=503, detail=NOT_CONFIGURED)
    return client


def deadline_from(timeout_seconds: Optional[float]) -> Optional[Deadline]:
    if timeout_seconds is None:
        return None
    return Deadline.after(timeout_seconds)
