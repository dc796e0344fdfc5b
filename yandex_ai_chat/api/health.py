"""Health check endpoint."""

from fastapi import APIRouter, Request
from datetime import datetime, timezone

from .. import __version__

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": _now(),
        "service": "yandex-ai-chat",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Ready only once credentials are configured and the orchestrator is wired."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    return {
        "ready": orchestrator is not None,
        "timestamp": _now(),
    }
