"""Main FastAPI application entry point."""

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .api import health, history, orchestrate, voice
from .core import PromptHistory, build_orchestrator
from .providers import SpeechKitClient
from .utils.config import load_config
from .utils.errors import (
    ConfigurationError,
    NotSupportedError,
    TimeoutError,
    ValidationError,
    YandexAIChatError,
)
from .utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown.

    Without credentials the app still starts; orchestration endpoints
    answer 503 until YANDEX_FOLDER_ID and YANDEX_API_KEY are set.
    """
    logger.info("Application starting up...")

    config = load_config()

    app.state.config = config
    app.state.history = PromptHistory(
        config.prompt_history_path,
        max_entries=config.prompt_history_max_entries,
    )
    app.state.orchestrator = None
    app.state.speech = None

    if config.is_configured:
        orchestrator = build_orchestrator(config)
        await orchestrator.initialize()
        app.state.orchestrator = orchestrator
        logger.info("Orchestrator initialized")
    else:
        logger.warning("Yandex credentials missing; orchestration disabled until configured")

    if config.yandex_api_key.strip():
        speech = SpeechKitClient(
            api_key=config.yandex_api_key,
            timeout=config.timeout_speechkit_seconds,
            settings=config.speech,
        )
        await speech.initialize()
        app.state.speech = speech

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down...")
        if app.state.orchestrator is not None:
            await app.state.orchestrator.close()
        if app.state.speech is not None:
            await app.state.speech.close()
        logger.info("Application shutdown complete")


ERROR_STATUS = (
    (ValidationError, 422),
    (ConfigurationError, 503),
    (NotSupportedError, 501),
    (TimeoutError, 504),
)


async def handle_agent_error(request: Request, exc: YandexAIChatError) -> JSONResponse:
    """Map package errors onto a single user-visible message."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS if isinstance(exc, error_type)),
        502,
    )
    logger.error(
        f"Request failed: {exc}",
        extra={"path": request.url.path, "status": status_code, "error_type": type(exc).__name__}
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Yandex AI Chat",
        description="Code generation, analysis and diagrams via YandexGPT and YandexART",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_exception_handler(YandexAIChatError, handle_agent_error)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(orchestrate.router, prefix="/orchestrate", tags=["orchestration"])
    app.include_router(history.router, prefix="/history", tags=["history"])
    app.include_router(voice.router, prefix="/voice", tags=["voice"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "yandex-ai-chat",
            "version": __version__,
            "status": "running",
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))

    uvicorn.run(
        "yandex_ai_chat.main:app",
        host="0.0.0.0",
        port=port,
        log_level="info",
    )
