"""Orchestration endpoints: single-mode dispatch and the cascade pipeline."""

import base64
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .deps import deadline_from, get_history, get_orchestrator
from ..core.history import PromptHistory
from ..core.orchestrator import Orchestrator
from ..models.enums import Mode
from ..models.schemas import OrchestrationResult
from ..utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


class OrchestrateBody(BaseModel):
    """Body of POST /orchestrate."""
    prompt: str
    mode: Optional[str] = Mode.GENERAL.value
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class CascadeBody(BaseModel):
    """Body of POST /orchestrate/cascade."""
    prompt: str
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class OrchestrateResponse(BaseModel):
    """Result fields; the image is base64 encoded."""
    code: Optional[str] = None
    image_base64: Optional[str] = None
    analysis: Optional[str] = None
    plan: Optional[str] = None
    suggestions: Optional[str] = None

    @classmethod
    def from_result(cls, result: OrchestrationResult) -> "OrchestrateResponse":
        return cls(
            code=result.code,
            image_base64=base64.b64encode(result.image).decode("ascii") if result.image is not None else None,
            analysis=result.analysis,
            plan=result.plan,
            suggestions=result.suggestions,
        )


@router.post("", response_model=OrchestrateResponse, response_model_exclude_none=True)
async def orchestrate(
    body: OrchestrateBody,
    orchestrator: Orchestrator = Depends(get_orchestrator),
    history: PromptHistory = Depends(get_history),
):
    """Run one prompt in the selected mode."""
    await history.add_async(body.prompt)

    result = await orchestrator.dispatch(
        body.prompt,
        body.mode,
        deadline=deadline_from(body.timeout_seconds),
    )
    return OrchestrateResponse.from_result(result)


@router.post("/cascade", response_model=OrchestrateResponse, response_model_exclude_none=True)
async def cascade(
    body: CascadeBody,
    orchestrator: Orchestrator = Depends(get_orchestrator),
    history: PromptHistory = Depends(get_history),
):
    """Run generate → optimize → document → analyze → diagram."""
    await history.add_async(body.prompt)

    result = await orchestrator.cascade(
        body.prompt,
        deadline=deadline_from(body.timeout_seconds),
    )
    return OrchestrateResponse.from_result(result)
