"""Pydantic schemas for data validation."""

from typing import Any, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Mode, OperationStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrchestrationRequest(BaseModel):
    """A single prompt submitted for orchestration."""
    prompt: str
    mode: Mode = Mode.GENERAL

    class Config:
        frozen = True

    @field_validator("prompt")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Prompt cannot be empty.")
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def _resolve_mode(cls, value: Any) -> Mode:
        return Mode.parse(value)


class OrchestrationResult(BaseModel):
    """Outputs of whichever stages ran; an absent field means the stage did not run."""
    code: Optional[str] = None
    image: Optional[bytes] = None
    analysis: Optional[str] = None
    plan: Optional[str] = None
    suggestions: Optional[str] = None

    def produced_fields(self) -> list[str]:
        """Names of the fields that were set."""
        return [name for name, value in self if value is not None]


class Operation(BaseModel):
    """State of a remote asynchronous image-generation job."""
    id: str
    status: OperationStatus = OperationStatus.PENDING
    payload: Optional[bytes] = None
    error: Optional[Any] = None
    attempts: int = 0

    @model_validator(mode="after")
    def _check_state(self) -> "Operation":
        if self.payload is not None and self.error is not None:
            raise ValueError("payload and error are mutually exclusive")
        if self.payload is not None and self.status is not OperationStatus.DONE:
            raise ValueError("payload is only present on a done operation")
        if self.error is not None and self.status is not OperationStatus.FAILED:
            raise ValueError("error is only present on a failed operation")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class PromptEntry(BaseModel):
    """A single entry in the prompt history."""
    prompt: str
    timestamp: datetime = Field(default_factory=_utcnow)
