"""Data models and schemas for the Yandex AI chat orchestrator."""

from .schemas import (
    OrchestrationRequest,
    OrchestrationResult,
    Operation,
    PromptEntry,
)
from .enums import (
    Mode,
    Instruction,
    OperationStatus,
    PipelineStage,
)

__all__ = [
    "OrchestrationRequest",
    "OrchestrationResult",
    "Operation",
    "PromptEntry",
    "Mode",
    "Instruction",
    "OperationStatus",
    "PipelineStage",
]
