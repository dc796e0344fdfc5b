"""Enumerations for the Yandex AI chat orchestrator."""

from enum import Enum
from typing import Optional


class Mode(str, Enum):
    """Orchestration mode selected by the caller."""
    CODE = "code"
    REFACTOR = "refactor"
    EXPLANATION = "explanation"
    SECURITY = "security"
    VISUALIZATION = "visualization"
    GENERAL = "general"
    DOCUMENTATION = "documentation"
    PLANNING = "planning"
    BUGFIX = "bugfix"
    SUGGEST = "suggest"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Mode":
        """Resolve a mode string, falling back to GENERAL for anything unknown."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.GENERAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GENERAL


class Instruction(str, Enum):
    """System-instruction variant sent to the text model."""
    CODE = "code"
    REFACTOR = "refactor"
    EXPLANATION = "explanation"
    SECURITY = "security"
    DOCUMENTATION = "documentation"
    PLANNING = "planning"
    BUGFIX = "bugfix"
    SUGGEST = "suggest"
    GENERAL = "general"


class OperationStatus(str, Enum):
    """Lifecycle of an asynchronous image-generation operation."""
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not OperationStatus.PENDING


class PipelineStage(str, Enum):
    """Stage of the cascade pipeline."""
    GENERATE = "generate"
    OPTIMIZE = "optimize"
    DOCUMENT = "document"
    ANALYZE = "analyze"
    DIAGRAM = "diagram"
