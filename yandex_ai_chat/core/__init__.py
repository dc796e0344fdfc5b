"""Core business logic components."""

from .aggregator import ResultAggregator
from .history import PromptHistory
from .image_generator import ImageGenerator
from .operation_poller import OperationPoller
from .orchestrator import Orchestrator, build_orchestrator

__all__ = [
    "ResultAggregator",
    "PromptHistory",
    "ImageGenerator",
    "OperationPoller",
    "Orchestrator",
    "build_orchestrator",
]
