"""Collects stage outputs into a single OrchestrationResult."""

from typing import Any, Dict

from ..models.schemas import OrchestrationResult


class ResultAggregator:
    """
    Accumulates outputs for one orchestration run.

    Values are stored as given; fields never recorded stay absent in the
    built result. A later record for the same field replaces the earlier one.
    """

    def __init__(self):
        self._outputs: Dict[str, Any] = {}

    def record(self, field: str, value: Any) -> None:
        if field not in OrchestrationResult.model_fields:
            raise KeyError(f"Unknown result field: {field}")
        self._outputs[field] = value

    def build(self) -> OrchestrationResult:
        return OrchestrationResult(**self._outputs)
