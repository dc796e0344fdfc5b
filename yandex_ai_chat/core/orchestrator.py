"""Main orchestrator: routes a prompt by mode and runs the cascade pipeline."""

import asyncio
import time
from typing import Awaitable, Callable, NamedTuple, Optional, TypeVar, Union

import httpx

from .aggregator import ResultAggregator
from .image_generator import ImageGenerator
from .operation_poller import OperationPoller, Sleep
from .prompts import (
    DOCUMENT_TEMPLATE,
    OPTIMIZE_TEMPLATE,
    REFACTOR_TEMPLATE,
    SECURITY_TEMPLATE,
)
from ..models.enums import Instruction, Mode, PipelineStage
from ..models.schemas import OrchestrationRequest, OrchestrationResult
from ..providers.yandex_art import YandexARTClient
from ..providers.yandex_gpt import YandexGPTClient
from ..utils.config import Config
from ..utils.deadline import Deadline
from ..utils.errors import ConfigurationError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class TextRoute(NamedTuple):
    """How a mode maps onto a single text call."""
    instruction: Instruction
    field: str
    template: Optional[str] = None


GENERAL_ROUTE = TextRoute(Instruction.GENERAL, "code")

TEXT_ROUTES = {
    Mode.CODE: TextRoute(Instruction.CODE, "code"),
    Mode.REFACTOR: TextRoute(Instruction.REFACTOR, "code", REFACTOR_TEMPLATE),
    Mode.EXPLANATION: TextRoute(Instruction.EXPLANATION, "code"),
    Mode.SECURITY: TextRoute(Instruction.SECURITY, "analysis"),
    Mode.GENERAL: GENERAL_ROUTE,
    # Named modes without a route of their own run as general
    Mode.DOCUMENTATION: GENERAL_ROUTE,
    Mode.PLANNING: GENERAL_ROUTE,
    Mode.BUGFIX: GENERAL_ROUTE,
    Mode.SUGGEST: GENERAL_ROUTE,
}

# Modes answered by the image service instead of a text route
IMAGE_MODES = frozenset({Mode.VISUALIZATION})


def require_prompt(prompt: Optional[str]) -> str:
    """Reject empty or whitespace-only prompts before any remote call."""
    if prompt is None or not prompt.strip():
        raise ValidationError("Prompt cannot be empty.")
    return prompt


class Orchestrator:
    """Orchestrates YandexGPT and YandexART calls for a single prompt."""

    def __init__(self, text_client: YandexGPTClient, image_generator: ImageGenerator):
        """
        Initialize orchestrator.

        Args:
            text_client: YandexGPT client
            image_generator: ImageGenerator wrapping the YandexART client
        """
        self.text_client = text_client
        self.image_generator = image_generator

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        """Open the HTTP clients of both providers."""
        await self.text_client.initialize()
        await self.image_generator.client.initialize()

    async def close(self):
        await self.text_client.close()
        await self.image_generator.client.close()

    async def execute(
        self,
        request: OrchestrationRequest,
        deadline: Optional[Deadline] = None,
    ) -> OrchestrationResult:
        """Dispatch a prebuilt request."""
        return await self.dispatch(request.prompt, request.mode, deadline=deadline)

    async def dispatch(
        self,
        prompt: str,
        mode: Union[Mode, str, None] = Mode.GENERAL,
        deadline: Optional[Deadline] = None,
    ) -> OrchestrationResult:
        """
        Execute a single-mode task.

        Args:
            prompt: User prompt
            mode: Mode selector; unknown values run as GENERAL
            deadline: Optional caller deadline covering every remote call

        Returns:
            OrchestrationResult with exactly one field set

        Raises:
            ValidationError: Prompt is empty or whitespace
        """
        require_prompt(prompt)
        resolved = Mode.parse(mode)
        aggregator = ResultAggregator()
        start_time = time.time()

        logger.info(
            "Starting orchestration",
            extra={"mode": resolved.value, "requested_mode": str(mode), "prompt_length": len(prompt)}
        )

        try:
            if resolved in IMAGE_MODES:
                image = await self.image_generator.generate_uml_diagram(prompt, deadline=deadline)
                aggregator.record("image", image)
            else:
                route = TEXT_ROUTES[resolved]
                text_prompt = route.template.format(prompt=prompt) if route.template else prompt
                output = await self.text_client.complete(
                    text_prompt,
                    route.instruction,
                    deadline=deadline,
                )
                aggregator.record(route.field, output)
        except Exception as e:
            logger.error(
                f"Orchestration failed: {e}",
                extra={"mode": resolved.value, "error_type": type(e).__name__}
            )
            raise

        result = aggregator.build()

        logger.info(
            "Orchestration complete",
            extra={
                "mode": resolved.value,
                "fields": result.produced_fields(),
                "duration_seconds": round(time.time() - start_time, 2),
            }
        )

        return result

    async def cascade(
        self,
        prompt: str,
        deadline: Optional[Deadline] = None,
    ) -> OrchestrationResult:
        """
        Run the full cascade pipeline.

        Generate → optimize → document → security analysis → UML diagram.
        Each stage consumes the previous stage's output, so they run strictly
        one after another. The first failure aborts the pipeline and is
        raised to the caller; no partial result is returned.

        Returns:
            OrchestrationResult with code, analysis and image set

        Raises:
            ValidationError: Prompt is empty or whitespace
        """
        require_prompt(prompt)
        start_time = time.time()
        logger.info("Starting cascade pipeline", extra={"prompt_length": len(prompt)})

        code_v1 = await self._run_stage(
            PipelineStage.GENERATE,
            lambda: self.text_client.complete(prompt, Instruction.CODE, deadline=deadline),
        )
        code_v2 = await self._run_stage(
            PipelineStage.OPTIMIZE,
            lambda: self.text_client.complete(
                OPTIMIZE_TEMPLATE.format(code=code_v1), Instruction.REFACTOR, deadline=deadline
            ),
        )
        code_v3 = await self._run_stage(
            PipelineStage.DOCUMENT,
            lambda: self.text_client.complete(
                DOCUMENT_TEMPLATE.format(code=code_v2), Instruction.DOCUMENTATION, deadline=deadline
            ),
        )
        analysis = await self._run_stage(
            PipelineStage.ANALYZE,
            lambda: self.text_client.complete(
                SECURITY_TEMPLATE.format(code=code_v3), Instruction.SECURITY, deadline=deadline
            ),
        )
        image = await self._run_stage(
            PipelineStage.DIAGRAM,
            lambda: self.image_generator.generate_uml_diagram(code_v3, deadline=deadline),
        )

        aggregator = ResultAggregator()
        aggregator.record("code", code_v3)
        aggregator.record("analysis", analysis)
        aggregator.record("image", image)

        logger.info(
            "Cascade pipeline complete",
            extra={"duration_seconds": round(time.time() - start_time, 2)}
        )

        return aggregator.build()

    async def _run_stage(self, stage: PipelineStage, call: Callable[[], Awaitable[T]]) -> T:
        stage_start = time.time()
        logger.info(f"Cascade stage: {stage.value}", extra={"stage": stage.value})

        try:
            output = await call()
        except Exception as e:
            logger.error(
                f"Cascade aborted at stage {stage.value}: {e}",
                extra={"stage": stage.value, "error_type": type(e).__name__}
            )
            raise

        logger.info(
            f"Cascade stage {stage.value} done",
            extra={"stage": stage.value, "duration_seconds": round(time.time() - stage_start, 2)}
        )
        return output


def build_orchestrator(
    config: Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Sleep = asyncio.sleep,
) -> Orchestrator:
    """
    Wire clients, poller and orchestrator from configuration.

    Raises:
        ConfigurationError: Folder id or API key is missing
    """
    if not config.is_configured:
        raise ConfigurationError(
            "YANDEX_FOLDER_ID and YANDEX_API_KEY must both be set before orchestrating."
        )

    text_client = YandexGPTClient(
        api_key=config.yandex_api_key,
        folder_id=config.yandex_folder_id,
        timeout=config.timeout_yandex_gpt_seconds,
        settings=config.text_generation,
        transport=transport,
    )
    art_client = YandexARTClient(
        api_key=config.yandex_api_key,
        folder_id=config.yandex_folder_id,
        timeout=config.timeout_yandex_art_seconds,
        settings=config.image_generation,
        transport=transport,
    )
    poller = OperationPoller(
        art_client,
        max_attempts=config.poll_max_attempts,
        poll_interval=config.poll_interval_seconds,
        sleep=sleep,
    )

    return Orchestrator(text_client, ImageGenerator(art_client, poller))
