"""Image generation component: submit a YandexART job and wait for its image."""

import time
from typing import Optional

from .operation_poller import OperationPoller
from .prompts import UI_MOCKUP_SIZE, UML_DIAGRAM_SIZE, ui_mockup_prompt, uml_diagram_prompt
from ..providers.yandex_art import YandexARTClient
from ..utils.deadline import Deadline
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ImageGenerator:
    """Generates images and diagrams using YandexART."""

    def __init__(self, art_client: YandexARTClient, poller: OperationPoller):
        """
        Initialize image generator.

        Args:
            art_client: YandexART API client
            poller: Poller bound to the same client
        """
        self.client = art_client
        self.poller = poller

    async def generate_image(
        self,
        prompt: str,
        width: int = 1024,
        height: int = 1024,
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """
        Submit a job and wait for the resulting image.

        Returns:
            Raw image bytes
        """
        start_time = time.time()

        operation_id = await self.client.submit(prompt, width, height, deadline=deadline)
        image_bytes = await self.poller.await_result(operation_id, deadline=deadline)

        logger.info(
            "Image generated successfully",
            extra={
                "operation_id": operation_id,
                "size_kb": round(len(image_bytes) / 1024, 1),
                "duration_seconds": round(time.time() - start_time, 2),
            }
        )

        return image_bytes

    async def generate_uml_diagram(
        self,
        code: str,
        diagram_type: str = "class",
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """Generate a UML diagram from a code snippet."""
        width, height = UML_DIAGRAM_SIZE
        return await self.generate_image(
            uml_diagram_prompt(code, diagram_type),
            width,
            height,
            deadline=deadline,
        )

    async def generate_ui(self, description: str, deadline: Optional[Deadline] = None) -> bytes:
        """Generate a UI mockup from a description."""
        width, height = UI_MOCKUP_SIZE
        return await self.generate_image(
            ui_mockup_prompt(description),
            width,
            height,
            deadline=deadline,
        )
