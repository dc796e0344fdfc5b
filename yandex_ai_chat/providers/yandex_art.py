"""YandexART API client for asynchronous image generation."""

import random
from typing import Optional
import httpx

from .base import BaseProvider
from ..utils.config import ImageGenerationConfig
from ..utils.deadline import Deadline
from ..utils.errors import ProtocolError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

SEED_MIN = 1
SEED_MAX = 999999


class YandexARTClient(BaseProvider):
    """Client for YandexART: submits generation jobs and queries their status."""

    provider_name = "yandexart"

    def __init__(
        self,
        api_key: str,
        folder_id: str,
        timeout: float = 120.0,
        settings: Optional[ImageGenerationConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or ImageGenerationConfig()
        super().__init__(
            api_key=api_key,
            base_url=self.settings.endpoint,
            timeout=timeout,
            transport=transport,
        )
        self.folder_id = folder_id
        self.rng = rng or random.Random()

    def _get_default_headers(self) -> dict:
        return {
            "Authorization": f"Api-Key {self.api_key}",
            "Content-Type": "application/json",
        }

    @property
    def model_uri(self) -> str:
        return f"art://{self.folder_id}/{self.settings.model}/latest"

    def build_payload(self, prompt: str, width: int, height: int) -> dict:
        """
        Request body for one generation job.

        widthRatio/heightRatio carry the raw pixel values as given.
        """
        return {
            "modelUri": self.model_uri,
            "generationOptions": {
                "seed": str(self.rng.randint(SEED_MIN, SEED_MAX)),
                "aspectRatio": {
                    "widthRatio": width,
                    "heightRatio": height,
                },
            },
            "messages": [
                {
                    "weight": "1",
                    "text": prompt,
                }
            ],
        }

    async def submit(
        self,
        prompt: str,
        width: int = 1024,
        height: int = 1024,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """
        Submit an image generation job.

        Returns:
            Opaque operation id

        Raises:
            ValidationError: Prompt is empty
            RemoteServiceError: Non-success status or transport failure
            ProtocolError: No operation id in the response
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt cannot be empty.")

        payload = self.build_payload(prompt, width, height)

        logger.info(
            "Submitting to YandexART",
            extra={
                "model_uri": self.model_uri,
                "width": width,
                "height": height,
                "seed": payload["generationOptions"]["seed"],
                "prompt": prompt[:100],
            }
        )

        response = await self._request(
            "POST",
            self.settings.endpoint,
            deadline=deadline,
            json=payload,
        )
        self._handle_response_errors(response)

        operation_id = self._parse_json(response).get("id")
        if not operation_id:
            logger.error("No operation ID in response", extra={"response": response.text[:500]})
            raise ProtocolError(self.provider_name, "No operation ID returned from YandexART.")

        logger.info("Operation submitted", extra={"operation_id": operation_id})
        return str(operation_id)

    async def status(self, operation_id: str, deadline: Optional[Deadline] = None) -> dict:
        """Issue one status query for an operation and return the raw document."""
        response = await self._request(
            "GET",
            f"{self.settings.operation_endpoint}{operation_id}",
            deadline=deadline,
        )
        self._handle_response_errors(response)
        return self._parse_json(response)
