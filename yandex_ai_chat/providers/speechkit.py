"""SpeechKit API client for voice input."""

from typing import Optional
import httpx

from .base import BaseProvider
from ..utils.config import SpeechConfig
from ..utils.deadline import Deadline
from ..utils.errors import NotSupportedError, ProtocolError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SpeechKitClient(BaseProvider):
    """Transcribes recorded audio with Yandex SpeechKit."""

    provider_name = "speechkit"

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        settings: Optional[SpeechConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or SpeechConfig()
        super().__init__(
            api_key=api_key,
            base_url=self.settings.endpoint,
            timeout=timeout,
            transport=transport,
        )

    def _get_default_headers(self) -> dict:
        return {
            "Authorization": f"Api-Key {self.api_key}",
        }

    @property
    def query_params(self) -> dict:
        return {
            "lang": self.settings.lang,
            "format": self.settings.format,
            "sampleRateHertz": str(self.settings.sample_rate_hertz),
        }

    async def recognize(self, deadline: Optional[Deadline] = None) -> str:
        """Capture from the system microphone. Not available in this package."""
        raise NotSupportedError(
            "Microphone recording is not supported. "
            "Use recognize_from_bytes() to provide audio data directly."
        )

    async def recognize_from_bytes(
        self,
        audio_bytes: bytes,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """
        Transcribe pre-recorded OGG/Opus audio.

        Raises:
            ValidationError: Audio is empty
            RemoteServiceError: Non-success status or transport failure
            ProtocolError: SpeechKit returned an empty transcription
        """
        if not audio_bytes:
            raise ValidationError("Audio bytes cannot be empty.")

        logger.info(
            "Sending audio to SpeechKit",
            extra={"audio": audio_bytes, "lang": self.settings.lang}
        )

        response = await self._request(
            "POST",
            self.settings.endpoint,
            deadline=deadline,
            params=self.query_params,
            content=audio_bytes,
            headers={"Content-Type": "audio/ogg"},
        )
        self._handle_response_errors(response)

        result = self._parse_json(response).get("result")
        if not isinstance(result, str) or not result.strip():
            raise ProtocolError(self.provider_name, "SpeechKit returned an empty transcription.")

        logger.info("Transcription received", extra={"text_length": len(result)})
        return result
