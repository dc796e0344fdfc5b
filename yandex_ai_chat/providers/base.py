"""Abstract base class for Yandex Cloud API providers."""

from abc import ABC, abstractmethod
import httpx
from typing import Optional

from ..utils.logger import get_logger
from ..utils.deadline import Deadline, within
from ..utils.errors import ProtocolError, RemoteServiceError, TimeoutError

logger = get_logger(__name__)


class BaseProvider(ABC):
    """Abstract base class for all API providers."""

    provider_name = "yandex"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize provider.

        Args:
            api_key: Yandex Cloud API key
            base_url: Base URL for API endpoints
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def initialize(self):
        """Initialize the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._get_default_headers(),
                transport=self.transport,
            )
            logger.info(
                f"{self.__class__.__name__} initialized",
                extra={"provider": self.provider_name}
            )

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info(
                f"{self.__class__.__name__} closed",
                extra={"provider": self.provider_name}
            )

    @abstractmethod
    def _get_default_headers(self) -> dict:
        """Get default headers for requests."""
        pass

    def _ensure_client(self):
        """Ensure client is initialized."""
        if self.client is None:
            raise RuntimeError(
                f"{self.__class__.__name__} not initialized. "
                "Call initialize() or use as async context manager."
            )

    async def _request(
        self,
        method: str,
        url: str,
        deadline: Optional[Deadline] = None,
        **kwargs,
    ) -> httpx.Response:
        """Issue exactly one HTTP request; transport failures become package errors."""
        self._ensure_client()

        try:
            return await within(self.client.request(method, url, **kwargs), deadline)
        except httpx.TimeoutException as e:
            logger.error(
                f"{self.provider_name} request timed out",
                extra={"provider": self.provider_name, "url": url, "error": str(e)}
            )
            raise TimeoutError(f"{self.provider_name} request timed out: {e}")
        except httpx.RequestError as e:
            logger.error(
                f"{self.provider_name} request failed: {type(e).__name__}",
                extra={"provider": self.provider_name, "url": url, "error": str(e)}
            )
            raise RemoteServiceError(self.provider_name, f"Request failed: {e}")

    def _handle_response_errors(self, response: httpx.Response):
        """Raise RemoteServiceError for any non-success status."""
        if response.is_success:
            return

        logger.error(
            f"{self.provider_name} returned {response.status_code}",
            extra={
                "provider": self.provider_name,
                "status": response.status_code,
                "response": response.text[:500],
            }
        )
        raise RemoteServiceError(
            self.provider_name,
            f"API returned {response.status_code}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    def _parse_json(self, response: httpx.Response) -> dict:
        """Decode a JSON object body or raise ProtocolError."""
        try:
            data = response.json()
        except ValueError:
            raise ProtocolError(
                self.provider_name,
                f"Response is not valid JSON: {response.text[:200]}"
            )
        if not isinstance(data, dict):
            raise ProtocolError(self.provider_name, f"Expected a JSON object, got {type(data).__name__}")
        return data
