"""Custom exception classes for the Yandex AI chat orchestrator."""

from typing import Any, Optional


class YandexAIChatError(Exception):
    """Base exception for all orchestrator errors."""
    pass


class ConfigurationError(YandexAIChatError):
    """Configuration or initialization errors."""
    pass


class ValidationError(YandexAIChatError):
    """Caller input rejected before any remote call was made."""
    pass


class APIError(YandexAIChatError):
    """Base class for remote API errors."""
    pass


class RemoteServiceError(APIError):
    """Remote service answered with a non-success HTTP status."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} error: {message}")


class ProtocolError(APIError):
    """Response did not contain the fields the protocol requires."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider} protocol error: {message}")


class RemoteOperationError(APIError):
    """Asynchronous operation finished with an explicit error payload."""

    def __init__(self, operation_id: str, error: Any):
        self.operation_id = operation_id
        self.error = error
        super().__init__(f"Operation {operation_id} failed: {error}")


class TimeoutError(YandexAIChatError):
    """Operation exceeded its attempt budget or deadline."""
    pass


class NotSupportedError(YandexAIChatError):
    """Capability is not available on this platform."""
    pass
