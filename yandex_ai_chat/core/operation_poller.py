"""Bounded polling of asynchronous YandexART operations."""

import asyncio
import base64
import binascii
from typing import Any, Awaitable, Callable, Optional

from ..models.enums import OperationStatus
from ..models.schemas import Operation
from ..providers.yandex_art import YandexARTClient
from ..utils.deadline import Deadline, within
from ..utils.errors import ProtocolError, RemoteOperationError, TimeoutError
from ..utils.logger import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class OperationPoller:
    """
    Drives a submitted operation to a terminal state.

    Each attempt sleeps for `poll_interval` and then issues one status query.
    `done=false` keeps the operation pending; `done=true` moves it to DONE
    (image decoded) or FAILED (error payload). Running out of attempts
    leaves it TIMED_OUT. The sleep function is injectable so tests can
    simulate the interval instead of waiting it out.
    """

    def __init__(
        self,
        art_client: YandexARTClient,
        max_attempts: int = 30,
        poll_interval: float = 2.0,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = art_client
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval
        self.sleep = sleep

    async def track(self, operation_id: str, deadline: Optional[Deadline] = None) -> Operation:
        """
        Poll until the operation is terminal.

        Returns:
            Operation in DONE, FAILED or TIMED_OUT state

        Raises:
            ProtocolError: done=true without error or decodable image
            RemoteServiceError: A status query failed
            TimeoutError: The caller's deadline passed
        """
        operation = Operation(id=operation_id)

        for attempt in range(1, self.max_attempts + 1):
            await within(self.sleep(self.poll_interval), deadline)

            document = await self.client.status(operation_id, deadline=deadline)
            operation = self._advance(operation_id, document, attempt)

            logger.info(
                f"Operation status: {operation.status.value}",
                extra={
                    "operation_id": operation_id,
                    "attempt": attempt,
                    "max_attempts": self.max_attempts,
                }
            )

            if operation.is_terminal:
                return operation

        logger.error(
            f"Operation did not finish after {self.max_attempts} attempts",
            extra={"operation_id": operation_id, "poll_interval": self.poll_interval}
        )
        return Operation(
            id=operation_id,
            status=OperationStatus.TIMED_OUT,
            attempts=self.max_attempts,
        )

    async def await_result(self, operation_id: str, deadline: Optional[Deadline] = None) -> bytes:
        """
        Poll until done and return the decoded image bytes.

        Raises:
            RemoteOperationError: The operation reported an error
            TimeoutError: Attempt budget or deadline exhausted
            ProtocolError: Completed operation carried no image
        """
        operation = await self.track(operation_id, deadline=deadline)

        if operation.status is OperationStatus.FAILED:
            raise RemoteOperationError(operation_id, operation.error)
        if operation.status is OperationStatus.TIMED_OUT:
            raise TimeoutError(
                f"Image generation timed out after {operation.attempts} attempts "
                f"({operation.attempts * self.poll_interval:.0f}s)"
            )

        return operation.payload

    def _advance(self, operation_id: str, document: dict, attempt: int) -> Operation:
        if not document.get("done"):
            return Operation(id=operation_id, attempts=attempt)

        error = document.get("error")
        if error is not None:
            logger.error(
                "Operation finished with error",
                extra={"operation_id": operation_id, "error": error}
            )
            return Operation(
                id=operation_id,
                status=OperationStatus.FAILED,
                error=error,
                attempts=attempt,
            )

        response = document.get("response")
        image_b64 = response.get("image") if isinstance(response, dict) else None
        if not image_b64:
            raise ProtocolError("yandexart", "No image data in completed operation.")
        if not isinstance(image_b64, str):
            raise ProtocolError("yandexart", "Image payload is not a base64 string.")

        try:
            # Line-wrapped (MIME) base64 is accepted; other non-alphabet input is not
            payload = base64.b64decode("".join(image_b64.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ProtocolError("yandexart", f"Image payload is not valid base64: {e}")

        return Operation(
            id=operation_id,
            status=OperationStatus.DONE,
            payload=payload,
            attempts=attempt,
        )
