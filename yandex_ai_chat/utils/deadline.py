"""Caller-supplied deadlines for every suspend point."""

import asyncio
import time
from typing import Awaitable, Callable, Optional, TypeVar

from .errors import TimeoutError

T = TypeVar('T')


class Deadline:
    """Absolute point in time after which awaits are abandoned."""

    def __init__(self, expires_at: float, clock: Callable[[], float] = time.monotonic):
        self.expires_at = expires_at
        self.clock = clock

    @classmethod
    def after(cls, seconds: float, clock: Callable[[], float] = time.monotonic) -> "Deadline":
        """Create a deadline `seconds` from now."""
        return cls(clock() + seconds, clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self.clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0


async def timeout_async(coro: Awaitable[T], seconds: float) -> T:
    """
    Run an async coroutine with a timeout.

    Args:
        coro: Coroutine to run
        seconds: Timeout in seconds

    Returns:
        Result of the coroutine

    Raises:
        TimeoutError: If timeout is exceeded
    """
    try:
        return await asyncio.wait_for(coro, timeout=seconds)
    except asyncio.TimeoutError:
        raise TimeoutError(f"Operation timed out after {seconds:.1f} seconds")


async def within(coro: Awaitable[T], deadline: Optional[Deadline]) -> T:
    """Await `coro`, cancelling it if `deadline` passes first."""
    if deadline is None:
        return await coro

    if deadline.expired:
        # Never started, so close it to avoid a "never awaited" warning
        close = getattr(coro, "close", None)
        if close is not None:
            close()
        raise TimeoutError("Deadline exceeded before the call was issued")

    return await timeout_async(coro, deadline.remaining())
