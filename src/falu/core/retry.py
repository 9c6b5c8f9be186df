"""
Retry handling for transient transport and server failures.

Implements exponential backoff with jitter. A logical call is resent with the
same :class:`PreparedRequest`, so every attempt carries the same idempotency
key.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, FrozenSet, Optional

from .config import ClientOptions
from .errors import TransportError
from .request import PreparedRequest
from .transport import Transport, TransportResponse

__all__ = ["RetryPolicy", "send_with_retries"]

logger = logging.getLogger(__name__)

# Statuses worth resending with the same idempotency key.
DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    ``max_retries`` counts attempts in addition to the first one.
    """

    max_retries: int = 2
    base_delay: float = 0.5
    max_delay: float = 8.0
    jitter: float = 0.1
    retryable_status_codes: FrozenSet[int] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_STATUS_CODES
    )

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("'max_retries' must not be negative")
        if self.base_delay < 0 or self.max_delay < 0 or self.jitter < 0:
            raise ValueError("Retry delays must not be negative")

    @classmethod
    def from_options(cls, options: ClientOptions) -> "RetryPolicy":
        return cls(max_retries=options.retries)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_transient_status(self, status_code: int) -> bool:
        return status_code in self.retryable_status_codes

    def compute_delay(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt`` (zero based)."""
        delay = min(self.base_delay * (2 ** attempt), self.max_delay)
        return delay + random.uniform(0, self.jitter * delay)


async def send_with_retries(
    transport: Transport,
    request: PreparedRequest,
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> TransportResponse:
    """
    Send ``request`` until it gets a terminal response or the budget runs out.

    A transient status on the last attempt is returned as-is so the caller can
    inspect the error body; a transport failure on the last attempt is raised.
    Attempts never overlap, and cancellation propagates without a retry.
    """
    last_error: Optional[TransportError] = None
    for attempt in range(policy.max_attempts):
        final = attempt >= policy.max_retries
        try:
            response = await transport.send(request)
        except TransportError as exc:
            last_error = exc
            if final:
                logger.error("Final attempt %d failed: %s", attempt + 1, exc)
                raise
            logger.debug("Attempt %d failed: %s", attempt + 1, exc)
        else:
            if final or not policy.is_transient_status(response.status_code):
                return response
            logger.debug(
                "Attempt %d got transient status %d from %s",
                attempt + 1,
                response.status_code,
                request.url,
            )

        delay = policy.compute_delay(attempt)
        logger.warning(
            "Retrying %s %s in %.2fs (attempt %d of %d, idempotency key %s)",
            request.method,
            request.url,
            delay,
            attempt + 2,
            policy.max_attempts,
            request.idempotency_key,
        )
        await sleep(delay)

    raise last_error or TransportError("Retry logic failed", request=request)
