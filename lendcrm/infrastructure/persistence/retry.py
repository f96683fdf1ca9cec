"""Linear-backoff retry policy for backend calls.

Attempt n that fails with a retryable error waits retry_delay_ms * n
before attempt n + 1 (no jitter, no cap). The last failure is re-raised
once max_retries attempts are used, and permanent failures are re-raised
immediately unless retry_all_errors is set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from lendcrm.core.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MS
from lendcrm.infrastructure.exceptions import is_transient_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts, how long between them, and which failures qualify."""

    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    retry_all_errors: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-based)."""
        return self.retry_delay_ms * attempt / 1000

    def should_retry(self, error: BaseException) -> bool:
        return self.retry_all_errors or is_transient_error(error)

    async def run[R](
        self,
        label: str,
        call: Callable[[], Awaitable[R]],
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> R:
        """Run call until it succeeds, fails permanently, or attempts run out."""
        for attempt in range(1, self.max_retries + 1):
            try:
                return await call()
            except Exception as exc:
                if not self.should_retry(exc):
                    raise
                if attempt == self.max_retries:
                    logger.error(
                        "%s failed after %d attempts: %s", label, self.max_retries, exc
                    )
                    raise
                delay = self.delay_for(attempt)
                logger.warning(
                    "%s attempt %d/%d failed (%s); retrying in %.2fs",
                    label,
                    attempt,
                    self.max_retries,
                    exc,
                    delay,
                )
                await sleep(delay)
        raise RuntimeError(f"{label}: retry loop exited without a result")
