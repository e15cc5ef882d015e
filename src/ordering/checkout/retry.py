"""Explicit retry policy for payment gateway calls.

Gateway calls are wrapped in a ``GatewayCallResult`` instead of raising, so
the orchestrator decides what a failure means. Retries are only safe
because session creation carries an idempotency key.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

from ordering.gateway.port import PaymentGatewayError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

MAX_GATEWAY_ATTEMPTS = 3


@dataclass(frozen=True)
class GatewayCallResult(Generic[T]):
    ok: bool
    value: T | None = None
    error: str | None = None
    attempts: int = 0


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = MAX_GATEWAY_ATTEMPTS
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0

    def delay_before(self, attempt: int) -> float:
        """Seconds to wait before ``attempt`` (1-based); the first attempt never waits."""
        if attempt <= 1:
            return 0.0
        return self.backoff_seconds * self.backoff_multiplier ** (attempt - 2)

    def call(self, operation: Callable[[], T], sleep: Callable[[float], None] = time.sleep) -> GatewayCallResult[T]:
        error = None
        for attempt in range(1, self.max_attempts + 1):
            delay = self.delay_before(attempt)
            if delay:
                sleep(delay)
            try:
                return GatewayCallResult(ok=True, value=operation(), attempts=attempt)
            except PaymentGatewayError as exc:
                error = str(exc)
                logger.warning(
                    "gateway_call_failed",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=error,
                )
        return GatewayCallResult(ok=False, error=error, attempts=self.max_attempts)


# Payment verification on the confirmation page is attempted exactly once.
SINGLE_ATTEMPT = RetryPolicy(max_attempts=1)

_current_policy: RetryPolicy | None = None


def get_retry_policy() -> RetryPolicy:
    """Policy for opening payment sessions at checkout."""
    global _current_policy
    if _current_policy is None:
        _current_policy = RetryPolicy()
    return _current_policy


def set_retry_policy(policy: RetryPolicy) -> None:
    global _current_policy
    _current_policy = policy


def reset_retry_policy() -> None:
    global _current_policy
    _current_policy = None
