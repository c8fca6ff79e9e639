"""
Ready-made decision policies.

A decision policy maps an attempt's result to a ``PollingDecision``. These
cover the common cases; applications with richer needs supply their own
callable.
"""

from collections.abc import Callable

import structlog

from .result import Result
from .state import PollingDecision

logger = structlog.get_logger(__name__)


def backoff_on_error(result: Result) -> PollingDecision:
    """Poll again right away on success, back off on failure."""
    if result.is_ok:
        return PollingDecision.POLL_ONCE
    return PollingDecision.RETRY_WITH_BACKOFF


class StopAfterAttempts:
    """
    Give up after too many consecutive backoff retries.

    Wraps another policy and turns its ``RETRY_WITH_BACKOFF`` decision into
    ``STOP`` once ``max_attempts`` consecutive retries have been requested.
    Any other decision resets the count.
    """

    def __init__(
        self,
        policy: Callable[[Result], PollingDecision] = backoff_on_error,
        max_attempts: int = 5,
    ):
        """
        Initialize the wrapper.

        Args:
            policy: Policy whose decisions are counted
            max_attempts: Consecutive backoff retries allowed before stopping
        """
        if max_attempts < 0:
            raise ValueError(f"max_attempts must not be negative, got {max_attempts}")

        self.policy = policy
        self.max_attempts = max_attempts
        self.consecutive_retries = 0

    def __call__(self, result: Result) -> PollingDecision:
        decision = PollingDecision(self.policy(result))

        if decision is not PollingDecision.RETRY_WITH_BACKOFF:
            self.consecutive_retries = 0
            return decision

        self.consecutive_retries += 1
        if self.consecutive_retries > self.max_attempts:
            logger.warning(
                "Retry limit exceeded, stopping",
                consecutive_retries=self.consecutive_retries,
                max_attempts=self.max_attempts,
            )
            return PollingDecision.STOP

        return decision

    def reset(self) -> None:
        """Reset the consecutive retry count."""
        self.consecutive_retries = 0
