"""
Backoff delay computation.
"""

from datetime import timedelta

from ..config import PollingConfig
from .state import PollingState, WaitingToRetry


def compute_backoff(state: PollingState, config: PollingConfig) -> timedelta:
    """
    Compute the delay for the next retry.

    A controller already backing off grows its current delay by the
    configured multiplier; any other state starts again from the minimum
    delay. The result never exceeds ``config.max_retry_delay``.

    Args:
        state: Current polling state
        config: Controller configuration

    Returns:
        Delay before the next attempt
    """
    if not isinstance(state, WaitingToRetry):
        return min(config.min_retry_delay, config.max_retry_delay)

    # Clamp before multiplying; large delays would overflow timedelta
    if state.delay >= config.max_retry_delay / config.backoff_multiplier:
        return config.max_retry_delay

    return min(state.delay * config.backoff_multiplier, config.max_retry_delay)
