"""
Polling states and decisions.

Exactly one state variant is active at a time. ``WaitingToRetry`` is the only
variant carrying data: the delay after which the next attempt runs.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class PollingDecision(str, Enum):
    """Decision produced by a policy for each attempt outcome."""

    POLL_ONCE = "poll_once"
    STOP = "stop"
    RETRY_WITH_BACKOFF = "retry_with_backoff"


@dataclass(frozen=True)
class Idle:
    """Not polling; no attempt scheduled."""


@dataclass(frozen=True)
class Active:
    """An attempt is in flight or about to run with no delay."""


@dataclass(frozen=True)
class WaitingToRetry:
    """Backing off; the next attempt runs after ``delay``."""

    delay: timedelta


@dataclass(frozen=True)
class Stopping:
    """Stop requested while an attempt was outstanding."""


PollingState = Idle | Active | WaitingToRetry | Stopping

IDLE = Idle()
ACTIVE = Active()
STOPPING = Stopping()


def describe_state(state: PollingState) -> str:
    """Return a short label for logging."""
    if isinstance(state, WaitingToRetry):
        return f"waiting_to_retry({state.delay.total_seconds()}s)"
    return type(state).__name__.lower()
