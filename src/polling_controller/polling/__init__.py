"""
Polling state machine.

This package contains the controller, its states and transition table,
backoff computation, scheduling directives, and an optional asyncio runner.
"""

from .backoff import compute_backoff
from .controller import PollingController
from .directive import Attempt, DoNothing, RunAfter, RunNow, derive_directive
from .metrics import PollingMetrics
from .policies import StopAfterAttempts, backoff_on_error
from .result import Err, Ok, Result
from .runner import PollingRunner
from .state import (
    Active,
    Idle,
    PollingDecision,
    PollingState,
    Stopping,
    WaitingToRetry,
)
from .transitions import transition

__all__ = [
    "Active",
    "Attempt",
    "DoNothing",
    "Err",
    "Idle",
    "Ok",
    "PollingController",
    "PollingDecision",
    "PollingMetrics",
    "PollingRunner",
    "PollingState",
    "Result",
    "RunAfter",
    "RunNow",
    "StopAfterAttempts",
    "Stopping",
    "WaitingToRetry",
    "backoff_on_error",
    "compute_backoff",
    "derive_directive",
    "transition",
]
