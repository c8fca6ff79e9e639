"""
Polling state transition table.

==================  ========  ========  ==============  ========
Decision            Idle      Active    WaitingToRetry  Stopping
==================  ========  ========  ==============  ========
POLL_ONCE           Active    Active    Active          Idle
STOP                Idle      Stopping  Stopping        Stopping
RETRY_WITH_BACKOFF  Waiting   Waiting   Waiting         Idle
==================  ========  ========  ==============  ========

``Waiting`` is ``WaitingToRetry`` carrying the delay from ``compute_backoff``.

Once stopping, any result other than a repeated stop settles the controller
at ``Idle`` so a late retry decision cannot reactivate polling.
"""

from ..config import PollingConfig
from .backoff import compute_backoff
from .state import (
    ACTIVE,
    IDLE,
    STOPPING,
    Idle,
    PollingDecision,
    PollingState,
    Stopping,
    WaitingToRetry,
)


def transition(
    decision: PollingDecision, state: PollingState, config: PollingConfig
) -> PollingState:
    """
    Apply a decision to the current state.

    Args:
        decision: Decision to apply
        state: Current polling state
        config: Controller configuration, used for backoff delays

    Returns:
        The new polling state
    """
    if decision is PollingDecision.STOP:
        if isinstance(state, Idle):
            return IDLE
        return STOPPING

    if isinstance(state, Stopping):
        return IDLE

    if decision is PollingDecision.POLL_ONCE:
        return ACTIVE

    return WaitingToRetry(compute_backoff(state, config))
