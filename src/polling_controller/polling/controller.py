"""
Polling controller for repeatable asynchronous operations.

After each attempt the controller decides whether to run the next one and
how long to wait before it. It performs no I/O and schedules nothing
itself: every operation returns a directive that the caller realizes on its
own event loop, feeding each attempt's result back through ``update``.
"""

from collections.abc import Callable
from typing import Any, Generic

import structlog

from ..config import PollingConfig
from .directive import (
    DO_NOTHING,
    Attempt,
    Directive,
    Msg,
    ResultWrapper,
    RunAfter,
    RunNow,
    WorkFactory,
    derive_directive,
)
from .metrics import PollingMetrics
from .result import Result
from .state import (
    IDLE,
    Active,
    PollingDecision,
    PollingState,
    Stopping,
    WaitingToRetry,
    describe_state,
)
from .transitions import transition

logger = structlog.get_logger(__name__)

DecisionPolicy = Callable[[Result], PollingDecision]


def _identity(result: Result) -> Any:
    return result


class PollingController(Generic[Msg]):
    """
    State machine driving a polling loop.

    ``start``, ``stop`` and ``update`` must be called serially by the owning
    event loop; the controller performs no locking. It cannot tell attempts
    apart, so a result from an attempt started before a second ``start`` is
    still processed like any other.
    """

    def __init__(
        self,
        config: PollingConfig,
        work_factory: WorkFactory,
        decision_policy: DecisionPolicy,
        result_wrapper: ResultWrapper = _identity,
    ):
        """
        Initialize the polling controller in the ``Idle`` state.

        Args:
            config: Backoff configuration, usually ``DEFAULT_CONFIG``
            work_factory: Zero-argument callable returning an awaitable for
                one attempt
            decision_policy: Maps an attempt's result to a decision
            result_wrapper: Converts a result into the caller's message type
        """
        self._config = config
        self._decision_policy = decision_policy
        self._attempt: Attempt[Msg] = Attempt(work_factory, result_wrapper)
        self._state: PollingState = IDLE
        self.metrics = PollingMetrics()

    @property
    def config(self) -> PollingConfig:
        """Get the backoff configuration."""
        return self._config

    @property
    def state(self) -> PollingState:
        """Get the current polling state."""
        return self._state

    @property
    def is_polling(self) -> bool:
        """Check if an attempt is running or scheduled."""
        return isinstance(self._state, (Active, WaitingToRetry))

    def start(self) -> Directive:
        """
        Start polling with an immediate attempt.

        Calling this while already polling discards any pending backoff.

        Returns:
            Directive to run an attempt now, or nothing when the controller
            was stopping
        """
        self.metrics.starts += 1
        return self._apply(PollingDecision.POLL_ONCE, "start")

    def stop(self) -> Directive:
        """
        Request a graceful stop.

        When an attempt is outstanding the controller moves to ``Stopping``
        and settles at ``Idle`` once that attempt's result arrives.

        Returns:
            Always a directive to do nothing
        """
        self.metrics.stops += 1
        return self._apply(PollingDecision.STOP, "stop")

    def update(self, result: Result) -> Directive:
        """
        Feed an attempt's result into the controller.

        Exceptions raised by the decision policy propagate to the caller.

        Args:
            result: Outcome of the most recent attempt

        Returns:
            Directive for the next attempt
        """
        decision = PollingDecision(self._decision_policy(result))
        self.metrics.results_processed += 1

        if isinstance(self._state, Stopping):
            # Any result while stopping settles at Idle, whatever the decision
            self.metrics.stale_results += 1
            self._state = IDLE
            self.metrics.record_directive(DO_NOTHING)
            logger.info(
                "Absorbing attempt result after stop request",
                decision=decision.value,
                new_state=describe_state(self._state),
            )
            return DO_NOTHING

        return self._apply(decision, "update")

    def _apply(self, decision: PollingDecision, operation: str) -> Directive:
        previous = self._state
        self._state = transition(decision, previous, self._config)
        directive = derive_directive(self._state, self._attempt)
        self.metrics.record_directive(directive)

        logger.debug(
            "Polling state transition",
            operation=operation,
            decision=decision.value,
            previous_state=describe_state(previous),
            new_state=describe_state(self._state),
            delay_seconds=(
                directive.delay.total_seconds()
                if isinstance(directive, (RunNow, RunAfter))
                else None
            ),
        )

        return directive
