"""
Scheduling directives.

A directive tells the caller what to do after each controller operation:
run an attempt now, run it after a delay, or do nothing. Directives are
plain values; the controller never schedules work itself.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, TypeVar

import structlog

from .result import Err, Ok, Result
from .state import Active, PollingState, WaitingToRetry

logger = structlog.get_logger(__name__)

Msg = TypeVar("Msg")

WorkFactory = Callable[[], Awaitable[Any]]
ResultWrapper = Callable[[Result], Any]


class Attempt(Generic[Msg]):
    """
    One unit of asynchronous work, ready to be scheduled.

    Awaiting an attempt invokes the work factory exactly once, turns the
    outcome into a ``Result`` and hands it to the result wrapper. The
    wrapped message is returned so the caller can route it back into
    ``PollingController.update``.
    """

    def __init__(
        self,
        work_factory: WorkFactory,
        result_wrapper: Callable[[Result], Msg],
    ):
        self._work_factory = work_factory
        self._result_wrapper = result_wrapper

    async def __call__(self) -> Msg:
        return self._result_wrapper(await self.run())

    async def run(self) -> Result:
        """Run the work factory and capture its outcome."""
        try:
            value = await self._work_factory()
        except Exception as e:
            logger.debug("Polling attempt failed", error=str(e))
            return Err(e)

        if isinstance(value, (Ok, Err)):
            return value
        return Ok(value)


@dataclass(frozen=True)
class RunNow:
    """Run the attempt immediately."""

    attempt: Attempt[Any] = field(compare=False)

    @property
    def delay(self) -> timedelta:
        return timedelta(0)


@dataclass(frozen=True)
class RunAfter:
    """Run the attempt once ``delay`` has elapsed."""

    delay: timedelta
    attempt: Attempt[Any] = field(compare=False)


@dataclass(frozen=True)
class DoNothing:
    """Nothing to schedule."""


Directive = RunNow | RunAfter | DoNothing

DO_NOTHING = DoNothing()


def derive_directive(state: PollingState, attempt: Attempt[Any]) -> Directive:
    """
    Derive the scheduling directive for a state.

    Args:
        state: State the controller has just entered
        attempt: Attempt to schedule when the state calls for one

    Returns:
        ``RunNow`` for ``Active``, ``RunAfter`` for ``WaitingToRetry`` and
        ``DoNothing`` for ``Idle`` or ``Stopping``
    """
    if isinstance(state, Active):
        return RunNow(attempt)
    if isinstance(state, WaitingToRetry):
        return RunAfter(state.delay, attempt)
    return DO_NOTHING
