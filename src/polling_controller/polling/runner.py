"""
asyncio driver for a polling controller.

The controller only returns directives. ``PollingRunner`` realizes them on
the running event loop: attempts become tasks, delays become
``asyncio.sleep`` calls, and results are queued and fed back into
``update`` one at a time.
"""

import asyncio

import structlog

from ..config import PollingConfig
from .controller import DecisionPolicy, PollingController
from .directive import Directive, DoNothing, RunAfter, RunNow, WorkFactory
from .result import Result
from .state import Stopping

logger = structlog.get_logger(__name__)


class PollingRunner:
    """
    Runs a polling controller on an asyncio event loop.

    Stopping is logical only: an attempt already running or sleeping when
    ``stop`` is called still completes, and its result is absorbed by the
    controller without scheduling further work.
    """

    def __init__(
        self,
        config: PollingConfig,
        work_factory: WorkFactory,
        decision_policy: DecisionPolicy,
    ):
        """
        Initialize the runner.

        Args:
            config: Backoff configuration
            work_factory: Zero-argument callable returning an awaitable for
                one attempt
            decision_policy: Maps an attempt's result to a decision
        """
        self.controller: PollingController[Result] = PollingController(
            config, work_factory, decision_policy
        )
        self._results: asyncio.Queue[Result] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()
        self._outstanding = 0

    @property
    def outstanding_attempts(self) -> int:
        """Get the number of attempts whose results have not been processed."""
        return self._outstanding

    def start(self) -> None:
        """
        Start polling.

        A controller left ``Stopping`` by a policy ``STOP`` decision has no
        attempt outstanding to settle it, so it is settled at ``Idle`` first
        and polling restarts with an immediate attempt.
        """
        logger.info("Starting polling runner")
        if isinstance(self.controller.state, Stopping) and not self._outstanding:
            logger.debug("Settling stopped controller before restart")
            self.controller.start()
        self._dispatch(self.controller.start())

    def stop(self) -> None:
        """Request a graceful stop."""
        logger.info(
            "Stopping polling runner", outstanding_attempts=self._outstanding
        )
        self._dispatch(self.controller.stop())

    async def run(self) -> None:
        """
        Process attempt results until no attempt is outstanding.

        Call ``start`` first. If this coroutine is cancelled, attempts still
        running are cancelled too.
        """
        try:
            while self._outstanding:
                result = await self._results.get()
                self._outstanding -= 1
                self._dispatch(self.controller.update(result))
        finally:
            for task in list(self._tasks):
                task.cancel()

        logger.info(
            "Polling runner finished",
            metrics=self.controller.metrics.get_summary(),
        )

    def _dispatch(self, directive: Directive) -> None:
        if isinstance(directive, DoNothing):
            return

        self._outstanding += 1
        task = asyncio.create_task(self._run_directive(directive))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_directive(self, directive: RunNow | RunAfter) -> None:
        if isinstance(directive, RunAfter):
            await asyncio.sleep(directive.delay.total_seconds())

        result = await directive.attempt()
        await self._results.put(result)
