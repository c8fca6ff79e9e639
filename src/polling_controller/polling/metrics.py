"""
Metrics collection for a polling controller.

Counters are updated by the controller after every operation and can be
exported as a plain dictionary for monitoring.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from .directive import Directive, RunAfter, RunNow


@dataclass
class PollingMetrics:
    """Counters describing a controller's activity."""

    starts: int = 0
    stops: int = 0
    results_processed: int = 0
    immediate_attempts: int = 0
    delayed_attempts: int = 0
    backoff_resets: int = 0
    stale_results: int = 0
    current_delay: timedelta | None = None
    last_transition_time: datetime | None = None

    @property
    def attempts_scheduled(self) -> int:
        """Get the total number of attempts handed to the caller."""
        return self.immediate_attempts + self.delayed_attempts

    def record_directive(self, directive: Directive) -> None:
        """Update counters for a directive returned to the caller."""
        self.last_transition_time = datetime.now()

        if isinstance(directive, RunNow):
            self.immediate_attempts += 1
            if self.current_delay is not None:
                self.backoff_resets += 1
            self.current_delay = None
        elif isinstance(directive, RunAfter):
            self.delayed_attempts += 1
            self.current_delay = directive.delay
        else:
            self.current_delay = None

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the metrics for monitoring."""
        return {
            "starts": self.starts,
            "stops": self.stops,
            "results_processed": self.results_processed,
            "attempts_scheduled": self.attempts_scheduled,
            "immediate_attempts": self.immediate_attempts,
            "delayed_attempts": self.delayed_attempts,
            "backoff_resets": self.backoff_resets,
            "stale_results": self.stale_results,
            "current_delay_seconds": (
                self.current_delay.total_seconds()
                if self.current_delay is not None
                else None
            ),
            "last_transition": (
                self.last_transition_time.isoformat()
                if self.last_transition_time
                else None
            ),
        }
