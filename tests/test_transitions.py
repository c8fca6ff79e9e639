"""
Tests for backoff computation and the polling state transition table.
"""

from datetime import timedelta

import pytest

from polling_controller.config import PollingConfig
from polling_controller.polling import (
    Active,
    Idle,
    PollingDecision,
    Stopping,
    WaitingToRetry,
    compute_backoff,
    transition,
)


def ms(milliseconds: float) -> timedelta:
    return timedelta(milliseconds=milliseconds)


ALL_STATES = [Idle(), Active(), WaitingToRetry(ms(40_000)), Stopping()]


class TestComputeBackoff:
    """Test backoff delay computation."""

    @pytest.mark.parametrize("state", [Idle(), Active(), Stopping()])
    def test_starts_at_minimum_delay(self, state, default_config):
        """Test that states other than WaitingToRetry start from the floor."""
        assert compute_backoff(state, default_config) == ms(10_000)

    def test_multiplies_previous_delay(self, default_config):
        """Test that the delay grows by the multiplier."""
        state = WaitingToRetry(ms(10_000))

        assert compute_backoff(state, default_config) == ms(20_000)

    def test_clamps_to_maximum_delay(self, default_config):
        """Test that the delay never exceeds the maximum."""
        state = WaitingToRetry(ms(160_000))

        assert compute_backoff(state, default_config) == ms(160_001)
        assert compute_backoff(WaitingToRetry(ms(160_001)), default_config) == ms(
            160_001
        )

    def test_fractional_multiplier(self):
        """Test a non-integer multiplier."""
        config = PollingConfig.from_milliseconds(100, 1_000, 1.5)

        assert compute_backoff(WaitingToRetry(ms(100)), config) == ms(150)

    def test_multiplier_of_one_keeps_delay(self):
        """Test that a multiplier of one gives a constant delay."""
        config = PollingConfig.from_milliseconds(500, 500, 1.0)

        assert compute_backoff(WaitingToRetry(ms(500)), config) == ms(500)

    def test_large_maximum_does_not_overflow(self):
        """Test repeated backoff with a huge maximum settles at the maximum."""
        config = PollingConfig(
            min_retry_delay=timedelta(days=1),
            max_retry_delay=timedelta(days=999_999_999),
            backoff_multiplier=2.0,
        )
        state = Active()

        for _ in range(40):
            state = transition(PollingDecision.RETRY_WITH_BACKOFF, state, config)

        assert state == WaitingToRetry(timedelta(days=999_999_999))

    def test_clamps_before_multiplying(self):
        """Test a delay at the maximum is returned without growing it."""
        config = PollingConfig(
            min_retry_delay=timedelta(0),
            max_retry_delay=timedelta.max,
            backoff_multiplier=10.0,
        )

        assert compute_backoff(WaitingToRetry(timedelta.max), config) == timedelta.max

    def test_sequence_is_monotonic_and_bounded(self, default_config):
        """Test consecutive backoffs never decrease and stay within bounds."""
        state = Active()
        previous = None

        for _ in range(20):
            delay = compute_backoff(state, default_config)
            assert default_config.min_retry_delay <= delay
            assert delay <= default_config.max_retry_delay
            if previous is not None:
                assert delay >= previous
            previous = delay
            state = WaitingToRetry(delay)


class TestTransition:
    """Test all decision and state combinations."""

    @pytest.mark.parametrize(
        "state, expected",
        [
            (Idle(), Active()),
            (Active(), Active()),
            (WaitingToRetry(ms(40_000)), Active()),
            (Stopping(), Idle()),
        ],
    )
    def test_poll_once(self, state, expected, default_config):
        """Test POLL_ONCE activates polling unless stopping."""
        assert transition(PollingDecision.POLL_ONCE, state, default_config) == expected

    @pytest.mark.parametrize(
        "state, expected",
        [
            (Idle(), Idle()),
            (Active(), Stopping()),
            (WaitingToRetry(ms(40_000)), Stopping()),
            (Stopping(), Stopping()),
        ],
    )
    def test_stop(self, state, expected, default_config):
        """Test STOP is a no-op from Idle and stops otherwise."""
        assert transition(PollingDecision.STOP, state, default_config) == expected

    @pytest.mark.parametrize(
        "state, expected",
        [
            (Idle(), WaitingToRetry(ms(10_000))),
            (Active(), WaitingToRetry(ms(10_000))),
            (WaitingToRetry(ms(40_000)), WaitingToRetry(ms(80_000))),
            (Stopping(), Idle()),
        ],
    )
    def test_retry_with_backoff(self, state, expected, default_config):
        """Test RETRY_WITH_BACKOFF computes a delay unless stopping."""
        result = transition(PollingDecision.RETRY_WITH_BACKOFF, state, default_config)

        assert result == expected

    @pytest.mark.parametrize("state", ALL_STATES)
    @pytest.mark.parametrize("decision", list(PollingDecision))
    def test_waiting_delay_always_within_bounds(self, decision, state, default_config):
        """Test every reachable WaitingToRetry delay respects the bounds."""
        result = transition(decision, state, default_config)

        if isinstance(result, WaitingToRetry):
            assert default_config.min_retry_delay <= result.delay
            assert result.delay <= default_config.max_retry_delay

    def test_stopping_never_reactivates(self, default_config):
        """Test that no decision takes Stopping back into polling."""
        for decision in PollingDecision:
            result = transition(decision, Stopping(), default_config)
            assert isinstance(result, (Idle, Stopping))
