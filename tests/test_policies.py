"""
Tests for the ready-made decision policies.
"""

from unittest.mock import MagicMock

import pytest

from polling_controller.polling import (
    Err,
    Ok,
    PollingDecision,
    StopAfterAttempts,
    backoff_on_error,
)


def test_backoff_on_error_success_polls_again():
    """Test a successful result polls again immediately."""
    assert backoff_on_error(Ok("data")) is PollingDecision.POLL_ONCE


def test_backoff_on_error_failure_backs_off():
    """Test a failed result backs off."""
    assert backoff_on_error(Err("timeout")) is PollingDecision.RETRY_WITH_BACKOFF


class TestStopAfterAttempts:
    """Test the retry limit wrapper."""

    def test_stops_after_limit(self):
        """Test STOP is returned once the retry limit is exceeded."""
        policy = StopAfterAttempts(max_attempts=2)

        decisions = [policy(Err("timeout")) for _ in range(3)]

        assert decisions == [
            PollingDecision.RETRY_WITH_BACKOFF,
            PollingDecision.RETRY_WITH_BACKOFF,
            PollingDecision.STOP,
        ]

    def test_success_resets_count(self):
        """Test a non-backoff decision resets the consecutive count."""
        policy = StopAfterAttempts(max_attempts=1)

        assert policy(Err("timeout")) is PollingDecision.RETRY_WITH_BACKOFF
        assert policy(Ok("data")) is PollingDecision.POLL_ONCE
        assert policy.consecutive_retries == 0
        assert policy(Err("timeout")) is PollingDecision.RETRY_WITH_BACKOFF

    def test_wraps_custom_policy(self):
        """Test decisions from the wrapped policy pass through."""
        inner = MagicMock(return_value=PollingDecision.STOP)
        policy = StopAfterAttempts(inner, max_attempts=3)
        result = Ok({"done": True})

        assert policy(result) is PollingDecision.STOP
        inner.assert_called_once_with(result)

    def test_zero_attempts_stops_immediately(self):
        """Test a limit of zero stops on the first backoff."""
        policy = StopAfterAttempts(max_attempts=0)

        assert policy(Err("timeout")) is PollingDecision.STOP

    def test_reset(self):
        """Test the count can be reset explicitly."""
        policy = StopAfterAttempts(max_attempts=1)
        policy(Err("timeout"))

        policy.reset()

        assert policy.consecutive_retries == 0

    def test_negative_limit_rejected(self):
        """Test a negative limit raises ValueError."""
        with pytest.raises(ValueError, match="max_attempts"):
            StopAfterAttempts(max_attempts=-1)
