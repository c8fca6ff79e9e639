"""
Pytest configuration and fixtures for polling controller tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from polling_controller.config import DEFAULT_CONFIG, PollingConfig
from polling_controller.polling import PollingController, PollingDecision


@pytest.fixture
def default_config() -> PollingConfig:
    """Default polling configuration."""
    return DEFAULT_CONFIG


@pytest.fixture
def fast_config() -> PollingConfig:
    """Configuration with short delays for event loop tests."""
    return PollingConfig.from_milliseconds(5, 20, 2.0)


@pytest.fixture
def mock_work_factory() -> AsyncMock:
    """Mock work factory returning a payload."""
    return AsyncMock(return_value={"status": "pending"})


@pytest.fixture
def mock_decision_policy() -> MagicMock:
    """Mock decision policy, polling again by default."""
    return MagicMock(return_value=PollingDecision.POLL_ONCE)


@pytest.fixture
def controller(
    default_config: PollingConfig,
    mock_work_factory: AsyncMock,
    mock_decision_policy: MagicMock,
) -> PollingController:
    """Controller built from the default configuration and mocks."""
    return PollingController(default_config, mock_work_factory, mock_decision_policy)
