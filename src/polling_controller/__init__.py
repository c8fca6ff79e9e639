"""
Polling Controller

A reusable state machine that decides when and whether to run the next
attempt of a repeatable asynchronous operation, with exponential backoff
and graceful stopping.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, PollingConfig, Settings
from .exceptions import ConfigurationError, PollingControllerError
from .polling import (
    Err,
    Ok,
    PollingController,
    PollingDecision,
    PollingRunner,
)

__all__ = [
    "DEFAULT_CONFIG",
    "PollingConfig",
    "Settings",
    "PollingController",
    "PollingDecision",
    "PollingRunner",
    "Ok",
    "Err",
    "PollingControllerError",
    "ConfigurationError",
]
