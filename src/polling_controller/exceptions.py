"""
Custom exceptions for the polling controller.

The state machine itself is total and never raises; these exceptions cover
the configuration layer that sits around it.
"""

from typing import Any


class PollingControllerError(Exception):
    """Base exception for polling controller errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code or "POLLING_CONTROLLER_ERROR"
        self.context = context or {}


class ConfigurationError(PollingControllerError):
    """Exception for configuration related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "CONFIGURATION_ERROR", context)
