"""
Centralized error handling for the combat engine.

Defines the exception taxonomy raised by the engine and a severity-based
handler used to record recoverable failures (for example a single match of a
batch that could not be set up).
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class GameException(Exception):
    """Base class for every error raised by the arena engine."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class InvalidInput(GameException, ValueError):
    """The caller supplied data the engine cannot act upon.

    Raised before any combatant state is mutated, so the caller can fix the
    request and retry.
    """


class ConfigurationError(GameException, LookupError):
    """A static rule table is missing an entry the engine needs.

    This indicates a gap in the data tables and must never be swallowed.
    """


class ErrorSeverity(Enum):
    """Enumeration of error severity levels for the engine's error handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class GameError:
    """Represents a recorded error with severity, context, and optional exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Records errors and logs them according to their severity."""

    def __init__(self, name: str = "arena.errors") -> None:
        """Initialize the ErrorHandler with a logger and empty error history."""
        self.logger = logging.getLogger(name)
        self.error_history: list[GameError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> GameError:
        """Handle an error based on its severity.

        Args:
            message (str): The error message.
            severity (ErrorSeverity): How serious the error is.
            context (Optional[dict[str, Any]]): Extra information for the log.
            exception (Optional[Exception]): The exception that caused it.

        Returns:
            GameError: The recorded error.

        """
        error = GameError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)
        return error

    def clear(self) -> None:
        """Forget every recorded error."""
        self.error_history.clear()


def validate_required(
    value: Any, name: str, context: Optional[dict[str, Any]] = None
) -> Any:
    """
    Validates that a required value is present.

    Args:
        value (Any): The value to validate.
        name (str): Human-readable parameter name for error messages.
        context (Optional[dict[str, Any]]): Additional context for the error.

    Returns:
        Any: The validated value.

    Raises:
        InvalidInput: If the value is None.

    """
    if value is None:
        raise InvalidInput(
            f"Required value '{name}' is missing",
            {**(context or {}), "param_name": name},
        )
    return value
