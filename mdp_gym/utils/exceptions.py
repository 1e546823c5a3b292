"""
Exception hierarchy for mdp_gym.

Every error raised by the package derives from :class:`MdpGymError`. The
concrete classes map onto the three failure families of the environment
protocol:

- precondition violations (:class:`ValidationError`): invalid actions,
  malformed spaces, inconsistent transition tables;
- protocol-order violations (:class:`StateError`): stepping a finished episode;
- unimplemented capabilities (:class:`RenderingError`): render modes an
  environment does not declare;

plus :class:`ConfigurationError` for the environment registry.

Errors are raised, never logged-and-swallowed. Callers decide on retries.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Any, Dict, Optional

__all__ = [
    "ErrorSeverity",
    "MdpGymError",
    "ValidationError",
    "StateError",
    "RenderingError",
    "ConfigurationError",
    "format_error_details",
]

_VALUE_REPR_MAX_LENGTH = 200


class ErrorSeverity(enum.IntEnum):
    """Severity levels used to classify errors for logging."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def to_logging_level(self) -> int:
        return {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[self]


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > _VALUE_REPR_MAX_LENGTH:
        text = text[: _VALUE_REPR_MAX_LENGTH - 3] + "..."
    return text


class MdpGymError(Exception):
    """Base exception for all mdp_gym errors.

    Args:
        message: Primary error description.
        context: Optional mapping with extra debugging data.
        severity: Classification used when the error is logged.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context) if context else {}
        self.severity = severity
        self.timestamp = time.time()

    def get_error_details(self) -> Dict[str, Any]:
        """Return a serializable summary of the error."""
        return {
            "exception_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.name,
            "timestamp": self.timestamp,
            "context": dict(self.context),
        }

    def log_error(self, logger: Optional[logging.Logger] = None) -> None:
        """Log the error at the level implied by its severity."""
        if logger is None:
            logger = logging.getLogger("mdp_gym.exceptions")
        logger.log(
            self.severity.to_logging_level(),
            "%s: %s",
            self.__class__.__name__,
            self.message,
        )


class ValidationError(MdpGymError, ValueError):
    """Raised when an argument violates a precondition.

    Subclasses :class:`ValueError` so generic callers can still catch it.
    """

    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        expected_format: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context=context, severity=ErrorSeverity.MEDIUM)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value
        self.expected_format = expected_format

    def get_error_details(self) -> Dict[str, Any]:
        details = super().get_error_details()
        details.update(
            {
                "parameter_name": self.parameter_name,
                "parameter_value": _short_repr(self.parameter_value),
                "expected_format": self.expected_format,
            }
        )
        return details


class StateError(MdpGymError):
    """Raised when a method is called in the wrong episode state."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        expected_state: Optional[str] = None,
        component_name: Optional[str] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.current_state = current_state
        self.expected_state = expected_state
        self.component_name = component_name

    def get_error_details(self) -> Dict[str, Any]:
        details = super().get_error_details()
        details.update(
            {
                "current_state": self.current_state,
                "expected_state": self.expected_state,
                "component_name": self.component_name,
            }
        )
        return details


class RenderingError(MdpGymError, NotImplementedError):
    """Raised when an environment is asked for a render mode it does not support."""

    def __init__(
        self,
        message: str,
        render_mode: Optional[str] = None,
        supported_modes: Optional[list] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.MEDIUM)
        self.render_mode = render_mode
        self.supported_modes = list(supported_modes or [])


class ConfigurationError(MdpGymError):
    """Raised for registry problems: duplicate ids, unknown ids, bad entry points."""

    def __init__(
        self,
        message: str,
        config_parameter: Optional[str] = None,
        parameter_value: Optional[Any] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.config_parameter = config_parameter
        self.parameter_value = parameter_value


def format_error_details(error: BaseException) -> str:
    """Render an exception as a single human-readable line."""
    if isinstance(error, MdpGymError):
        details = error.get_error_details()
        extras = ", ".join(
            f"{key}={value}"
            for key, value in details.items()
            if key not in {"exception_type", "message", "timestamp", "context"}
            and value is not None
        )
        line = f"{details['exception_type']}: {details['message']}"
        return f"{line} ({extras})" if extras else line
    return f"{error.__class__.__name__}: {error}"
