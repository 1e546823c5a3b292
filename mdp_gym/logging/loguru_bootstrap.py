"""
Route the ``mdp_gym`` logger hierarchy into loguru.

Only records from ``mdp_gym.*`` loggers are bridged. The intercept handler is
attached to the package root logger, which stops propagating while the bridge
is active, so the host application's root logger and its own loguru sinks are
left alone. Sinks added here only accept bridged package records. loguru's
pre-installed stderr sink is removed on first setup so records are not
printed twice.

Example:
    >>> sink_ids = setup_logging(level="DEBUG", console=False, file_path="run.log")
    >>> env = make("Corridor-v0", seed=0)
    >>> teardown_logging()
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger as _logger

from ..core.constants import PACKAGE_NAME

LOGGER_NAME_EXTRA = "logger_name"
DEFAULT_LOGURU_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)

LOGURU_DEFAULT_SINK_ID = 0

_sink_ids: List[int] = []
_bridge: Dict[str, Any] = {}


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, tagged with the originating logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _logger.bind(**{LOGGER_NAME_EXTRA: record.name}).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _is_package_record(record: Dict[str, Any]) -> bool:
    name = record["extra"].get(LOGGER_NAME_EXTRA, "")
    return name == PACKAGE_NAME or name.startswith(f"{PACKAGE_NAME}.")


def setup_logging(
    *,
    level: str = "INFO",
    console: bool = True,
    file_path: Optional[str | Path] = None,
    rotation: Optional[str | int] = None,
    retention: Optional[str | int] = None,
    serialize: bool = False,
    format: str = DEFAULT_LOGURU_FORMAT,
) -> List[int]:
    """Send ``mdp_gym`` logs to loguru sinks.

    Calling it again replaces the sinks and bridge from the previous call.

    Args:
        level: Minimum level for the sinks and the package logger.
        console: Add a stderr sink.
        file_path: Optional log file; ``rotation`` and ``retention`` are passed
            to loguru for it.
        serialize: Emit JSON lines instead of formatted text.
        format: loguru format string; ``{extra[logger_name]}`` is the stdlib
            logger name.

    Returns:
        The loguru sink ids that were added.
    """
    teardown_logging()
    try:
        _logger.remove(LOGURU_DEFAULT_SINK_ID)
    except ValueError:
        pass  # already removed
    lvl = level.upper()
    sink_options: Dict[str, Any] = dict(
        level=lvl,
        format=format,
        filter=_is_package_record,
        backtrace=False,
        diagnose=False,
        serialize=serialize,
    )
    if console:
        _sink_ids.append(_logger.add(sys.stderr, **sink_options))
    if file_path:
        _sink_ids.append(
            _logger.add(
                str(file_path), rotation=rotation, retention=retention, **sink_options
            )
        )
    _bridge_package_loggers(lvl)
    return list(_sink_ids)


def _bridge_package_loggers(level: str) -> None:
    package_logger = logging.getLogger(PACKAGE_NAME)
    handler = InterceptHandler()
    _bridge.update(
        handler=handler,
        level=package_logger.level,
        propagate=package_logger.propagate,
    )
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level, logging.INFO))
    package_logger.propagate = False


def teardown_logging() -> None:
    """Remove the sinks added by :func:`setup_logging` and undo the bridge."""
    while _sink_ids:
        sink_id = _sink_ids.pop()
        try:
            _logger.remove(sink_id)
        except ValueError:
            # already removed through loguru directly
            continue
    if _bridge:
        package_logger = logging.getLogger(PACKAGE_NAME)
        package_logger.removeHandler(_bridge["handler"])
        package_logger.setLevel(_bridge["level"])
        package_logger.propagate = _bridge["propagate"]
        _bridge.clear()
