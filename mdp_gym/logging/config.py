"""Standard-library logging helpers for mdp_gym."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..core.constants import PACKAGE_NAME

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME_PREFIX = PACKAGE_NAME


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a stdlib logger namespaced under ``mdp_gym``.

    ``get_logger("spaces")`` and ``get_logger("mdp_gym.spaces")`` name the
    same logger; ``get_logger()`` is the package root logger.
    """
    if not name or name == LOGGER_NAME_PREFIX:
        return logging.getLogger(LOGGER_NAME_PREFIX)
    if name.startswith(f"{LOGGER_NAME_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME_PREFIX}.{name}")


def configure_development_logging(
    *, level: int | str = logging.DEBUG, format: str = DEFAULT_FORMAT
) -> Dict[str, Any]:
    """Apply a simple development logging configuration."""
    logging.basicConfig(level=level, format=format)
    return {"level": level, "format": format}
