"""
Logging for mdp_gym.

Library modules log through the standard library (``logging.getLogger(__name__)``)
and never configure handlers themselves. Applications pick a backend:

- :func:`configure_development_logging` for plain ``logging.basicConfig`` output
- :func:`setup_logging` to send the ``mdp_gym`` loggers to loguru sinks, undone
  by :func:`teardown_logging`
"""

from .config import (
    DEFAULT_FORMAT,
    LOGGER_NAME_PREFIX,
    configure_development_logging,
    get_logger,
)
from .loguru_bootstrap import (
    DEFAULT_LOGURU_FORMAT,
    InterceptHandler,
    setup_logging,
    teardown_logging,
)

__all__ = [
    "DEFAULT_FORMAT",
    "DEFAULT_LOGURU_FORMAT",
    "LOGGER_NAME_PREFIX",
    "InterceptHandler",
    "configure_development_logging",
    "get_logger",
    "setup_logging",
    "teardown_logging",
]
