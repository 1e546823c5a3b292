"""Utility helpers shared by spaces, environments and the registry."""

from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    MdpGymError,
    RenderingError,
    StateError,
    ValidationError,
    format_error_details,
)
from .seeding import derive_seeds, hash_seed, np_random, validate_seed

__all__ = [
    "ConfigurationError",
    "ErrorSeverity",
    "MdpGymError",
    "RenderingError",
    "StateError",
    "ValidationError",
    "format_error_details",
    "derive_seeds",
    "hash_seed",
    "np_random",
    "validate_seed",
]
