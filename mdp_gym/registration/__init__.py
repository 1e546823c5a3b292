"""Environment registry: ``register`` ids once, ``make`` them anywhere."""

from .register import (
    ENV_ID_PATTERN,
    EnvRegistry,
    EnvSpec,
    RegistrationOptions,
    load_entry_point,
    make,
    register,
    registry,
    spec,
)

__all__ = [
    "ENV_ID_PATTERN",
    "EnvRegistry",
    "EnvSpec",
    "RegistrationOptions",
    "load_entry_point",
    "make",
    "register",
    "registry",
    "spec",
]
