"""
Seeding utilities for reproducible environments and spaces.

Every environment and every space owns an independent ``numpy.random.Generator``
built by :func:`np_random`. A caller-supplied seed may be an integer, a string
(hashed deterministically) or ``None`` (drawn from system entropy). The seed
actually used is always returned alongside the generator so that a run can be
reproduced by passing it back.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, List, Optional, Tuple, Union

import numpy
import gymnasium.utils.seeding

from ..core.constants import (
    SEED_HASH_ALGORITHM,
    SEED_MAX_VALUE,
    SEED_MIN_VALUE,
)
from .exceptions import ValidationError

_logger = logging.getLogger(__name__)
_DEFAULT_ENCODING = "utf-8"

SeedType = Union[int, numpy.integer, str, None]

__all__ = [
    "SeedType",
    "validate_seed",
    "hash_seed",
    "get_random_seed",
    "np_random",
    "derive_seeds",
]


def validate_seed(seed: Any) -> Optional[Union[int, str]]:
    """Validate a caller-supplied seed without normalizing it.

    Args:
        seed: ``None`` (entropy), a non-negative integer or numpy integer up to
            ``SEED_MAX_VALUE``, or a string.

    Returns:
        The seed as a native ``int`` or ``str``, or ``None``.

    Raises:
        ValidationError: For negative or out-of-range integers, booleans,
            floats and any other type.

    Examples:
        >>> validate_seed(42)
        42
        >>> validate_seed(numpy.int64(7))
        7
        >>> validate_seed("experiment-a")
        'experiment-a'
    """
    if seed is None or isinstance(seed, str):
        return seed

    # bool is an int subclass; reject it explicitly
    if isinstance(seed, bool) or not isinstance(seed, (int, numpy.integer)):
        raise ValidationError(
            f"Seed must be an integer, a string or None, got {type(seed).__name__}",
            parameter_name="seed",
            parameter_value=seed,
            expected_format="int | str | None",
        )

    value = int(seed)
    if value < SEED_MIN_VALUE or value > SEED_MAX_VALUE:
        raise ValidationError(
            f"Seed {value} is outside the valid range "
            f"[{SEED_MIN_VALUE}, {SEED_MAX_VALUE}]",
            parameter_name="seed",
            parameter_value=value,
            expected_format=f"integer in [{SEED_MIN_VALUE}, {SEED_MAX_VALUE}]",
        )
    return value


def hash_seed(
    seed_string: str,
    hash_algorithm: str = SEED_HASH_ALGORITHM,
    encoding: str = _DEFAULT_ENCODING,
) -> int:
    """Derive a deterministic integer seed from a string identifier.

    The same string always maps to the same seed, which lets experiments be
    seeded from human-readable names.
    """
    if not isinstance(seed_string, str) or not seed_string:
        raise ValidationError(
            "seed_string must be a non-empty string",
            parameter_name="seed_string",
            parameter_value=seed_string,
        )
    try:
        digest = hashlib.new(hash_algorithm, seed_string.encode(encoding)).digest()
    except ValueError as exc:
        raise ValidationError(
            f"Unsupported hash algorithm: {hash_algorithm}",
            parameter_name="hash_algorithm",
            parameter_value=hash_algorithm,
        ) from exc
    span = SEED_MAX_VALUE - SEED_MIN_VALUE + 1
    return SEED_MIN_VALUE + int.from_bytes(digest[:8], "big") % span


def get_random_seed() -> int:
    """Draw a fresh seed from system entropy, inside the valid seed range."""
    state = numpy.random.SeedSequence().generate_state(1, dtype=numpy.uint32)
    span = SEED_MAX_VALUE - SEED_MIN_VALUE + 1
    return SEED_MIN_VALUE + int(state[0]) % span


def np_random(seed: SeedType = None) -> Tuple[numpy.random.Generator, int]:
    """Create a seeded random generator and report the integer seed used.

    Args:
        seed: Integer, string or ``None``. Strings are hashed with
            :func:`hash_seed`; ``None`` draws a seed from system entropy.

    Returns:
        ``(generator, seed_used)``. Passing ``seed_used`` back reproduces the
        same stream.
    """
    seed = validate_seed(seed)
    if seed is None:
        seed = get_random_seed()
    elif isinstance(seed, str):
        seed = hash_seed(seed)

    rng, _ = gymnasium.utils.seeding.np_random(int(seed))
    _logger.debug("Created seeded RNG with seed: %s", seed)
    return rng, int(seed)


def derive_seeds(rng: numpy.random.Generator, count: int) -> List[int]:
    """Draw ``count`` independent child seeds from an existing generator."""
    if count < 0:
        raise ValidationError(
            f"count must be non-negative, got {count}",
            parameter_name="count",
            parameter_value=count,
        )
    draws = rng.integers(SEED_MIN_VALUE, SEED_MAX_VALUE, size=count, endpoint=True)
    return [int(value) for value in draws]
