"""Abstract base class for action and observation spaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple, cast

import numpy as np

from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType, np_random


class Space(ABC):
    """Domain of legal values for actions or observations.

    Each space owns a random generator, seeded lazily from entropy the first
    time it is needed unless :meth:`seed` was called before.

    Leaf spaces must declare a dtype. Composite spaces (``Dict``) set
    ``is_composite = True`` and carry no shape or dtype of their own.
    """

    is_composite = False

    def __init__(
        self,
        shape: Optional[Tuple[int, ...]] = None,
        dtype: Optional[Any] = None,
        seed: SeedType = None,
    ):
        if dtype is None and not self.is_composite:
            raise ValidationError(
                f"{type(self).__name__} requires an explicit dtype",
                parameter_name="dtype",
                parameter_value=dtype,
            )
        if shape is not None:
            shape = tuple(int(dim) for dim in shape)
            if any(dim < 0 for dim in shape):
                raise ValidationError(
                    f"shape must contain non-negative integers, got {shape}",
                    parameter_name="shape",
                    parameter_value=shape,
                )
        self._shape = shape
        self.dtype = None if dtype is None else np.dtype(dtype)
        self._np_random: Optional[np.random.Generator] = None
        if seed is not None:
            self.seed(seed)

    @property
    def shape(self) -> Optional[Tuple[int, ...]]:
        return self._shape

    @property
    def np_random(self) -> np.random.Generator:
        """Generator used by :meth:`sample`; created from entropy on first access."""
        if self._np_random is None:
            self.seed()
        return cast(np.random.Generator, self._np_random)

    def seed(self, seed: SeedType = None) -> List[int]:
        """Reseed the space's generator.

        Returns:
            The list of underlying seeds used.
        """
        self._np_random, seed_used = np_random(seed)
        return [seed_used]

    @abstractmethod
    def sample(self) -> Any:
        """Draw a random element of the space."""

    @abstractmethod
    def contains(self, x: Any) -> bool:
        """Return True when ``x`` is a member of the space."""

    def __contains__(self, x: Any) -> bool:
        return self.contains(x)

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Structural equality."""

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = None  # type: ignore[assignment]

    @abstractmethod
    def __repr__(self) -> str:
        """Human-readable descriptor."""
