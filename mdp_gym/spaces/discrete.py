from __future__ import annotations

from typing import Any

import numpy as np

from ..core.constants import DISCRETE_DTYPE
from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType
from .space import Space


class Discrete(Space):
    """The finite set of integers ``{0, 1, ..., n - 1}``.

    Example:
        >>> Discrete(2).contains(1)
        True
    """

    def __init__(self, n: int, seed: SeedType = None):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValidationError(
                f"n must be an integer, got {type(n).__name__}",
                parameter_name="n",
                parameter_value=n,
            )
        if n < 0:
            raise ValidationError(
                f"n must be non-negative, got {n}",
                parameter_name="n",
                parameter_value=n,
            )
        self.n = int(n)
        super().__init__(shape=None, dtype=DISCRETE_DTYPE, seed=seed)

    def sample(self) -> int:
        if self.n == 0:
            raise ValidationError(
                "Cannot sample from an empty Discrete(0) space",
                parameter_name="n",
                parameter_value=self.n,
            )
        return int(self.np_random.integers(self.n))

    def contains(self, x: Any) -> bool:
        if isinstance(x, np.ndarray):
            # single-element integer arrays, e.g. np.array([s]) observations
            if x.size != 1 or x.ndim > 1 or not np.issubdtype(x.dtype, np.integer):
                return False
            value = int(x.reshape(-1)[0])
        elif isinstance(x, bool):
            return False
        elif isinstance(x, (int, np.integer)):
            value = int(x)
        else:
            return False
        return 0 <= value < self.n

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Discrete) and other.n == self.n

    def __repr__(self) -> str:
        return f"Discrete({self.n})"
