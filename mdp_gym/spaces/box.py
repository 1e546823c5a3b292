from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple, Union, cast

import numpy as np

from ..core.constants import BOUNDED_MANNERS, DEFAULT_BOX_DTYPE
from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType
from .space import Space

BoundType = Union[float, int, np.number, Sequence[float], np.ndarray]


def _is_scalar(value: Any) -> bool:
    return np.ndim(value) == 0


def _resolve_shape(
    low: BoundType, high: BoundType, shape: Optional[Sequence[int]]
) -> Tuple[int, ...]:
    if shape is not None:
        shape = tuple(int(dim) for dim in shape)
        if not _is_scalar(low) and np.shape(low) != shape:
            raise ValidationError(
                f"low.shape {np.shape(low)} doesn't match provided shape {shape}",
                parameter_name="low",
                parameter_value=np.shape(low),
                expected_format=str(shape),
            )
        if not _is_scalar(high) and np.shape(high) != shape:
            raise ValidationError(
                f"high.shape {np.shape(high)} doesn't match provided shape {shape}",
                parameter_name="high",
                parameter_value=np.shape(high),
                expected_format=str(shape),
            )
        return shape
    if not _is_scalar(low):
        shape = tuple(np.shape(low))
        if not _is_scalar(high) and np.shape(high) != shape:
            raise ValidationError(
                f"high.shape {np.shape(high)} doesn't match low.shape {shape}",
                parameter_name="high",
                parameter_value=np.shape(high),
                expected_format=str(shape),
            )
        return shape
    if not _is_scalar(high):
        return tuple(np.shape(high))
    raise ValidationError(
        "shape must be provided or inferred from the shapes of low or high",
        parameter_name="shape",
        parameter_value=None,
    )


class Box(Space):
    """A possibly unbounded box in R^n: the Cartesian product of n closed intervals.

    Each interval has the form ``[a, b]``, ``(-inf, b]``, ``[a, inf)`` or
    ``(-inf, inf)``. Infinite bounds are kept as ``numpy.inf``.

    Two common cases:

    - Identical bound for each dimension::

        >>> Box(low=-1.0, high=2.0, shape=(3, 4), dtype=np.float32)
        Box(-1.0, 2.0, (3, 4), float32)

    - Independent bound for each dimension::

        >>> Box(low=np.array([-1.0, -2.0]), high=np.array([2.0, 4.0]))
        Box([-1. -2.], [2. 4.], (2,), float32)
    """

    def __init__(
        self,
        low: BoundType,
        high: BoundType,
        shape: Optional[Sequence[int]] = None,
        dtype: Any = DEFAULT_BOX_DTYPE,
        seed: SeedType = None,
    ):
        if dtype is None:
            raise ValidationError(
                "Box requires an explicit dtype", parameter_name="dtype"
            )
        resolved = _resolve_shape(low, high, shape)
        super().__init__(shape=resolved, dtype=dtype, seed=seed)

        low_f = np.broadcast_to(np.asarray(low, dtype=np.float64), resolved)
        high_f = np.broadcast_to(np.asarray(high, dtype=np.float64), resolved)
        if np.any(np.isnan(low_f)) or np.any(np.isnan(high_f)):
            raise ValidationError(
                "Box bounds must not contain NaN", parameter_name="low/high"
            )
        if np.any(low_f > high_f):
            raise ValidationError(
                "Box low must be <= high in every dimension",
                parameter_name="low/high",
                parameter_value=(low, high),
            )
        if self.dtype.kind in "iu" and not (
            np.all(np.isfinite(low_f)) and np.all(np.isfinite(high_f))
        ):
            raise ValidationError(
                f"Integer Box of dtype {self.dtype} cannot have infinite bounds",
                parameter_name="dtype",
                parameter_value=str(self.dtype),
            )

        self.low = low_f.astype(self.dtype)
        self.high = high_f.astype(self.dtype)
        self.bounded_below = -np.inf < low_f
        self.bounded_above = np.inf > high_f

    @property
    def shape(self) -> Tuple[int, ...]:
        return cast(Tuple[int, ...], self._shape)

    def is_bounded(self, manner: str = "both") -> bool:
        """Check boundedness over every dimension.

        Args:
            manner: ``"below"``, ``"above"`` or ``"both"``.
        """
        below = bool(np.all(self.bounded_below))
        above = bool(np.all(self.bounded_above))
        if manner == "both":
            return below and above
        if manner == "below":
            return below
        if manner == "above":
            return above
        raise ValidationError(
            f"manner is not in {set(BOUNDED_MANNERS)}, got {manner!r}",
            parameter_name="manner",
            parameter_value=manner,
            expected_format=" | ".join(BOUNDED_MANNERS),
        )

    def sample(self) -> np.ndarray:
        """Draw a random point from the box.

        Per dimension, the distribution depends on the bounds:

        * ``[a, b]``: uniform
        * ``[a, inf)``: shifted exponential
        * ``(-inf, b]``: shifted negative exponential
        * ``(-inf, inf)``: standard normal
        """
        rng = self.np_random
        is_int = self.dtype.kind in "iu"
        low = self.low.astype(np.float64)
        high = self.high.astype(np.float64) + (1.0 if is_int else 0.0)

        sample = np.empty(self.shape, dtype=np.float64)
        unbounded = ~self.bounded_below & ~self.bounded_above
        upp_bounded = ~self.bounded_below & self.bounded_above
        low_bounded = self.bounded_below & ~self.bounded_above
        bounded = self.bounded_below & self.bounded_above

        sample[unbounded] = rng.normal(size=int(unbounded.sum()))
        sample[low_bounded] = (
            rng.exponential(size=int(low_bounded.sum())) + low[low_bounded]
        )
        sample[upp_bounded] = (
            -rng.exponential(size=int(upp_bounded.sum())) + high[upp_bounded]
        )
        sample[bounded] = rng.uniform(low=low[bounded], high=high[bounded])

        if is_int:
            sample = np.minimum(np.floor(sample), self.high)
        return sample.astype(self.dtype)

    def contains(self, x: Any) -> bool:
        if not isinstance(x, np.ndarray):
            try:
                x = np.asarray(x)
            except (TypeError, ValueError):
                return False
        if x.dtype.kind not in "biuf":
            return False
        if not np.can_cast(x.dtype, self.dtype, casting="same_kind"):
            return False
        if x.shape != self.shape:
            return False
        return bool(np.all(x >= self.low) and np.all(x <= self.high))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Box)
            and self.shape == other.shape
            and self.dtype == other.dtype
            and np.array_equal(self.low, other.low)
            and np.array_equal(self.high, other.high)
        )

    def _bound_repr(self, bound: np.ndarray) -> str:
        if bound.size and np.all(bound == bound.flat[0]):
            return str(bound.flat[0])
        return str(bound)

    def __repr__(self) -> str:
        return (
            f"Box({self._bound_repr(self.low)}, {self._bound_repr(self.high)}, "
            f"{self.shape}, {self.dtype})"
        )
