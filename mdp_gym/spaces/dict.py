from __future__ import annotations

from collections import OrderedDict
from typing import Any, Iterable, Iterator, KeysView, List, Mapping, Optional, Tuple

from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType, derive_seeds
from .space import Space


class Dict(Space):
    """An ordered mapping of named sub-spaces.

    Samples are ``OrderedDict`` instances with one entry per key, in
    insertion order.

    Example:
        >>> space = Dict(
        ...     observation=Box(-1.0, 1.0, (3,)),
        ...     achieved_goal=Discrete(4),
        ... )
        >>> list(space.keys())
        ['observation', 'achieved_goal']
    """

    is_composite = True

    def __init__(
        self,
        spaces: Optional[Mapping[str, Space]] = None,
        seed: SeedType = None,
        **spaces_kwargs: Space,
    ):
        merged: "OrderedDict[str, Space]" = OrderedDict()
        for source in (spaces or {}, spaces_kwargs):
            for key, space in source.items():
                if not isinstance(key, str):
                    raise ValidationError(
                        f"Dict keys must be strings, got {type(key).__name__}",
                        parameter_name="spaces",
                        parameter_value=key,
                    )
                if key in merged:
                    raise ValidationError(
                        f"Duplicate Dict key: {key!r}",
                        parameter_name="spaces",
                        parameter_value=key,
                    )
                if not isinstance(space, Space):
                    raise ValidationError(
                        f"Dict values must be Space instances, got "
                        f"{type(space).__name__} for key {key!r}",
                        parameter_name=key,
                        parameter_value=space,
                    )
                merged[key] = space
        self.spaces = merged
        super().__init__(shape=None, dtype=None, seed=seed)

    def seed(self, seed: SeedType = None) -> List[int]:
        """Seed this space and derive one independent seed per sub-space.

        Returns:
            ``[main_seed, *sub_space_seeds]`` in key order.
        """
        seeds = super().seed(seed)
        for sub_seed, space in zip(
            derive_seeds(self.np_random, len(self.spaces)), self.spaces.values()
        ):
            seeds.extend(space.seed(sub_seed))
        return seeds

    def sample(self) -> "OrderedDict[str, Any]":
        return OrderedDict((key, space.sample()) for key, space in self.spaces.items())

    def contains(self, x: Any) -> bool:
        if not isinstance(x, Mapping) or len(x) != len(self.spaces):
            return False
        for key, space in self.spaces.items():
            if key not in x or not space.contains(x[key]):
                return False
        return True

    def missing_keys(self, keys: Iterable[str]) -> List[str]:
        """Return the entries of ``keys`` that are not sub-spaces of this Dict."""
        return [key for key in keys if key not in self.spaces]

    def __getitem__(self, key: str) -> Space:
        return self.spaces[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.spaces)

    def __len__(self) -> int:
        return len(self.spaces)

    def keys(self) -> KeysView[str]:
        return self.spaces.keys()

    def items(self) -> Iterable[Tuple[str, Space]]:
        return self.spaces.items()

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Dict)
            and list(self.spaces) == list(other.spaces)
            and all(self.spaces[key] == other.spaces[key] for key in self.spaces)
        )

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {space}" for key, space in self.spaces.items())
        return f"Dict({body})"
