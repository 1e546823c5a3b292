"""
Process-wide environment registry.

Environments are registered under stable ids of the form ``Name-vN`` and built
later with :func:`make`. Entry points are either callables or lazy
``"package.module:Attr"`` strings, imported the first time the id is made.

Example:
    >>> register(
    ...     "ShortCorridor-v0",
    ...     "mdp_gym.envs.corridor:CorridorEnv",
    ...     max_episode_steps=20,
    ...     length=3,
    ... )
    >>> env = make("ShortCorridor-v0", slip=0.0)
    >>> env.spec.id
    'ShortCorridor-v0'

Ids are never unregistered; registering an id twice is an error.
"""

from __future__ import annotations

import dataclasses
import difflib
import logging
import re
from importlib import import_module
from typing import Any, Callable, Dict, List, Optional, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from ..core.env import Env
from ..utils.exceptions import ConfigurationError, ValidationError
from ..wrappers.time_limit import TimeLimit

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

logger = logging.getLogger(__name__)

ENV_ID_PATTERN = re.compile(r"^[A-Za-z][\w.:/-]*-v\d+$")

EntryPoint = Union[str, Callable[..., Env]]


def load_entry_point(entry_point: str) -> Callable[..., Env]:
    """Import the callable named by a ``"package.module:Attr.SubAttr"`` string."""
    module_name, _, attr_path = entry_point.partition(":")
    try:
        target: Any = import_module(module_name)
        for part in attr_path.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            f"Cannot resolve entry point {entry_point!r}: {exc}",
            config_parameter="entry_point",
            parameter_value=entry_point,
        ) from exc
    if not callable(target):
        raise ConfigurationError(
            f"Entry point {entry_point!r} resolved to a non-callable "
            f"{type(target).__name__}",
            config_parameter="entry_point",
            parameter_value=entry_point,
        )
    return target


class RegistrationOptions(BaseModel):
    """Validated arguments of a :func:`register` call."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    id: str
    entry_point: EntryPoint
    reward_threshold: Optional[float] = None
    nondeterministic: bool = False
    max_episode_steps: Optional[PositiveInt] = None
    kwargs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id")
    @classmethod
    def _validate_id(cls, v: str) -> str:
        if not ENV_ID_PATTERN.match(v):
            raise ValueError(
                f"environment id {v!r} must look like 'Name-v0' "
                "(letters, digits, '_', '-', '.', ':', '/' and a version suffix)"
            )
        return v

    @field_validator("entry_point")
    @classmethod
    def _validate_entry_point(cls, v: EntryPoint) -> EntryPoint:
        if not isinstance(v, str):
            return v
        s = v.strip()
        module_name, sep, attr = s.partition(":")
        if not sep or not module_name or not attr:
            raise ValueError("entry_point must be a path of the form 'module:Attr'")
        return s


@dataclasses.dataclass(frozen=True)
class EnvSpec:
    """Immutable description of a registered environment.

    Args:
        id: Registered id, e.g. ``"Corridor-v0"``.
        entry_point: Environment factory, or a ``"module:Attr"`` string.
        reward_threshold: Return at which the task counts as solved.
        nondeterministic: Whether dynamics stay random after seeding.
        max_episode_steps: Step budget enforced by :class:`TimeLimit` in
            :func:`make`.
        kwargs: Default constructor arguments.
    """

    id: str
    entry_point: EntryPoint
    reward_threshold: Optional[float] = None
    nondeterministic: bool = False
    max_episode_steps: Optional[int] = None
    kwargs: Dict[str, Any] = dataclasses.field(default_factory=dict, hash=False)

    def make(self, **kwargs: Any) -> Env:
        """Instantiate the base environment; call-time kwargs override defaults."""
        factory = (
            load_entry_point(self.entry_point)
            if isinstance(self.entry_point, str)
            else self.entry_point
        )
        env = factory(**{**self.kwargs, **kwargs})
        if not isinstance(env, Env):
            raise ConfigurationError(
                f"Entry point of {self.id!r} returned {type(env).__name__}, "
                "expected an Env",
                config_parameter="entry_point",
                parameter_value=self.entry_point,
            )
        env.unwrapped.spec = self
        return env


class EnvRegistry:
    """Ordered collection of :class:`EnvSpec` keyed by id."""

    def __init__(self) -> None:
        self._specs: Dict[str, EnvSpec] = {}

    def register(
        self,
        id: str,
        entry_point: EntryPoint,
        *,
        reward_threshold: Optional[float] = None,
        nondeterministic: bool = False,
        max_episode_steps: Optional[int] = None,
        **kwargs: Any,
    ) -> EnvSpec:
        try:
            options = RegistrationOptions(
                id=id,
                entry_point=entry_point,
                reward_threshold=reward_threshold,
                nondeterministic=nondeterministic,
                max_episode_steps=max_episode_steps,
                kwargs=kwargs,
            )
        except pydantic.ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "options"
            raise ValidationError(
                f"Invalid registration for {id!r}: {field}: {first['msg']}",
                parameter_name=field,
                parameter_value=first.get("input"),
            ) from exc

        if options.id in self._specs:
            raise ConfigurationError(
                f"Cannot re-register id: {options.id}",
                config_parameter="id",
                parameter_value=options.id,
            )

        env_spec = EnvSpec(
            id=options.id,
            entry_point=options.entry_point,
            reward_threshold=options.reward_threshold,
            nondeterministic=options.nondeterministic,
            max_episode_steps=options.max_episode_steps,
            kwargs=dict(options.kwargs),
        )
        self._specs[env_spec.id] = env_spec
        logger.debug("Registered %s -> %r", env_spec.id, env_spec.entry_point)
        return env_spec

    def spec(self, id: str) -> EnvSpec:
        try:
            return self._specs[id]
        except KeyError:
            close = difflib.get_close_matches(id, self._specs, n=1)
            hint = f" Did you mean {close[0]!r}?" if close else ""
            raise ConfigurationError(
                f"No registered environment with id {id!r}.{hint}",
                config_parameter="id",
                parameter_value=id,
            ) from None

    def make(self, id: str, **kwargs: Any) -> Env:
        env_spec = self.spec(id)
        env = env_spec.make(**kwargs)
        if env_spec.max_episode_steps is not None:
            env = TimeLimit(env, env_spec.max_episode_steps)
        logger.info("Made environment %s", env)
        return env

    def all(self) -> List[EnvSpec]:
        return list(self._specs.values())

    def __contains__(self, id: object) -> bool:
        return id in self._specs

    def __len__(self) -> int:
        return len(self._specs)


registry = EnvRegistry()


def register(
    id: str,
    entry_point: EntryPoint,
    *,
    reward_threshold: Optional[float] = None,
    nondeterministic: bool = False,
    max_episode_steps: Optional[int] = None,
    **kwargs: Any,
) -> EnvSpec:
    """Register an environment id in the global registry.

    Raises:
        ValidationError: If the options are malformed (bad id, entry point
            path or step budget).
        ConfigurationError: If ``id`` is already registered.
    """
    return registry.register(
        id,
        entry_point,
        reward_threshold=reward_threshold,
        nondeterministic=nondeterministic,
        max_episode_steps=max_episode_steps,
        **kwargs,
    )


def make(id: str, **kwargs: Any) -> Env:
    """Build a registered environment, wrapped in :class:`TimeLimit` when the
    spec sets ``max_episode_steps``."""
    return registry.make(id, **kwargs)


def spec(id: str) -> EnvSpec:
    """Look up the :class:`EnvSpec` registered under ``id``."""
    return registry.spec(id)
