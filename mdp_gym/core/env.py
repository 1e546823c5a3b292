"""
Environment contract.

An :class:`Env` encapsulates arbitrary behind-the-scenes dynamics behind a
uniform interaction protocol:

    step, reset, render, seed, close

and declares:

    action_space: the Space of valid actions
    observation_space: the Space of valid observations
    reward_range: ``(min, max)`` of possible rewards, ``(-inf, inf)`` by default

Lifecycle:
    construct --reset()--> episode --step()*--> done --reset()--> ...
    * --close()--> closed (idempotent)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional, Tuple

from ..spaces import Dict as DictSpace
from ..spaces import Space
from ..utils.exceptions import RenderingError, ValidationError
from ..utils.seeding import SeedType
from .constants import DEFAULT_REWARD_RANGE, GOAL_ENV_REQUIRED_KEYS, RENDER_MODE_HUMAN
from .types import ActionType, InfoType, ObservationType, Step

if TYPE_CHECKING:
    from ..registration.register import EnvSpec

__all__ = ["Env", "GoalEnv"]


class Env(ABC):
    """Base class for every environment.

    Subclasses implement :meth:`step`, :meth:`reset` and :meth:`seed`, set
    ``action_space`` and ``observation_space`` once at construction, and list
    their supported render modes in ``metadata["render_modes"]``.

    Args:
        action_space: Space of valid actions (optional at this level).
        observation_space: Space of valid observations (optional at this level).
    """

    metadata: ClassVar[Dict[str, Any]] = {"render_modes": []}
    reward_range: Tuple[float, float] = DEFAULT_REWARD_RANGE
    spec: Optional["EnvSpec"] = None

    action_space: Optional[Space]
    observation_space: Optional[Space]

    def __init__(
        self,
        action_space: Optional[Space] = None,
        observation_space: Optional[Space] = None,
    ):
        for name, space in (
            ("action_space", action_space),
            ("observation_space", observation_space),
        ):
            if space is not None and not isinstance(space, Space):
                raise ValidationError(
                    f"{name} must be a Space instance, got {type(space).__name__}",
                    parameter_name=name,
                    parameter_value=space,
                )
        self.action_space = action_space
        self.observation_space = observation_space

    @abstractmethod
    def step(self, action: ActionType) -> Step:
        """Run one timestep of the environment's dynamics.

        When the episode ends (``done=True``) the caller is responsible for
        calling :meth:`reset` before stepping again.

        Args:
            action: An element of ``action_space``.

        Returns:
            ``Step(observation, reward, done, info)``.
        """

    @abstractmethod
    def reset(self, options: Optional[Dict[str, Any]] = None) -> ObservationType:
        """Reset the environment state and return an initial observation."""

    def render(self, mode: str = RENDER_MODE_HUMAN, **kwargs: Any) -> Any:
        """Render the environment.

        By convention:

        - ``human``: render for human consumption, return nothing.
        - ``rgb_array``: return an ``np.ndarray`` of shape ``(height, width, 3)``.
        - ``ansi``: return a string, possibly with ANSI escape sequences.

        Subclasses list supported modes in ``metadata["render_modes"]`` and
        call ``super().render(mode)`` for anything they do not handle, which
        raises :class:`RenderingError`.
        """
        supported = list(self.metadata.get("render_modes", []))
        if mode not in supported:
            raise RenderingError(
                f"Render mode {mode!r} is not supported by {type(self).__name__}; "
                f"supported modes: {supported}",
                render_mode=mode,
                supported_modes=supported,
            )
        raise NotImplementedError(
            f"{type(self).__name__} declares render mode {mode!r} but does not implement it"
        )

    @abstractmethod
    def seed(self, seed: SeedType = None) -> List[int]:
        """Seed the environment's random number generator(s).

        Returns:
            The seeds used by each generator. The first entry is the main seed,
            the value a reproducer should pass back to ``seed``.
        """

    def close(self) -> None:
        """Release resources. Safe to call more than once."""

    def compute_reward(
        self, achieved_goal: Any, desired_goal: Any, info: InfoType
    ) -> float:
        """Reward of ``achieved_goal`` with respect to ``desired_goal``.

        Only goal-conditioned environments implement this.
        """
        raise NotImplementedError(
            f"compute_reward is not implemented for {type(self).__name__}"
        )

    @property
    def unwrapped(self) -> "Env":
        """The base, non-wrapped environment. Returns ``self`` here."""
        return self

    def __enter__(self) -> "Env":
        return self

    def __exit__(self, *args: Any) -> bool:
        self.close()
        return False

    def __str__(self) -> str:
        if self.spec is None:
            return type(self).__name__
        return f"{type(self).__name__}<{self.spec.id}>"

    def __repr__(self) -> str:
        return str(self)


class GoalEnv(Env):
    """A goal-conditioned environment.

    The observation space must be a ``Dict`` with at least the keys
    ``observation``, ``achieved_goal`` and ``desired_goal``. The reward is a
    function of the two goals, exposed as :meth:`compute_reward`, so that for
    every step::

        obs, reward, done, info = env.step(action)
        assert reward == env.compute_reward(
            obs["achieved_goal"], obs["desired_goal"], info
        )

    Subclasses call ``super().reset(options)`` at the start of ``reset`` to get
    the observation space check.
    """

    def reset(self, options: Optional[Dict[str, Any]] = None) -> ObservationType:
        self._check_goal_observation_space()
        return None

    def _check_goal_observation_space(self) -> None:
        space = self.observation_space
        if not isinstance(space, DictSpace):
            raise ValidationError(
                "GoalEnv requires an observation space of type Dict, got "
                f"{type(space).__name__}",
                parameter_name="observation_space",
                parameter_value=space,
                expected_format="Dict",
            )
        missing = space.missing_keys(GOAL_ENV_REQUIRED_KEYS)
        if missing:
            raise ValidationError(
                f'GoalEnv requires the "{missing[0]}" key to be part of the '
                "observation dictionary",
                parameter_name="observation_space",
                parameter_value=list(space.keys()),
                expected_format=", ".join(GOAL_ENV_REQUIRED_KEYS),
            )

    @abstractmethod
    def compute_reward(
        self, achieved_goal: Any, desired_goal: Any, info: InfoType
    ) -> float:
        """Compute the step reward from the achieved and desired goals.

        Must be pure: it may not depend on mutable environment state, so it can
        be recomputed for relabeled goals.
        """
