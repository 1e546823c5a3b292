"""
Wrapper family: composable, behavior-transforming layers around an Env.

A wrapper owns exactly one inner environment (``self.env``), which may itself
be a wrapper, so a stack of wrappers is a linear delegation chain:

    outer.step(a) -> ... -> base.step(a')
    outer <- ... <- Step(obs, reward, done, info)

The base :class:`Wrapper` is the identity transform. Each specialization
overrides exactly one hook:

- :class:`ObservationWrapper`: ``observation(obs)`` on ``reset`` and ``step``
- :class:`RewardWrapper`: ``reward(r)`` on ``step``
- :class:`ActionWrapper`: ``action(a)`` before the inner ``step``, with
  ``reverse_action`` as its inverse
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..spaces import Space
from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType
from .constants import RENDER_MODE_HUMAN
from .env import Env
from .types import ActionType, InfoType, ObservationType, Step

if TYPE_CHECKING:
    from ..registration.register import EnvSpec

__all__ = ["Wrapper", "ObservationWrapper", "RewardWrapper", "ActionWrapper"]


class Wrapper(Env):
    """Wrap an environment to modify it without touching its code.

    Every protocol method forwards unchanged to ``self.env``. Spaces, reward
    range and metadata read through to the inner env until the wrapper assigns
    its own. Other public attributes are looked up on the inner env; private
    ones (leading underscore) are not forwarded.

    Args:
        env: The environment to wrap.
    """

    def __init__(self, env: Env):
        if not isinstance(env, Env):
            raise ValidationError(
                f"Wrapper expects an Env instance, got {type(env).__name__}",
                parameter_name="env",
                parameter_value=env,
            )
        self.env = env
        self._action_space: Optional[Space] = None
        self._observation_space: Optional[Space] = None
        self._reward_range: Optional[Tuple[float, float]] = None
        self._metadata: Optional[Dict[str, Any]] = None

    def __getattr__(self, name: str) -> Any:
        if name == "env" or name.startswith("_"):
            raise AttributeError(
                f"{type(self).__name__!r} has no attribute {name!r}"
            )
        return getattr(self.env, name)

    @property
    def action_space(self) -> Optional[Space]:
        if self._action_space is None:
            return self.env.action_space
        return self._action_space

    @action_space.setter
    def action_space(self, space: Optional[Space]) -> None:
        self._action_space = space

    @property
    def observation_space(self) -> Optional[Space]:
        if self._observation_space is None:
            return self.env.observation_space
        return self._observation_space

    @observation_space.setter
    def observation_space(self, space: Optional[Space]) -> None:
        self._observation_space = space

    @property
    def reward_range(self) -> Tuple[float, float]:  # type: ignore[override]
        if self._reward_range is None:
            return self.env.reward_range
        return self._reward_range

    @reward_range.setter
    def reward_range(self, value: Tuple[float, float]) -> None:
        self._reward_range = value

    @property
    def metadata(self) -> Dict[str, Any]:  # type: ignore[override]
        if self._metadata is None:
            return self.env.metadata
        return self._metadata

    @metadata.setter
    def metadata(self, value: Dict[str, Any]) -> None:
        self._metadata = value

    @property
    def spec(self) -> Optional["EnvSpec"]:  # type: ignore[override]
        return self.env.spec

    def step(self, action: ActionType) -> Step:
        return self.env.step(action)

    def reset(self, options: Optional[Dict[str, Any]] = None) -> ObservationType:
        return self.env.reset(options)

    def render(self, mode: str = RENDER_MODE_HUMAN, **kwargs: Any) -> Any:
        return self.env.render(mode, **kwargs)

    def close(self) -> None:
        self.env.close()

    def seed(self, seed: SeedType = None) -> List[int]:
        return self.env.seed(seed)

    def compute_reward(
        self, achieved_goal: Any, desired_goal: Any, info: InfoType
    ) -> float:
        return self.env.compute_reward(achieved_goal, desired_goal, info)

    @property
    def unwrapped(self) -> Env:
        return self.env.unwrapped

    def __str__(self) -> str:
        inner = str(self.env)
        if not isinstance(self.env, Wrapper):
            inner = f"<{inner}>"
        return f"<{type(self).__name__}{inner}>"


class ObservationWrapper(Wrapper):
    """Transform observations returned by ``reset`` and ``step``."""

    def reset(self, options: Optional[Dict[str, Any]] = None) -> ObservationType:
        return self.observation(self.env.reset(options))

    def step(self, action: ActionType) -> Step:
        observation, reward, done, info = self.env.step(action)
        return Step(self.observation(observation), reward, done, info)

    @abstractmethod
    def observation(self, observation: ObservationType) -> ObservationType:
        """Map an inner observation to the wrapper's observation."""


class RewardWrapper(Wrapper):
    """Transform the reward returned by ``step``. ``reset`` is unchanged."""

    def step(self, action: ActionType) -> Step:
        observation, reward, done, info = self.env.step(action)
        return Step(observation, self.reward(reward), done, info)

    @abstractmethod
    def reward(self, reward: float) -> float:
        """Map an inner reward to the wrapper's reward."""


class ActionWrapper(Wrapper):
    """Transform actions before they reach the inner environment.

    Well-behaved subclasses satisfy ``reverse_action(action(a)) == a``; this is
    not checked at runtime.
    """

    def step(self, action: ActionType) -> Step:
        return self.env.step(self.action(action))

    @abstractmethod
    def action(self, action: ActionType) -> ActionType:
        """Map a wrapper action to an inner action."""

    @abstractmethod
    def reverse_action(self, action: ActionType) -> ActionType:
        """Map an inner action back to the wrapper's action space."""
