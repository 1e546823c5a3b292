from __future__ import annotations

from typing import Callable, Optional

from ..core.env import Env
from ..core.types import ObservationType
from ..core.wrappers import ObservationWrapper, RewardWrapper
from ..spaces import Space
from ..utils.exceptions import ValidationError


def _require_callable(f: object, name: str) -> None:
    if not callable(f):
        raise ValidationError(
            f"{name} must be callable, got {type(f).__name__}",
            parameter_name=name,
            parameter_value=f,
        )


class TransformObservation(ObservationWrapper):
    """Apply a function to every observation.

    Example:
        >>> env = TransformObservation(env, lambda obs: -obs)

    If the function changes the observation domain, pass the new space as
    ``observation_space``; otherwise the inner space is reported.
    """

    def __init__(
        self,
        env: Env,
        f: Callable[[ObservationType], ObservationType],
        observation_space: Optional[Space] = None,
    ):
        super().__init__(env)
        _require_callable(f, "f")
        self.f = f
        if observation_space is not None:
            self.observation_space = observation_space

    def observation(self, observation: ObservationType) -> ObservationType:
        return self.f(observation)


class TransformReward(RewardWrapper):
    """Apply a function to every reward, e.g. ``TransformReward(env, lambda r: 0.01 * r)``."""

    def __init__(self, env: Env, f: Callable[[float], float]):
        super().__init__(env)
        _require_callable(f, "f")
        self.f = f

    def reward(self, reward: float) -> float:
        return self.f(reward)
