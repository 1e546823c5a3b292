"""Episode-length cutoff layered on top of any environment."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..core.constants import INFO_TRUNCATED_KEY
from ..core.env import Env
from ..core.types import ActionType, ObservationType, Step
from ..core.wrappers import Wrapper
from ..utils.exceptions import StateError, ValidationError

logger = logging.getLogger(__name__)


class TimeLimit(Wrapper):
    """End episodes after ``max_episode_steps`` steps.

    When the limit is reached and the inner env has not already finished the
    episode, the step is returned with ``done=True`` and
    ``info["TimeLimit.truncated"] = True``. Once a step comes back with
    ``done=True``, truncated or not, further steps raise :class:`StateError`
    until :meth:`reset`.

    Parameters
    ----------
    env : Env
        Environment to limit.
    max_episode_steps : int
        Positive step budget per episode.
    """

    def __init__(self, env: Env, max_episode_steps: int):
        super().__init__(env)
        if (
            isinstance(max_episode_steps, bool)
            or not isinstance(max_episode_steps, int)
            or max_episode_steps <= 0
        ):
            raise ValidationError(
                f"max_episode_steps must be a positive int, got {max_episode_steps!r}",
                parameter_name="max_episode_steps",
                parameter_value=max_episode_steps,
            )
        self.max_episode_steps = max_episode_steps
        self._elapsed_steps: Optional[int] = None
        self._episode_done = False

    @property
    def elapsed_steps(self) -> Optional[int]:
        return self._elapsed_steps

    def reset(self, options: Optional[Dict[str, Any]] = None) -> ObservationType:
        self._elapsed_steps = 0
        self._episode_done = False
        return self.env.reset(options)

    def step(self, action: ActionType) -> Step:
        if self._elapsed_steps is None:
            raise StateError(
                "Cannot call step() before reset() on a TimeLimit wrapper",
                current_state="not_reset",
                expected_state="reset",
                component_name=type(self).__name__,
            )
        if self._episode_done:
            raise StateError(
                "Cannot call step() on a finished episode; call reset() first",
                current_state="done",
                expected_state="running",
                component_name=type(self).__name__,
            )
        observation, reward, done, info = self.env.step(action)
        self._elapsed_steps += 1
        if self._elapsed_steps >= self.max_episode_steps and not done:
            info = dict(info)
            info[INFO_TRUNCATED_KEY] = True
            done = True
            logger.debug(
                "Episode truncated after %d steps", self._elapsed_steps
            )
        self._episode_done = bool(done)
        return Step(observation, reward, done, info)
