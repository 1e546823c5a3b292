"""Goal-conditioned bit flipping task."""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Union, cast

import numpy as np

from ..core.constants import (
    ACHIEVED_GOAL_KEY,
    DESIRED_GOAL_KEY,
    OBSERVATION_KEY,
    RENDER_MODE_ANSI,
)
from ..core.env import GoalEnv
from ..core.types import InfoType, Step
from ..spaces import Box, Dict as DictSpace, Discrete
from ..utils.exceptions import StateError, ValidationError
from ..utils.seeding import SeedType, np_random

__all__ = ["BitFlipEnv"]

logger = logging.getLogger(__name__)

BIT_DTYPE = np.int8


class BitFlipEnv(GoalEnv):
    """Flip bits of a binary vector until it matches a random target.

    Action ``i`` flips bit ``i``. The reward is ``0.0`` once the state equals
    the goal and ``-1.0`` otherwise, and the episode ends on success.
    ``info["is_success"]`` reports whether the goal was reached.
    """

    metadata = {"render_modes": [RENDER_MODE_ANSI]}
    reward_range = (-1.0, 0.0)

    def __init__(self, n_bits: int = 8, seed: SeedType = None):
        if isinstance(n_bits, bool) or not isinstance(n_bits, (int, np.integer)):
            raise ValidationError(
                f"n_bits must be an integer, got {n_bits!r}",
                parameter_name="n_bits",
                parameter_value=n_bits,
            )
        if n_bits < 1:
            raise ValidationError(
                f"n_bits must be positive, got {n_bits}",
                parameter_name="n_bits",
                parameter_value=n_bits,
                expected_format="integer >= 1",
            )
        self.n_bits = int(n_bits)

        super().__init__(
            action_space=Discrete(self.n_bits),
            observation_space=DictSpace(
                OrderedDict(
                    (key, Box(0, 1, shape=(self.n_bits,), dtype=BIT_DTYPE))
                    for key in (OBSERVATION_KEY, ACHIEVED_GOAL_KEY, DESIRED_GOAL_KEY)
                )
            ),
        )
        self.seed(seed)
        self.state = np.zeros(self.n_bits, dtype=BIT_DTYPE)
        self.goal = np.zeros(self.n_bits, dtype=BIT_DTYPE)
        self.last_action: Optional[int] = None
        self._episode_done = False
        self.reset()

    def seed(self, seed: SeedType = None) -> List[int]:
        self.np_random, seed_used = np_random(seed)
        return [seed_used]

    def _random_bits(self) -> np.ndarray:
        return self.np_random.integers(0, 2, size=self.n_bits).astype(BIT_DTYPE)

    def _get_obs(self) -> "OrderedDict[str, np.ndarray]":
        return OrderedDict(
            [
                (OBSERVATION_KEY, self.state.copy()),
                (ACHIEVED_GOAL_KEY, self.state.copy()),
                (DESIRED_GOAL_KEY, self.goal.copy()),
            ]
        )

    def reset(
        self, options: Optional[Dict[str, Any]] = None
    ) -> "OrderedDict[str, np.ndarray]":
        super().reset(options)
        self.state = self._random_bits()
        self.goal = self._random_bits()
        # an episode that starts solved carries no signal
        while np.array_equal(self.state, self.goal):
            self.goal = self._random_bits()
        self.last_action = None
        self._episode_done = False
        logger.debug("BitFlipEnv reset with %d bits", self.n_bits)
        return self._get_obs()

    def step(self, action: Any) -> Step:
        action_space = cast(Discrete, self.action_space)
        if not action_space.contains(action):
            raise ValidationError(
                f"Action {action!r} is not in {action_space}",
                parameter_name="action",
                parameter_value=action,
                expected_format=f"integer in [0, {self.n_bits})",
            )
        if self._episode_done:
            raise StateError(
                "Cannot call step() on a finished episode; call reset() first",
                current_state="done",
                expected_state="running",
                component_name=type(self).__name__,
            )

        action = int(np.asarray(action).reshape(-1)[0])
        self.state[action] ^= 1
        self.last_action = action

        obs = self._get_obs()
        success = bool(np.array_equal(self.state, self.goal))
        info: InfoType = {"is_success": success}
        reward = self.compute_reward(
            obs[ACHIEVED_GOAL_KEY], obs[DESIRED_GOAL_KEY], info
        )
        self._episode_done = success
        return Step(obs, reward, success, info)

    def compute_reward(
        self, achieved_goal: Any, desired_goal: Any, info: InfoType
    ) -> Union[float, np.ndarray]:
        # works on single goals and on batches stacked along the first axis
        mismatch = np.any(
            np.asarray(achieved_goal) != np.asarray(desired_goal), axis=-1
        )
        reward = np.where(mismatch, -1.0, 0.0)
        if reward.ndim == 0:
            return float(reward)
        return reward

    def render(self, mode: str = RENDER_MODE_ANSI, **kwargs: Any) -> Any:
        if mode != RENDER_MODE_ANSI:
            return super().render(mode, **kwargs)
        state = "".join(str(int(b)) for b in self.state)
        goal = "".join(str(int(b)) for b in self.goal)
        return f"state={state} goal={goal}\n"
