"""Tests for GoalEnv observation checks and reward consistency."""

from collections import OrderedDict

import numpy as np
import pytest

from mdp_gym.core.env import GoalEnv
from mdp_gym.core.types import Step
from mdp_gym.spaces import Box, Dict, Discrete
from mdp_gym.utils.exceptions import ValidationError
from mdp_gym.utils.seeding import np_random


class ReachGoalEnv(GoalEnv):
    """Walk a 1-D integer position toward a goal; reward is minus the distance."""

    def __init__(self, observation_space=None):
        if observation_space is None:
            position = Box(0, 9, shape=(1,), dtype=np.int64)
            observation_space = Dict(
                observation=Box(0, 9, shape=(1,), dtype=np.int64),
                achieved_goal=position,
                desired_goal=Box(0, 9, shape=(1,), dtype=np.int64),
            )
        super().__init__(action_space=Discrete(2), observation_space=observation_space)
        self.position = 0
        self.goal = 5
        self.seed()

    def seed(self, seed=None):
        self.np_random, seed_used = np_random(seed)
        return [seed_used]

    def _obs(self):
        pos = np.array([self.position], dtype=np.int64)
        return OrderedDict(
            observation=pos.copy(),
            achieved_goal=pos.copy(),
            desired_goal=np.array([self.goal], dtype=np.int64),
        )

    def reset(self, options=None):
        super().reset(options)
        self.position = int(self.np_random.integers(0, 10))
        return self._obs()

    def step(self, action):
        self.position = int(np.clip(self.position + (1 if action == 1 else -1), 0, 9))
        obs = self._obs()
        info = {}
        reward = self.compute_reward(obs["achieved_goal"], obs["desired_goal"], info)
        return Step(obs, reward, self.position == self.goal, info)

    def compute_reward(self, achieved_goal, desired_goal, info):
        return -float(np.abs(np.asarray(achieved_goal) - np.asarray(desired_goal)).sum())


class TestGoalObservationCheck:
    def test_valid_space_resets(self):
        env = ReachGoalEnv()
        obs = env.reset()
        assert env.observation_space.contains(obs)

    def test_non_dict_space_rejected(self):
        env = ReachGoalEnv(observation_space=Discrete(3))
        with pytest.raises(ValidationError):
            env.reset()

    @pytest.mark.parametrize("missing", ["observation", "achieved_goal", "desired_goal"])
    def test_missing_key_rejected(self, missing):
        spaces = {
            key: Box(0, 9, shape=(1,), dtype=np.int64)
            for key in ("observation", "achieved_goal", "desired_goal")
            if key != missing
        }
        env = ReachGoalEnv(observation_space=Dict(spaces))
        with pytest.raises(ValidationError) as exc_info:
            env.reset()
        assert missing in str(exc_info.value)

    def test_extra_keys_allowed(self):
        space = Dict(
            observation=Box(0, 9, shape=(1,), dtype=np.int64),
            achieved_goal=Box(0, 9, shape=(1,), dtype=np.int64),
            desired_goal=Box(0, 9, shape=(1,), dtype=np.int64),
            velocity=Discrete(3),
        )
        ReachGoalEnv(observation_space=space).reset()

    def test_compute_reward_is_abstract(self):
        class NoReward(GoalEnv):
            def step(self, action):
                raise AssertionError

            def reset(self, options=None):
                return super().reset(options)

            def seed(self, seed=None):
                return [0]

        with pytest.raises(TypeError):
            NoReward()


def test_reward_matches_compute_reward():
    env = ReachGoalEnv()
    env.seed(3)
    env.reset()
    for action in [1, 1, 0, 1, 1, 1, 0]:
        obs, reward, done, info = env.step(action)
        assert reward == env.compute_reward(
            obs["achieved_goal"], obs["desired_goal"], info
        )
        if done:
            break
