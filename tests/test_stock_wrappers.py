"""Tests for TimeLimit, TransformObservation and TransformReward."""

import numpy as np
import pytest

from mdp_gym.core.constants import INFO_TRUNCATED_KEY
from mdp_gym.envs.discrete import DiscreteEnv
from mdp_gym.spaces import Box
from mdp_gym.utils.exceptions import StateError, ValidationError
from mdp_gym.wrappers import TimeLimit, TransformObservation, TransformReward
from tests.conftest import CountingEnv


class TestTimeLimit:
    def test_truncates_at_limit(self):
        env = TimeLimit(CountingEnv(horizon=10), max_episode_steps=3)
        env.reset()
        for expected_elapsed in (1, 2):
            _, _, done, info = env.step(0)
            assert not done
            assert INFO_TRUNCATED_KEY not in info
            assert env.elapsed_steps == expected_elapsed
        _, _, done, info = env.step(0)
        assert done
        assert info[INFO_TRUNCATED_KEY] is True
        assert info["count"] == 3

    def test_natural_termination_is_not_truncation(self):
        env = TimeLimit(CountingEnv(horizon=2), max_episode_steps=2)
        env.reset()
        env.step(0)
        _, _, done, info = env.step(0)
        assert done
        assert INFO_TRUNCATED_KEY not in info

    def test_does_not_mutate_inner_info(self):
        class SharedInfo(CountingEnv):
            shared = {"count": 0}

            def step(self, action):
                step = super().step(action)
                return step._replace(info=self.shared)

        env = TimeLimit(SharedInfo(horizon=10), max_episode_steps=1)
        env.reset()
        env.step(0)
        assert SharedInfo.shared == {"count": 0}

    def test_reset_restarts_budget(self):
        env = TimeLimit(CountingEnv(horizon=10), max_episode_steps=2)
        env.reset()
        env.step(0)
        env.step(0)
        env.reset()
        assert env.elapsed_steps == 0
        _, _, done, _ = env.step(0)
        assert not done

    def test_step_before_reset_raises(self):
        env = TimeLimit(CountingEnv(), max_episode_steps=2)
        assert env.elapsed_steps is None
        with pytest.raises(StateError):
            env.step(0)

    def test_step_after_truncation_raises(self):
        P = {s: {0: [(1.0, 1 - s, 0.0, False)]} for s in range(2)}
        env = TimeLimit(DiscreteEnv(2, 1, P, [1.0, 0.0], seed=0), max_episode_steps=2)
        env.reset()
        assert not env.step(0).done
        _, _, done, info = env.step(0)
        assert done and info[INFO_TRUNCATED_KEY]
        with pytest.raises(StateError):
            env.step(0)
        assert env.elapsed_steps == 2

    def test_step_after_natural_termination_raises(self):
        env = TimeLimit(CountingEnv(horizon=1), max_episode_steps=5)
        env.reset()
        assert env.step(0).done
        with pytest.raises(StateError):
            env.step(0)
        assert env.unwrapped.count == 1

    def test_reset_after_truncation_allows_stepping(self):
        env = TimeLimit(CountingEnv(horizon=10), max_episode_steps=1)
        env.reset()
        assert env.step(0).done
        env.reset()
        _, _, done, _ = env.step(0)
        assert done
        assert env.elapsed_steps == 1

    @pytest.mark.parametrize("limit", [0, -3, 2.5, True, None])
    def test_invalid_limit(self, limit):
        with pytest.raises(ValidationError):
            TimeLimit(CountingEnv(), max_episode_steps=limit)

    def test_str(self):
        assert str(TimeLimit(CountingEnv(), 5)) == "<TimeLimit<CountingEnv>>"


class TestTransformObservation:
    def test_applies_function(self):
        env = TransformObservation(CountingEnv(), lambda obs: obs * 10)
        np.testing.assert_array_equal(env.reset(), [0.0])
        obs, _, _, _ = env.step(0)
        np.testing.assert_array_equal(obs, [10.0])

    def test_optional_observation_space(self):
        space = Box(0.0, np.inf, shape=(2,))
        env = TransformObservation(
            CountingEnv(), lambda obs: np.concatenate([obs, obs]), observation_space=space
        )
        assert env.observation_space is space
        assert env.observation_space.contains(env.reset())

    def test_requires_callable(self):
        with pytest.raises(ValidationError):
            TransformObservation(CountingEnv(), "not callable")


class TestTransformReward:
    def test_applies_function(self):
        env = TransformReward(CountingEnv(reward=2.0), lambda r: 0.01 * r)
        env.reset()
        _, reward, _, _ = env.step(0)
        assert reward == pytest.approx(0.02)

    def test_reset_untouched(self):
        env = TransformReward(CountingEnv(), lambda r: -r)
        np.testing.assert_array_equal(env.reset(), [0.0])

    def test_requires_callable(self):
        with pytest.raises(ValidationError):
            TransformReward(CountingEnv(), 3)
