"""Tests for the Env base contract."""

import numpy as np
import pytest

from mdp_gym.core.env import Env
from mdp_gym.core.types import Step
from mdp_gym.registration import EnvSpec
from mdp_gym.utils.exceptions import RenderingError, ValidationError
from tests.conftest import CountingEnv


class TestEnvDefaults:
    def test_cannot_instantiate_abstract_env(self):
        with pytest.raises(TypeError):
            Env()

    def test_default_reward_range(self, counting_env):
        assert counting_env.reward_range == (-float("inf"), float("inf"))

    def test_spaces_must_be_spaces(self):
        class Bad(CountingEnv):
            def __init__(self):
                Env.__init__(self, action_space="not a space")

        with pytest.raises(ValidationError):
            Bad()

    def test_unwrapped_is_self(self, counting_env):
        assert counting_env.unwrapped is counting_env

    def test_compute_reward_not_implemented(self, counting_env):
        with pytest.raises(NotImplementedError):
            counting_env.compute_reward(0, 0, {})

    def test_str_without_spec(self, counting_env):
        assert str(counting_env) == "CountingEnv"
        assert repr(counting_env) == "CountingEnv"

    def test_str_with_spec(self, counting_env):
        counting_env.spec = EnvSpec(id="Counting-v0", entry_point=CountingEnv)
        assert str(counting_env) == "CountingEnv<Counting-v0>"


class TestEnvProtocol:
    def test_step_returns_step_tuple(self, counting_env):
        counting_env.reset()
        result = counting_env.step(1)
        assert isinstance(result, Step)
        observation, reward, done, info = result
        assert counting_env.observation_space.contains(observation)
        assert reward == 1.0
        assert done is False
        assert info == {"count": 1}

    def test_context_manager_closes(self):
        with CountingEnv() as env:
            env.reset()
        assert env.closed == 1

    def test_close_is_idempotent_by_default(self):
        class Plain(CountingEnv):
            close = Env.close

        env = Plain()
        env.close()
        env.close()


class TestRender:
    def test_supported_mode(self, counting_env):
        counting_env.reset()
        assert counting_env.render("ansi") == "count=0\n"

    @pytest.mark.parametrize("mode", ["human", "rgb_array", "bogus"])
    def test_unsupported_mode_raises(self, counting_env, mode):
        with pytest.raises(RenderingError) as exc_info:
            counting_env.render(mode)
        assert exc_info.value.render_mode == mode
        assert exc_info.value.supported_modes == ["ansi"]

    def test_rendering_error_is_not_implemented_error(self, counting_env):
        with pytest.raises(NotImplementedError):
            counting_env.render("human")


def test_observation_dtype(counting_env):
    assert counting_env.reset().dtype == np.float32
