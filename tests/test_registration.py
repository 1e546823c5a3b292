"""Tests for the environment registry."""

import pydantic
import pytest

from mdp_gym.envs import BitFlipEnv, CorridorEnv
from mdp_gym.registration import EnvRegistry, EnvSpec, RegistrationOptions, registry
from mdp_gym.registration import make, register, spec
from mdp_gym.utils.exceptions import ConfigurationError, ValidationError
from mdp_gym.wrappers import TimeLimit
from tests.conftest import CountingEnv


@pytest.fixture
def local_registry() -> EnvRegistry:
    return EnvRegistry()


class TestRegister:
    def test_returns_spec(self, local_registry):
        env_spec = local_registry.register(
            "Counting-v0", CountingEnv, reward_threshold=3.0, horizon=4
        )
        assert isinstance(env_spec, EnvSpec)
        assert env_spec.id == "Counting-v0"
        assert env_spec.reward_threshold == 3.0
        assert env_spec.nondeterministic is False
        assert env_spec.max_episode_steps is None
        assert env_spec.kwargs == {"horizon": 4}

    def test_duplicate_id_rejected(self, local_registry):
        local_registry.register("Counting-v0", CountingEnv)
        with pytest.raises(ConfigurationError):
            local_registry.register("Counting-v0", CountingEnv)
        assert len(local_registry) == 1

    def test_duplicate_builtin_id_rejected(self):
        with pytest.raises(ConfigurationError):
            register("Corridor-v0", entry_point="mdp_gym.envs.corridor:CorridorEnv")

    @pytest.mark.parametrize("env_id", ["Counting", "counting-v", "-v0", "Counting v0"])
    def test_malformed_id_rejected(self, local_registry, env_id):
        with pytest.raises(ValidationError):
            local_registry.register(env_id, CountingEnv)

    @pytest.mark.parametrize("entry_point", ["tests.conftest", ":CountingEnv", "mod:", 42])
    def test_malformed_entry_point_rejected(self, local_registry, entry_point):
        with pytest.raises(ValidationError):
            local_registry.register("Counting-v0", entry_point)

    @pytest.mark.parametrize("steps", [0, -1, "many"])
    def test_invalid_max_episode_steps(self, local_registry, steps):
        with pytest.raises(ValidationError) as exc_info:
            local_registry.register("Counting-v0", CountingEnv, max_episode_steps=steps)
        assert exc_info.value.parameter_name == "max_episode_steps"

    def test_options_forbid_extra_fields(self):
        with pytest.raises(pydantic.ValidationError):
            RegistrationOptions(id="X-v0", entry_point="a:b", unknown=1)


class TestMake:
    def test_make_with_defaults_and_overrides(self, local_registry):
        local_registry.register("Counting-v0", CountingEnv, horizon=4, reward=2.0)
        env = local_registry.make("Counting-v0", reward=5.0)
        assert isinstance(env, CountingEnv)
        assert env.horizon == 4
        assert env.reward == 5.0
        assert env.spec.id == "Counting-v0"
        assert str(env) == "CountingEnv<Counting-v0>"

    def test_make_wraps_time_limit(self, local_registry):
        local_registry.register("Counting-v0", CountingEnv, max_episode_steps=2, horizon=10)
        env = local_registry.make("Counting-v0")
        assert isinstance(env, TimeLimit)
        assert env.max_episode_steps == 2
        assert env.spec is env.unwrapped.spec
        env.reset()
        env.step(0)
        assert env.step(0).done

    def test_string_entry_point_resolved_lazily(self, local_registry):
        local_registry.register("Lazy-v0", "tests.conftest:CountingEnv")
        assert isinstance(local_registry.make("Lazy-v0"), CountingEnv)

    def test_unresolvable_entry_point(self, local_registry):
        local_registry.register("Missing-v0", "mdp_gym.does_not_exist:Nope")
        with pytest.raises(ConfigurationError):
            local_registry.make("Missing-v0")

    def test_missing_attribute(self, local_registry):
        local_registry.register("Missing-v0", "mdp_gym.envs.corridor:Nope")
        with pytest.raises(ConfigurationError):
            local_registry.make("Missing-v0")

    def test_entry_point_must_build_env(self, local_registry):
        local_registry.register("NotAnEnv-v0", dict)
        with pytest.raises(ConfigurationError):
            local_registry.make("NotAnEnv-v0")

    def test_unknown_id(self, local_registry):
        with pytest.raises(ConfigurationError):
            local_registry.make("Unknown-v0")

    def test_unknown_id_suggests_close_match(self, local_registry):
        local_registry.register("Counting-v0", CountingEnv)
        with pytest.raises(ConfigurationError, match="Counting-v0"):
            local_registry.spec("Countin-v0")


class TestGlobalRegistry:
    def test_builtin_environments_registered(self):
        ids = [env_spec.id for env_spec in registry.all()]
        assert "Corridor-v0" in ids
        assert "BitFlip-v0" in ids
        assert len(ids) == len(set(ids))

    def test_spec_lookup(self):
        assert spec("Corridor-v0").max_episode_steps == 100
        assert spec("BitFlip-v0").max_episode_steps == 8

    def test_make_corridor(self):
        env = make("Corridor-v0", seed=0)
        assert isinstance(env, TimeLimit)
        assert isinstance(env.unwrapped, CorridorEnv)
        assert str(env) == "<TimeLimit<CorridorEnv<Corridor-v0>>>"

    def test_make_bit_flip(self):
        env = make("BitFlip-v0", n_bits=4, seed=1)
        assert isinstance(env.unwrapped, BitFlipEnv)
        assert env.unwrapped.n_bits == 4

    def test_all_preserves_registration_order(self, local_registry):
        for name in ("B-v0", "A-v0", "C-v0"):
            local_registry.register(name, CountingEnv)
        assert [s.id for s in local_registry.all()] == ["B-v0", "A-v0", "C-v0"]
        assert "A-v0" in local_registry
