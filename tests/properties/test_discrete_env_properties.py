"""
Property Tests: tabular DiscreteEnv

Uses Hypothesis to check the engine against randomly generated MDPs:

1. Reproducibility: same seed and actions give the same trajectory
2. Closure: observations stay inside the observation space
3. Consistency: every sampled step matches an outcome of the table
4. Support: sampling never selects a zero-probability entry
"""

import numpy as np
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mdp_gym.core.constants import INFO_PROBABILITY_KEY
from mdp_gym.envs.discrete import DiscreteEnv, categorical_sample
from tests.strategies import (
    action_sequences,
    probability_vectors,
    transition_tables,
    uniform_variates,
)


class FixedUniform:
    def __init__(self, u):
        self.u = u

    def random(self):
        return self.u


def run(env, actions):
    """Roll out ``actions``, resetting whenever an episode ends."""
    trajectory = [int(env.reset()[0])]
    for action in actions:
        obs, reward, done, info = env.step(action)
        trajectory.append((int(obs[0]), reward, done, info[INFO_PROBABILITY_KEY]))
        if done:
            trajectory.append(int(env.reset()[0]))
    return trajectory


# ============================================================================
# Property 1: Reproducibility
# ============================================================================


@given(table=transition_tables(), seed=st.integers(0, 2**32 - 1), data=st.data())
@settings(max_examples=50, deadline=None)
def test_same_seed_same_trajectory(table, seed, data):
    nS, nA, P, isd = table
    actions = data.draw(action_sequences(nA))
    first = run(DiscreteEnv(nS, nA, P, isd, seed=seed), actions)
    second = run(DiscreteEnv(nS, nA, P, isd, seed=seed), actions)
    assert first == second


# ============================================================================
# Properties 2 and 3: Closure and table consistency
# ============================================================================


@given(table=transition_tables(), seed=st.integers(0, 1000), data=st.data())
@settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
def test_steps_follow_the_table(table, seed, data):
    nS, nA, P, isd = table
    env = DiscreteEnv(nS, nA, P, isd, seed=seed)
    obs = env.reset()
    assert env.observation_space.contains(obs)
    assert isd[int(obs[0])] > 0

    for action in data.draw(action_sequences(nA)):
        state = env.s
        obs, reward, done, info = env.step(action)
        assert env.observation_space.contains(obs)
        outcome = (info[INFO_PROBABILITY_KEY], int(obs[0]), reward, done)
        assert outcome in [tuple(o) for o in P[state][action]]
        assert env.last_action == action
        if done:
            obs = env.reset()


# ============================================================================
# Property 4: Support of categorical sampling
# ============================================================================


@given(probs=probability_vectors(), u=uniform_variates())
@settings(max_examples=200)
def test_categorical_sample_hits_support(probs, u):
    index = categorical_sample(probs, FixedUniform(u))
    assert 0 <= index < len(probs)
    assert probs[index] > 0


@given(probs=probability_vectors(), u=uniform_variates())
@settings(max_examples=200)
def test_categorical_sample_is_inverse_cdf(probs, u):
    index = categorical_sample(probs, FixedUniform(u))
    cdf = np.cumsum(probs)
    if cdf[-1] > u:
        assert cdf[index] > u
        assert index == 0 or cdf[index - 1] <= u
