"""
Shared fixtures and helper environments for the mdp_gym test suite.
"""

from typing import Any, Dict, List, Optional

import numpy as np
import pytest

from mdp_gym.core.constants import DEFAULT_TEST_SEEDS
from mdp_gym.core.env import Env
from mdp_gym.core.types import Step
from mdp_gym.envs.discrete import DiscreteEnv
from mdp_gym.spaces import Box, Discrete
from mdp_gym.utils.seeding import np_random

__all__ = [
    "CountingEnv",
    "make_three_state_env",
    "make_chain_env",
    "THREE_STATE_ISD",
]

THREE_STATE_ISD = [0.2, 0.3, 0.5]


class CountingEnv(Env):
    """Deterministic toy env: observation is the step counter, reward is 1.0.

    The episode ends after ``horizon`` steps. Records every action it receives
    so wrapper tests can check what reached the base env.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(self, horizon: int = 3, reward: float = 1.0):
        super().__init__(
            action_space=Discrete(2),
            observation_space=Box(0.0, np.inf, shape=(1,), dtype=np.float32),
        )
        self.horizon = horizon
        self.reward = reward
        self.count = 0
        self.actions: List[Any] = []
        self.closed = 0
        self.seed()

    def seed(self, seed=None) -> List[int]:
        self.np_random, seed_used = np_random(seed)
        return [seed_used]

    def reset(self, options: Optional[Dict[str, Any]] = None) -> np.ndarray:
        self.count = 0
        return np.array([self.count], dtype=np.float32)

    def step(self, action) -> Step:
        self.actions.append(action)
        self.count += 1
        return Step(
            np.array([self.count], dtype=np.float32),
            self.reward,
            self.count >= self.horizon,
            {"count": self.count},
        )

    def render(self, mode: str = "ansi", **kwargs):
        if mode != "ansi":
            return super().render(mode, **kwargs)
        return f"count={self.count}\n"

    def close(self) -> None:
        self.closed += 1


def make_three_state_env(seed=0) -> DiscreteEnv:
    """Three states, one action; every transition terminates in place."""
    P = {s: {0: [(1.0, s, float(s), True)]} for s in range(3)}
    return DiscreteEnv(3, 1, P, THREE_STATE_ISD, seed=seed)


def make_chain_env(seed=0) -> DiscreteEnv:
    """Four-state chain with a stochastic forward action and a terminal end.

    Action 0 stays put. Action 1 advances with probability 0.75 and stays with
    probability 0.25. Reaching state 3 pays 1.0 and ends the episode.
    """
    nS, nA = 4, 2
    P: Dict[int, Dict[int, list]] = {}
    for s in range(nS):
        if s == nS - 1:
            P[s] = {a: [(1.0, s, 0.0, True)] for a in range(nA)}
            continue
        forward = s + 1
        P[s] = {
            0: [(1.0, s, 0.0, False)],
            1: [
                (0.75, forward, 1.0 if forward == nS - 1 else 0.0, forward == nS - 1),
                (0.25, s, 0.0, False),
            ],
        }
    return DiscreteEnv(nS, nA, P, [1.0, 0.0, 0.0, 0.0], seed=seed)


@pytest.fixture(params=DEFAULT_TEST_SEEDS)
def test_seed(request) -> int:
    return request.param


@pytest.fixture
def counting_env() -> CountingEnv:
    return CountingEnv()


@pytest.fixture
def three_state_env() -> DiscreteEnv:
    return make_three_state_env()


@pytest.fixture
def chain_env() -> DiscreteEnv:
    return make_chain_env()
