"""
Shared value types for the environment protocol.
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple

import numpy as np

from .constants import STATE_DTYPE

ObservationType = Any
ActionType = Any
RewardType = float
InfoType = Dict[str, Any]


class Step(NamedTuple):
    """Result of a single ``Env.step`` call.

    Unpacks as ``observation, reward, done, info``.
    """

    observation: ObservationType
    reward: RewardType
    done: bool
    info: InfoType


class Transition(NamedTuple):
    """One weighted outcome of a ``(state, action)`` pair in a transition table."""

    probability: float
    next_state: int
    reward: float
    done: bool


def as_observation_array(state: int) -> np.ndarray:
    """Wrap a discrete state index as a one-element integer observation."""
    return np.array([state], dtype=STATE_DTYPE)


__all__ = [
    "ObservationType",
    "ActionType",
    "RewardType",
    "InfoType",
    "Step",
    "Transition",
    "as_observation_array",
]
