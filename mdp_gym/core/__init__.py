"""
Core environment contract for mdp_gym.

Exposes the constants, the shared protocol types (``Step``, ``Transition``), the
:class:`Env` / :class:`GoalEnv` abstractions and the wrapper family used to
compose behavior around a base environment.
"""

from .constants import *  # noqa: F401,F403
from .env import Env, GoalEnv
from .types import (
    ActionType,
    InfoType,
    ObservationType,
    RewardType,
    Step,
    Transition,
)
from .wrappers import ActionWrapper, ObservationWrapper, RewardWrapper, Wrapper

__all__ = [
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "Env",
    "GoalEnv",
    "Wrapper",
    "ObservationWrapper",
    "RewardWrapper",
    "ActionWrapper",
    "Step",
    "Transition",
    "ActionType",
    "ObservationType",
    "RewardType",
    "InfoType",
]
