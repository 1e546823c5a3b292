"""Public package initializer exposing the environment contract, spaces and registry."""

from __future__ import annotations

import logging
from typing import Dict, List

# core first: spaces and utils read core.constants during import
from .core import (
    PACKAGE_NAME,
    PACKAGE_VERSION,
    ActionWrapper,
    Env,
    GoalEnv,
    ObservationWrapper,
    RewardWrapper,
    Step,
    Wrapper,
)
from .envs import BitFlipEnv, CorridorEnv, DiscreteEnv
from .registration import EnvSpec, make, register, registry, spec
from .spaces import Box, Dict as DictSpace, Discrete, Space
from .utils.exceptions import (
    ConfigurationError,
    MdpGymError,
    RenderingError,
    StateError,
    ValidationError,
)
from .wrappers import TimeLimit, TransformObservation, TransformReward

logging.getLogger(PACKAGE_NAME).addHandler(logging.NullHandler())


def get_package_info(*, include_registered_envs: bool = True) -> Dict[str, object]:
    """Return high-level package metadata for tooling and scripts."""
    info: Dict[str, object] = {
        "package_name": PACKAGE_NAME,
        "package_version": PACKAGE_VERSION,
    }
    if include_registered_envs:
        registered: List[str] = [env_spec.id for env_spec in registry.all()]
        info["registered_envs"] = registered
    return info


__all__ = [
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "ActionWrapper",
    "BitFlipEnv",
    "Box",
    "ConfigurationError",
    "CorridorEnv",
    "DictSpace",
    "Discrete",
    "DiscreteEnv",
    "Env",
    "EnvSpec",
    "GoalEnv",
    "MdpGymError",
    "ObservationWrapper",
    "RenderingError",
    "RewardWrapper",
    "Space",
    "StateError",
    "Step",
    "TimeLimit",
    "TransformObservation",
    "TransformReward",
    "ValidationError",
    "Wrapper",
    "get_package_info",
    "make",
    "register",
    "registry",
    "spec",
]

__version__ = PACKAGE_VERSION
