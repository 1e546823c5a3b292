"""Core constants used throughout the `mdp_gym` package.

Primitive values live directly in this module, while package metadata and the
few tunables users may want to adjust (seed range, probability tolerance,
testing seeds) are loaded from `config/constants.yaml` next to the package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import numpy as np
import yaml

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "constants.yaml"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "package": {
        "name": "mdp_gym",
        "version": "0.0.0",
    },
    "seeding": {
        "min_value": 0,
        "max_value": 2**32 - 1,
        "hash_algorithm": "sha256",
    },
    "discrete": {
        "probability_tolerance": 1e-6,
    },
    "testing": {
        "default_seeds": [0, 42, 123],
    },
}


def _load_constants_config() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return _DEFAULT_CONFIG

    try:
        with CONFIG_PATH.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError):
        return _DEFAULT_CONFIG

    merged = {key: dict(value) for key, value in _DEFAULT_CONFIG.items()}
    for key, value in data.items():
        if isinstance(value, dict):
            merged.setdefault(key, {}).update(value)
        else:
            merged[key] = value
    return merged


_CONFIG = _load_constants_config()


PACKAGE_NAME = _CONFIG["package"].get("name", _DEFAULT_CONFIG["package"]["name"])
PACKAGE_VERSION = str(
    _CONFIG["package"].get("version", _DEFAULT_CONFIG["package"]["version"])
)


# Seeding
SEED_MIN_VALUE = int(_CONFIG["seeding"]["min_value"])
SEED_MAX_VALUE = int(_CONFIG["seeding"]["max_value"])
SEED_HASH_ALGORITHM = str(_CONFIG["seeding"]["hash_algorithm"])


# Discrete MDP engine
PROBABILITY_TOLERANCE = float(_CONFIG["discrete"]["probability_tolerance"])
STATE_DTYPE = np.int64


# Env defaults
DEFAULT_REWARD_RANGE = (-float("inf"), float("inf"))
RENDER_MODE_HUMAN = "human"
RENDER_MODE_ANSI = "ansi"


# Goal-conditioned observation keys
OBSERVATION_KEY = "observation"
ACHIEVED_GOAL_KEY = "achieved_goal"
DESIRED_GOAL_KEY = "desired_goal"
GOAL_ENV_REQUIRED_KEYS = (OBSERVATION_KEY, ACHIEVED_GOAL_KEY, DESIRED_GOAL_KEY)


# Spaces
DEFAULT_BOX_DTYPE = np.float32
DISCRETE_DTYPE = np.int64
BOUNDED_MANNERS = ("below", "above", "both")


# Info keys
INFO_PROBABILITY_KEY = "probability"
INFO_TRUNCATED_KEY = "TimeLimit.truncated"


# Testing
DEFAULT_TEST_SEEDS = list(_CONFIG["testing"].get("default_seeds", [0]))


__all__ = [
    "CONFIG_PATH",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "SEED_MIN_VALUE",
    "SEED_MAX_VALUE",
    "SEED_HASH_ALGORITHM",
    "PROBABILITY_TOLERANCE",
    "STATE_DTYPE",
    "DEFAULT_REWARD_RANGE",
    "RENDER_MODE_HUMAN",
    "RENDER_MODE_ANSI",
    "OBSERVATION_KEY",
    "ACHIEVED_GOAL_KEY",
    "DESIRED_GOAL_KEY",
    "GOAL_ENV_REQUIRED_KEYS",
    "DEFAULT_BOX_DTYPE",
    "DISCRETE_DTYPE",
    "BOUNDED_MANNERS",
    "INFO_PROBABILITY_KEY",
    "INFO_TRUNCATED_KEY",
    "DEFAULT_TEST_SEEDS",
]
