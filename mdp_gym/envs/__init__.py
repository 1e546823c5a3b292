"""
Bundled environments.

``DiscreteEnv`` is the generic tabular engine; ``CorridorEnv`` and
``BitFlipEnv`` are small ready-made tasks, registered here as
``Corridor-v0`` and ``BitFlip-v0``.
"""

from ..registration import register
from .bit_flip import BitFlipEnv
from .corridor import CorridorEnv
from .discrete import DiscreteEnv, categorical_sample

__all__ = ["BitFlipEnv", "CorridorEnv", "DiscreteEnv", "categorical_sample"]

register(
    "Corridor-v0",
    entry_point="mdp_gym.envs.corridor:CorridorEnv",
    max_episode_steps=100,
)
register(
    "BitFlip-v0",
    entry_point="mdp_gym.envs.bit_flip:BitFlipEnv",
    max_episode_steps=8,
)
