"""Ready-made wrappers built on the core wrapper family."""

from .time_limit import TimeLimit
from .transform import TransformObservation, TransformReward

__all__ = ["TimeLimit", "TransformObservation", "TransformReward"]
