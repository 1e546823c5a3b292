"""Space type system: the closed set of Discrete, Box and Dict domains."""

from .box import Box
from .dict import Dict
from .discrete import Discrete
from .space import Space

__all__ = ["Space", "Box", "Discrete", "Dict"]
