"""
One-dimensional slippery corridor built on :class:`DiscreteEnv`.

Cells are numbered ``0 .. length - 1``. Both end cells are terminal: reaching
the right end pays ``1.0``, falling off the left end pays nothing. The agent
starts uniformly on an interior cell.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from ..core.constants import RENDER_MODE_ANSI
from ..utils.exceptions import ValidationError
from ..utils.seeding import SeedType
from .discrete import DiscreteEnv

__all__ = ["CorridorEnv", "LEFT", "RIGHT"]

LEFT = 0
RIGHT = 1

_ACTION_NAMES = {LEFT: "Left", RIGHT: "Right"}


class CorridorEnv(DiscreteEnv):
    """Slippery corridor with a rewarding right end.

    Args:
        length: Number of cells, at least 3 so that one interior cell exists.
        slip: Probability of moving opposite to the chosen direction.
        seed: Optional seed for the environment's generator.
    """

    def __init__(self, length: int = 5, slip: float = 0.1, seed: SeedType = None):
        if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
            raise ValidationError(
                f"length must be an integer, got {length!r}",
                parameter_name="length",
                parameter_value=length,
            )
        if length < 3:
            raise ValidationError(
                f"length must be at least 3, got {length}",
                parameter_name="length",
                parameter_value=length,
                expected_format="integer >= 3",
            )
        try:
            slip = float(slip)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"slip must be a number, got {slip!r}",
                parameter_name="slip",
                parameter_value=slip,
            ) from exc
        if not 0.0 <= slip <= 1.0:
            raise ValidationError(
                f"slip must lie in [0, 1], got {slip}",
                parameter_name="slip",
                parameter_value=slip,
                expected_format="[0, 1]",
            )

        self.length = int(length)
        self.slip = slip

        nS = self.length
        P: Dict[int, Dict[int, List[Tuple[float, int, float, bool]]]] = {}
        for s in range(nS):
            if self._is_terminal(s):
                P[s] = {a: [(1.0, s, 0.0, True)] for a in (LEFT, RIGHT)}
                continue
            P[s] = {
                LEFT: self._moves(s, intended=-1),
                RIGHT: self._moves(s, intended=+1),
            }

        isd = np.zeros(nS)
        isd[1:-1] = 1.0 / (nS - 2)
        super().__init__(nS, 2, P, isd, seed=seed)

    def _is_terminal(self, s: int) -> bool:
        return s == 0 or s == self.length - 1

    def _outcome(self, probability: float, s: int) -> Tuple[float, int, float, bool]:
        reward = 1.0 if s == self.length - 1 else 0.0
        return (probability, s, reward, self._is_terminal(s))

    def _moves(self, s: int, intended: int) -> List[Tuple[float, int, float, bool]]:
        outcomes = []
        if self.slip < 1.0:
            outcomes.append(self._outcome(1.0 - self.slip, s + intended))
        if self.slip > 0.0:
            outcomes.append(self._outcome(self.slip, s - intended))
        return outcomes

    def render(self, mode: str = RENDER_MODE_ANSI, **kwargs: Any) -> Any:
        if mode != RENDER_MODE_ANSI:
            return super().render(mode, **kwargs)
        cells = ["X"] + ["."] * (self.length - 2) + ["G"]
        cells[self.s] = "A"
        line = "".join(cells)
        if self.last_action is not None:
            line += f"  ({_ACTION_NAMES[self.last_action]})"
        return line + "\n"
