"""
Finite MDP engine driven by an explicit transition table.

A :class:`DiscreteEnv` is fully described by:

- ``nS``: number of states
- ``nA``: number of actions
- ``P``: transitions, indexed ``P[s][a] == [(probability, next_state, reward, done), ...]``
  (nested sequences or mappings keyed by int)
- ``isd``: initial state distribution, a probability vector of length ``nS``

Both the initial state and every transition outcome are drawn by inverse-CDF
categorical sampling from the environment's own seeded generator, so the same
seed and the same action sequence always reproduce the same trajectory.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union, cast

import numpy as np

from ..core.constants import (
    INFO_PROBABILITY_KEY,
    PROBABILITY_TOLERANCE,
    RENDER_MODE_ANSI,
)
from ..core.env import Env
from ..core.types import Step, Transition, as_observation_array
from ..spaces import Discrete
from ..utils.exceptions import StateError, ValidationError
from ..utils.seeding import SeedType, np_random

__all__ = ["DiscreteEnv", "categorical_sample", "TransitionTable"]

logger = logging.getLogger(__name__)

OutcomeList = Sequence[Sequence[Any]]
TransitionTable = Union[
    Sequence[Union[Sequence[OutcomeList], Mapping[int, OutcomeList]]],
    Mapping[int, Union[Sequence[OutcomeList], Mapping[int, OutcomeList]]],
]


def categorical_sample(
    prob_n: Union[Sequence[float], np.ndarray], rng: np.random.Generator
) -> int:
    """Sample an index from a categorical distribution.

    Draws one uniform variate ``u`` and returns the first index whose
    cumulative probability is strictly greater than ``u``.
    """
    prob_n = np.asarray(prob_n, dtype=np.float64)
    csprob_n = np.cumsum(prob_n)
    hits = csprob_n > rng.random()
    if not hits.any():
        # cumulative sum fell short of 1 by rounding; take the last reachable outcome
        return int(np.flatnonzero(prob_n > 0)[-1])
    return int(hits.argmax())


def _lookup(table: Any, key: int, what: str) -> Any:
    try:
        return table[key]
    except (KeyError, IndexError, TypeError) as exc:
        raise ValidationError(
            f"Transition table is missing {what}",
            parameter_name="P",
            parameter_value=what,
        ) from exc


def _parse_outcomes(
    outcomes: Any, state: int, action: int, nS: int
) -> List[Transition]:
    where = f"P[{state}][{action}]"
    if isinstance(outcomes, (str, bytes)) or not isinstance(
        outcomes, (Sequence, np.ndarray)
    ):
        raise ValidationError(
            f"{where} must be a sequence of (probability, next_state, reward, done)",
            parameter_name="P",
            parameter_value=where,
        )
    if len(outcomes) == 0:
        raise ValidationError(
            f"{where} has no outcomes", parameter_name="P", parameter_value=where
        )

    parsed: List[Transition] = []
    for outcome in outcomes:
        try:
            probability, next_state, reward, done = outcome
            if isinstance(probability, (bool, np.bool_)):
                raise TypeError("probability must not be a boolean")
            probability, reward = float(probability), float(reward)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"{where} outcome {outcome!r} is not a "
                "numeric (probability, next_state, reward, done) tuple",
                parameter_name="P",
                parameter_value=outcome,
            ) from exc
        if not np.isfinite(probability) or probability < 0.0:
            raise ValidationError(
                f"{where} has invalid probability {probability}",
                parameter_name="P",
                parameter_value=probability,
            )
        if isinstance(next_state, bool) or not isinstance(
            next_state, (int, np.integer)
        ):
            raise ValidationError(
                f"{where} next_state must be an integer, got {next_state!r}",
                parameter_name="P",
                parameter_value=next_state,
            )
        if not 0 <= int(next_state) < nS:
            raise ValidationError(
                f"{where} next_state {next_state} is outside [0, {nS})",
                parameter_name="P",
                parameter_value=int(next_state),
            )
        if not isinstance(done, (bool, np.bool_)):
            raise ValidationError(
                f"{where} done flag must be a boolean, got {done!r}",
                parameter_name="P",
                parameter_value=done,
                expected_format="bool",
            )
        parsed.append(
            Transition(probability, int(next_state), reward, bool(done))
        )

    total = sum(t.probability for t in parsed)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        raise ValidationError(
            f"{where} probabilities sum to {total}, expected 1",
            parameter_name="P",
            parameter_value=total,
        )
    return parsed


class DiscreteEnv(Env):
    """Finite MDP simulated from an explicit transition table.

    Args:
        nS: Number of states.
        nA: Number of actions.
        P: Transition table, ``P[s][a] -> [(probability, next_state, reward, done), ...]``.
        isd: Initial state distribution of length ``nS``.
        seed: Optional seed for the environment's generator.

    Raises:
        ValidationError: If the table or the initial distribution is malformed.

    Calling :meth:`step` again after an episode has ended, without calling
    :meth:`reset`, raises :class:`StateError`.
    """

    metadata = {"render_modes": [RENDER_MODE_ANSI]}

    def __init__(
        self,
        nS: int,
        nA: int,
        P: TransitionTable,
        isd: Union[Sequence[float], np.ndarray],
        seed: SeedType = None,
    ):
        for name, value in (("nS", nS), ("nA", nA)):
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, np.integer))
                or value <= 0
            ):
                raise ValidationError(
                    f"{name} must be a positive integer, got {value!r}",
                    parameter_name=name,
                    parameter_value=value,
                )
        self.nS = int(nS)
        self.nA = int(nA)
        self.P = P
        self.isd = self._validate_isd(isd, self.nS)
        self._outcomes = self._validate_transitions(P, self.nS, self.nA)
        self._outcome_probs = [
            [np.array([t.probability for t in row]) for row in actions]
            for actions in self._outcomes
        ]

        super().__init__(
            action_space=Discrete(self.nA), observation_space=Discrete(self.nS)
        )

        self.last_action: Optional[int] = None
        self._episode_done = False
        self.seed(seed)
        self.s = categorical_sample(self.isd, self.np_random)

    @staticmethod
    def _validate_isd(
        isd: Union[Sequence[float], np.ndarray], nS: int
    ) -> np.ndarray:
        try:
            vector = np.asarray(isd, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "isd must be a numeric vector",
                parameter_name="isd",
                parameter_value=isd,
            ) from exc
        if vector.shape != (nS,):
            raise ValidationError(
                f"isd must have shape ({nS},), got {vector.shape}",
                parameter_name="isd",
                parameter_value=vector.shape,
                expected_format=f"({nS},)",
            )
        if not np.all(np.isfinite(vector)) or np.any(vector < 0):
            raise ValidationError(
                "isd entries must be finite and non-negative",
                parameter_name="isd",
                parameter_value=vector.tolist(),
            )
        total = float(vector.sum())
        if abs(total - 1.0) > PROBABILITY_TOLERANCE:
            raise ValidationError(
                f"isd sums to {total}, expected 1",
                parameter_name="isd",
                parameter_value=total,
            )
        return vector

    @staticmethod
    def _validate_transitions(
        P: TransitionTable, nS: int, nA: int
    ) -> List[List[List[Transition]]]:
        table: List[List[List[Transition]]] = []
        for state in range(nS):
            row = _lookup(P, state, f"state {state}")
            table.append(
                [
                    _parse_outcomes(
                        _lookup(row, action, f"action {action} of state {state}"),
                        state,
                        action,
                        nS,
                    )
                    for action in range(nA)
                ]
            )
        return table

    def seed(self, seed: SeedType = None) -> List[int]:
        self.np_random, seed_used = np_random(seed)
        return [seed_used]

    def reset(self, options: Optional[Dict[str, Any]] = None) -> np.ndarray:
        self.s = categorical_sample(self.isd, self.np_random)
        self.last_action = None
        self._episode_done = False
        logger.debug("%s reset to state %d", type(self).__name__, self.s)
        return as_observation_array(self.s)

    def step(self, action: Any) -> Step:
        action_space = cast(Discrete, self.action_space)
        if not action_space.contains(action):
            raise ValidationError(
                f"Action {action!r} is not in {action_space}",
                parameter_name="action",
                parameter_value=action,
                expected_format=f"integer in [0, {self.nA})",
            )
        if self._episode_done:
            raise StateError(
                "Cannot call step() on a finished episode; call reset() first",
                current_state="done",
                expected_state="running",
                component_name=type(self).__name__,
            )

        action = int(np.asarray(action).reshape(-1)[0])
        transitions = self._outcomes[self.s][action]
        i = categorical_sample(self._outcome_probs[self.s][action], self.np_random)
        probability, next_state, reward, done = transitions[i]
        self.s = next_state
        self.last_action = action
        self._episode_done = done
        return Step(
            as_observation_array(next_state),
            reward,
            done,
            {INFO_PROBABILITY_KEY: probability},
        )

    def render(self, mode: str = RENDER_MODE_ANSI, **kwargs: Any) -> Any:
        if mode != RENDER_MODE_ANSI:
            return super().render(mode, **kwargs)
        action = "-" if self.last_action is None else str(self.last_action)
        return f"state={self.s} last_action={action}\n"
