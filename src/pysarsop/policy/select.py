"""
Action selection over an alpha vector set.

Actions are reported one-based: the stored (solver) index plus
``ACTION_OFFSET``. Observable states are matched zero-based, exactly as the
solver writes them in ``obsValue``.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union
import numpy as np

from pysarsop.exceptions import DomainError, PolicyEmptyError
from pysarsop.policy.alphas import AlphaVectorSet
from pysarsop.policy.utility import belief_utilities

ACTION_OFFSET = 1

Belief = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class Selection:
    """
    Result of a policy lookup.

    Attributes:
        action: One-based action index (raw_action + ACTION_OFFSET)
        raw_action: Zero-based action index as stored in the policy file
        value: Maximum utility, the value-function estimate at the belief
        index: Row of the winning alpha vector in load order
    """
    action: int
    raw_action: int
    value: float
    index: int


def _candidate_rows(alpha_set: AlphaVectorSet, observed_state: Optional[int]) -> Optional[np.ndarray]:
    if observed_state is None:
        return None
    if not alpha_set.observable:
        raise DomainError("Policy has no observable-state tags; query it without observed_state")
    if isinstance(observed_state, bool) or not isinstance(observed_state, (int, np.integer)):
        raise TypeError(f"observed_state must be an integer, got {type(observed_state).__name__}")

    rows = np.flatnonzero(alpha_set.observable_states == observed_state)
    if rows.size == 0:
        raise DomainError(f"No alpha vector for observable state {observed_state}")
    return rows


def select(
    alpha_set: AlphaVectorSet,
    belief: Belief,
    observed_state: Optional[int] = None,
) -> Selection:
    """
    Pick the alpha vector with maximum utility at a belief.

    Ties go to the vector loaded first.

    Args:
        alpha_set: Alpha vectors
        belief: Belief over hidden states
        observed_state: Zero-based observable state; restricts candidates to
            vectors tagged with it

    Returns:
        Selection for the winning vector

    Raises:
        PolicyEmptyError: If the set holds no vectors
        DomainError: If no vector carries observed_state
        DimensionError: If the belief length is wrong
    """
    if len(alpha_set) == 0:
        raise PolicyEmptyError("Policy contains no alpha vectors")

    rows = _candidate_rows(alpha_set, observed_state)
    utilities = belief_utilities(alpha_set, belief, rows)

    best = int(np.argmax(utilities))
    index = best if rows is None else int(rows[best])
    raw_action = int(alpha_set.actions[index])

    return Selection(
        action=raw_action + ACTION_OFFSET,
        raw_action=raw_action,
        value=float(utilities[best]),
        index=index,
    )


def select_action(alpha_set: AlphaVectorSet, belief: Belief, observed_state: Optional[int] = None) -> int:
    return select(alpha_set, belief, observed_state).action


def select_value(alpha_set: AlphaVectorSet, belief: Belief, observed_state: Optional[int] = None) -> float:
    return select(alpha_set, belief, observed_state).value


def action_values(
    alpha_set: AlphaVectorSet,
    belief: Belief,
    observed_state: Optional[int] = None,
) -> Dict[int, float]:
    """
    Best utility per action at a belief.

    Returns:
        Mapping one-based action -> max utility over that action's vectors,
        for actions that own at least one candidate vector
    """
    if len(alpha_set) == 0:
        raise PolicyEmptyError("Policy contains no alpha vectors")

    rows = _candidate_rows(alpha_set, observed_state)
    utilities = belief_utilities(alpha_set, belief, rows)
    actions = alpha_set.actions if rows is None else alpha_set.actions[rows]

    values: Dict[int, float] = {}
    for a, u in zip(actions, utilities):
        key = int(a) + ACTION_OFFSET
        if key not in values or u > values[key]:
            values[key] = float(u)
    return values
