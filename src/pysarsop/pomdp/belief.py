"""
Belief maintenance for executing a SARSOP policy.
"""

from typing import Mapping, Union
import numpy as np

from pysarsop.pomdp.schema import POMDP
from pysarsop.utils.logging_utils import get_logger
from pysarsop.utils.validation import as_belief_array, validate_belief

logger = get_logger(__name__)


class DiscreteUpdater:
    """
    Exact Bayes filter over the discrete state space of a POMDP.

    Beliefs are plain numpy vectors in the order of ``pomdp.S`` so they can be
    passed straight to ``SarsopPolicy.action``.
    """

    def __init__(self, pomdp: POMDP):
        self.pomdp = pomdp

    def uniform_belief(self) -> np.ndarray:
        n = self.pomdp.n_states
        return np.full(n, 1.0 / n)

    def initialize_belief(self, dist: Mapping[str, float]) -> np.ndarray:
        """
        Build a belief vector from a state-label distribution.

        Args:
            dist: Mapping state label -> probability; missing states get 0

        Returns:
            Belief vector in state order
        """
        unknown = set(dist) - set(self.pomdp.S)
        if unknown:
            raise ValueError(f"Unknown states in initial distribution: {sorted(unknown)}")

        belief = np.array([float(dist.get(s, 0.0)) for s in self.pomdp.S])
        validate_belief(belief, self.pomdp.n_states)
        return belief

    def update(
        self,
        belief: np.ndarray,
        action: Union[int, str],
        observation: str,
    ) -> np.ndarray:
        """
        Update belief state: b' ∝ Z[a][:,o] * (T[a].T @ b)

        Args:
            belief: Current belief vector (|S|,)
            action: One-based action index (as returned by the policy) or label
            observation: Observation label

        Returns:
            Updated belief vector (normalized)
        """
        pomdp = self.pomdp
        a = pomdp.action_label(action)

        if observation not in pomdp.O:
            raise ValueError(f"Observation {observation} not in POMDP observations")

        b = as_belief_array(belief)
        validate_belief(b, pomdp.n_states)

        o_idx = pomdp.O.index(observation)

        # Predict, then weight by observation likelihood
        predicted_belief = pomdp.T[a].T @ b
        new_belief = pomdp.Z[a][:, o_idx] * predicted_belief

        norm = new_belief.sum()
        if norm <= 0.0:
            raise ValueError(
                f"Observation {observation} has zero probability after action {a}"
            )

        logger.debug(f"Belief update: action={a}, observation={observation}")
        return new_belief / norm
