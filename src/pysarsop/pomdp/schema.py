"""
In-memory tabular POMDP used for belief maintenance.

The solver itself only ever sees a model file on disk; this structure is
what the host keeps around to track beliefs while executing a policy.
"""

from dataclasses import dataclass
from typing import Dict, List, Union
import numpy as np


@dataclass
class POMDP:
    """
    Discrete Partially Observable Markov Decision Process.

    Attributes:
        S: List of state labels (order matches the solver's state indices)
        A: List of action labels (order matches the solver's action indices)
        O: List of observation labels
        T: Transition probabilities T[a][s, s'] = P(s' | s, a)
        Z: Observation probabilities Z[a][s', o] = P(o | s', a)
        R: Reward function R[a][s, s']
        gamma: Discount factor
    """
    S: List[str]
    A: List[str]
    O: List[str]
    T: Dict[str, np.ndarray]  # T[a] is |S| x |S| matrix
    Z: Dict[str, np.ndarray]  # Z[a] is |S| x |O| matrix
    R: Dict[str, np.ndarray]  # R[a] is |S| x |S| matrix
    gamma: float = 0.95

    def __post_init__(self):
        """Validate POMDP structure."""
        n_states = len(self.S)
        n_obs = len(self.O)

        if not 0.0 < self.gamma <= 1.0:
            raise ValueError(f"gamma must be in (0, 1], got {self.gamma}")

        for name, labels in (("S", self.S), ("A", self.A), ("O", self.O)):
            if not labels:
                raise ValueError(f"{name} must not be empty")
            if len(set(labels)) != len(labels):
                raise ValueError(f"{name} contains duplicate labels")

        # coerced copies; the caller's tables are left as passed
        self.T = {a: self._checked(self.T, "T", a, (n_states, n_states), stochastic=True) for a in self.A}
        self.Z = {a: self._checked(self.Z, "Z", a, (n_states, n_obs), stochastic=True) for a in self.A}
        self.R = {a: self._checked(self.R, "R", a, (n_states, n_states), stochastic=False) for a in self.A}

    @staticmethod
    def _checked(table, name, a, shape, stochastic):
        if a not in table:
            raise ValueError(f"Missing {name} matrix for action {a}")
        mat = np.array(table[a], dtype=np.float64)
        if mat.shape != shape:
            raise ValueError(f"{name}[{a}] has shape {mat.shape}, expected {shape}")
        if stochastic:
            if np.any(mat < 0):
                raise ValueError(f"{name}[{a}] contains negative probabilities")
            if not np.allclose(mat.sum(axis=1), 1.0, atol=1e-6):
                raise ValueError(f"{name}[{a}] rows do not sum to 1")
        return mat

    @property
    def n_states(self) -> int:
        return len(self.S)

    def action_label(self, action: Union[int, str]) -> str:
        """
        Resolve an action to its label.

        Args:
            action: Label, or one-based action index as returned by
                SarsopPolicy.action

        Returns:
            Action label
        """
        if isinstance(action, str):
            if action not in self.A:
                raise ValueError(f"Action {action} not in POMDP actions")
            return action
        if isinstance(action, (int, np.integer)) and not isinstance(action, bool):
            if not 1 <= action <= len(self.A):
                raise ValueError(f"Action index {action} out of range 1..{len(self.A)}")
            return self.A[int(action) - 1]
        raise TypeError(f"Unsupported action type: {type(action).__name__}")
