"""
Policy handle: answers action/value queries from a loaded alpha vector set.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union
import numpy as np

from pysarsop.exceptions import FormatError
from pysarsop.policy.alphas import AlphaVectorSet, load_alpha_vectors, write_alpha_vectors
from pysarsop.policy.select import Belief, Selection, action_values, select
from pysarsop.pomdp.belief import DiscreteUpdater
from pysarsop.pomdp.schema import POMDP
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)


class SarsopPolicy:
    """
    Alpha vector policy produced by pomdpsol.

    Actions returned by ``action`` are one-based (solver index + 1).
    ``observed_state`` arguments are zero-based, matching the ``obsValue``
    tags in the policy file, and are only accepted when the policy carries
    such tags (see ``observable``).

    Queries are safe from several threads. ``rebind`` swaps the whole set at
    once, so a query sees either the old or the new vectors, never a mix.
    """

    def __init__(
        self,
        alphas: AlphaVectorSet,
        policy_file: Union[str, Path, None] = None,
        model: Any = None,
    ):
        self._alphas = alphas
        self._lock = threading.Lock()
        self.policy_file: Optional[Path] = Path(policy_file) if policy_file else alphas.source
        self.model = model

    @property
    def observable(self) -> bool:
        return self._alphas.observable

    def selection(self, belief: Belief, observed_state: Optional[int] = None) -> Selection:
        return select(self._alphas, belief, observed_state)

    def action(self, belief: Belief, observed_state: Optional[int] = None) -> int:
        """
        Best action at a belief.

        Args:
            belief: Belief over hidden states, length S (not renormalized)
            observed_state: Zero-based fully observed state (MOMDP policies)

        Returns:
            One-based action index
        """
        return self.selection(belief, observed_state).action

    def value(self, belief: Belief, observed_state: Optional[int] = None) -> float:
        """Value-function estimate (max alpha vector utility) at a belief."""
        return self.selection(belief, observed_state).value

    def action_values(self, belief: Belief, observed_state: Optional[int] = None) -> Dict[int, float]:
        return action_values(self._alphas, belief, observed_state)

    def vectors(self) -> AlphaVectorSet:
        """Read-only view of the vector/action table."""
        return self._alphas

    def alphas(self) -> np.ndarray:
        """Alpha vector matrix, shape (number of vectors, number of states)."""
        return self._alphas.vectors

    def rebind(self, policy_file: Union[str, Path, None] = None) -> AlphaVectorSet:
        """
        Reload the alpha vectors from disk and replace the current set.

        Parsing happens before the swap, so on FormatError the handle keeps
        serving the previous set.

        Args:
            policy_file: New policy file (defaults to the current one)

        Returns:
            The newly loaded set
        """
        path = Path(policy_file) if policy_file else self.policy_file
        if path is None:
            raise FormatError("No policy file to load")

        alphas = load_alpha_vectors(path)
        with self._lock:
            self._alphas = alphas
            self.policy_file = path
        logger.info(f"Policy rebound to {path}")
        return alphas

    def updater(self) -> DiscreteUpdater:
        """Belief updater bound to this policy's model."""
        if not isinstance(self.model, POMDP):
            raise TypeError(
                "Belief updating needs an in-memory POMDP model; "
                f"this policy is bound to {type(self.model).__name__}"
            )
        return DiscreteUpdater(self.model)

    def export(self, path: Union[str, Path]) -> Path:
        return write_alpha_vectors(self._alphas, path)

    def __repr__(self) -> str:
        return f"SarsopPolicy(policy_file={self.policy_file!s}, alphas={self._alphas!r})"


def load_policy(policy_file: Union[str, Path], model: Any = None) -> SarsopPolicy:
    """
    Load an existing policy file without running the solver.

    Args:
        policy_file: policyx file written by pomdpsol
        model: Model the policy was solved for (POMDP enables updater())

    Returns:
        Ready-to-query SarsopPolicy

    Raises:
        FormatError: If the file is missing or malformed
    """
    return SarsopPolicy(load_alpha_vectors(policy_file), policy_file, model=model)
