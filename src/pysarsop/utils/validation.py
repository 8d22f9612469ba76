"""
Validation helpers for beliefs and probability vectors.

The policy query path deliberately does not call these: a belief that does
not sum to one still produces an answer there. They are used where a belief
is constructed (see pysarsop.pomdp.belief).
"""

from typing import Optional, Sequence, Union
import numpy as np

from pysarsop.exceptions import DimensionError
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)


def as_belief_array(belief: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """
    Convert a belief to a 1-D float64 array without copying when possible.

    Raises:
        DimensionError: If the belief is not one-dimensional
    """
    b = np.asarray(belief, dtype=np.float64)
    if b.ndim != 1:
        raise DimensionError(f"Belief must be one-dimensional, got shape {b.shape}")
    return b


def validate_belief(
    belief: Union[Sequence[float], np.ndarray],
    n_states: Optional[int] = None,
    atol: float = 1e-6,
) -> bool:
    """
    Validate that a belief is a probability distribution.

    Args:
        belief: Belief vector
        n_states: Expected number of states (skipped if None)
        atol: Tolerance on the sum-to-one check

    Returns:
        True if validation passes

    Raises:
        DimensionError: If the length does not match n_states
        ValueError: If entries are negative, non-finite or do not sum to 1
    """
    b = as_belief_array(belief)

    if n_states is not None and len(b) != n_states:
        raise DimensionError(f"Belief has {len(b)} entries, expected {n_states}")

    if not np.all(np.isfinite(b)):
        raise ValueError("Belief contains non-finite entries")

    if np.any(b < 0):
        raise ValueError("Belief contains negative entries")

    total = b.sum()
    if not np.isclose(total, 1.0, atol=atol):
        raise ValueError(f"Belief sums to {total:.6f}, expected 1")

    logger.debug(f"Belief validation passed: {len(b)} states")
    return True
