"""
Expected utility of a belief under each alpha vector.
"""

from typing import Optional, Sequence, Union
import numpy as np

from pysarsop.exceptions import DimensionError
from pysarsop.policy.alphas import AlphaVectorSet
from pysarsop.utils.validation import as_belief_array


def belief_utilities(
    alpha_set: AlphaVectorSet,
    belief: Union[Sequence[float], np.ndarray],
    rows: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Compute utility[i] = sum_j vectors[i, j] * belief[j].

    The belief is not checked for normalization; NaN and Inf entries
    propagate into the utilities.

    Args:
        alpha_set: Alpha vectors (N x S)
        belief: Belief over the S hidden states
        rows: Optional integer index array restricting the vectors evaluated

    Returns:
        Utilities, shape (N,) or (len(rows),)

    Raises:
        DimensionError: If the belief length differs from S
    """
    b = as_belief_array(belief)
    if len(b) != alpha_set.n_states:
        raise DimensionError(
            f"Belief has {len(b)} entries but alpha vectors have length {alpha_set.n_states}"
        )

    vectors = alpha_set.vectors if rows is None else alpha_set.vectors[rows]
    with np.errstate(all="ignore"):
        return vectors @ b
