"""
Alpha vector policies: storage, utility evaluation, action selection.
"""

from pysarsop.policy.alphas import AlphaVectorSet, load_alpha_vectors, write_alpha_vectors
from pysarsop.policy.utility import belief_utilities
from pysarsop.policy.select import (
    ACTION_OFFSET,
    Selection,
    select,
    select_action,
    select_value,
    action_values,
)
from pysarsop.policy.handle import SarsopPolicy, load_policy

__all__ = [
    "AlphaVectorSet",
    "load_alpha_vectors",
    "write_alpha_vectors",
    "belief_utilities",
    "ACTION_OFFSET",
    "Selection",
    "select",
    "select_action",
    "select_value",
    "action_values",
    "SarsopPolicy",
    "load_policy",
]
