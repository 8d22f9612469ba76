"""
Utility modules for the SARSOP host layer.
"""

from .logging_utils import setup_logger, get_logger
from .validation import as_belief_array, validate_belief

__all__ = [
    "setup_logger",
    "get_logger",
    "as_belief_array",
    "validate_belief",
]
