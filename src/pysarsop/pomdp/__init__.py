"""
Model-side types: tabular POMDP, belief updater and model file descriptors.
"""

from pysarsop.pomdp.schema import POMDP
from pysarsop.pomdp.belief import DiscreteUpdater
from pysarsop.pomdp.files import ModelFile, ModelWriter

__all__ = [
    "POMDP",
    "DiscreteUpdater",
    "ModelFile",
    "ModelWriter",
]
