"""
Host-side control layer for the SARSOP point-based POMDP solver.

Solve a model with the external ``pomdpsol`` binary, load the resulting
alpha vector policy and query it in process::

    from pysarsop import SarsopSolver

    policy = SarsopSolver(precision=0.01).solve("tiger.pomdpx", "tiger.policy")
    policy.action([0.5, 0.5])   # one-based action index
    policy.value([0.5, 0.5])
"""

from pysarsop.exceptions import (
    SarsopError,
    FormatError,
    DimensionError,
    DomainError,
    PolicyEmptyError,
    SolverProcessError,
)
from pysarsop.policy import (
    ACTION_OFFSET,
    AlphaVectorSet,
    Selection,
    SarsopPolicy,
    load_alpha_vectors,
    load_policy,
    write_alpha_vectors,
    belief_utilities,
    select,
)
from pysarsop.pomdp import POMDP, DiscreteUpdater, ModelFile
from pysarsop.process import (
    ProcessResult,
    SarsopSolver,
    SarsopSimulator,
    SarsopEvaluator,
    PolicyGraphGenerator,
)
from pysarsop.schemas import (
    SolverOptions,
    SimulatorOptions,
    EvaluatorOptions,
    PolicyGraphOptions,
)

__version__ = "0.1.0"

__all__ = [
    "SarsopError",
    "FormatError",
    "DimensionError",
    "DomainError",
    "PolicyEmptyError",
    "SolverProcessError",
    "ACTION_OFFSET",
    "AlphaVectorSet",
    "Selection",
    "SarsopPolicy",
    "load_alpha_vectors",
    "load_policy",
    "write_alpha_vectors",
    "belief_utilities",
    "select",
    "POMDP",
    "DiscreteUpdater",
    "ModelFile",
    "ProcessResult",
    "SarsopSolver",
    "SarsopSimulator",
    "SarsopEvaluator",
    "PolicyGraphGenerator",
    "SolverOptions",
    "SimulatorOptions",
    "EvaluatorOptions",
    "PolicyGraphOptions",
]
