"""
External process orchestration for pomdpsol, pomdpsim, pomdpeval and polgraph.
"""

from pysarsop.process.runner import ProcessResult, build_command, run_command
from pysarsop.process.tools import (
    SarsopSolver,
    SarsopSimulator,
    SarsopEvaluator,
    PolicyGraphGenerator,
)

__all__ = [
    "ProcessResult",
    "build_command",
    "run_command",
    "SarsopSolver",
    "SarsopSimulator",
    "SarsopEvaluator",
    "PolicyGraphGenerator",
]
