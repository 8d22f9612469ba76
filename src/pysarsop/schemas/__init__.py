"""Option schemas for the external SARSOP executables."""

from .options import (
    ToolOptions,
    SolverOptions,
    SimulatorOptions,
    EvaluatorOptions,
    PolicyGraphOptions,
)

__all__ = [
    "ToolOptions",
    "SolverOptions",
    "SimulatorOptions",
    "EvaluatorOptions",
    "PolicyGraphOptions",
]
