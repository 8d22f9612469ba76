"""Option schemas for the SARSOP command-line tools.

Each field maps to one ``--<key> [<value>]`` flag. Fields left at ``None``
(or ``False`` for flags) are not rendered, so the executable falls back to
its own default.
"""

from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _render(value: Any) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


class ToolOptions(BaseModel):
    """Base model: renders set fields as command-line arguments."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    fast: bool = Field(
        default=False,
        description="Use the fast (but very picky) alternate parser for .pomdp files",
    )

    @classmethod
    def coerce(cls, options: Union["ToolOptions", Mapping[str, Any], None]) -> "ToolOptions":
        """Accept an instance, a plain mapping (wire keys or field names) or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, ToolOptions):
            raise TypeError(f"Expected {cls.__name__}, got {type(options).__name__}")
        return cls.model_validate(dict(options))

    def to_args(self) -> List[str]:
        """
        Render the set options as an argument list.

        Returns:
            e.g. ["--fast", "--precision", "0.01"]
        """
        args: List[str] = []
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None or value is False:
                continue
            key = field.alias or name
            if value is True:
                args.append(f"--{key}")
            else:
                args.extend([f"--{key}", _render(value)])
        return args


class SolverOptions(ToolOptions):
    """Options for pomdpsol."""

    randomization: bool = Field(
        default=False,
        description="Turn on randomization for the sampling algorithm",
    )
    precision: Optional[float] = Field(
        default=None, gt=0,
        description="Run ends when target precision is reached at the initial belief",
    )
    timeout: Optional[float] = Field(
        default=None, gt=0,
        description="[sec] Write out a policy and terminate once running time exceeds this",
    )
    memory: Optional[float] = Field(
        default=None, gt=0,
        description="[MB] Write out a policy and terminate once memory usage exceeds this",
    )
    trial_improvement_factor: Optional[float] = Field(
        default=None, gt=0, alias="trial-improvement-factor",
        description="A trial terminates at a belief when the bound gap is within this "
                    "factor of the current precision at the initial belief",
    )
    policy_interval: Optional[float] = Field(
        default=None, gt=0, alias="policy-interval",
        description="[sec] Interval between intermediate policy write-outs; "
                    "unset means write only at the end",
    )


class SimulatorOptions(ToolOptions):
    """Options for pomdpsim."""

    sim_len: Optional[int] = Field(
        default=None, ge=1, alias="simLen", description="Number of steps per simulation",
    )
    sim_num: Optional[int] = Field(
        default=None, ge=1, alias="simNum", description="Number of simulations to run",
    )
    srand: Optional[int] = Field(default=None, description="Random seed for the simulation")
    output_file: Optional[Path] = Field(
        default=None, alias="output-file",
        description="File the simulation results are written to",
    )


class EvaluatorOptions(SimulatorOptions):
    """Options for pomdpeval."""

    memory: Optional[float] = Field(
        default=None, gt=0,
        description="[MB] Above this, switch to a slower memory-conservative method",
    )


class PolicyGraphOptions(ToolOptions):
    """Options for polgraph."""

    graph_max_depth: Optional[int] = Field(
        default=None, ge=0, alias="graph-max-depth",
        description="Maximum horizon of the generated policy graph",
    )
    graph_max_branch: Optional[int] = Field(
        default=None, ge=1, alias="graph-max-branch",
        description="Maximum number of observation branches per node",
    )
    graph_min_prob: Optional[float] = Field(
        default=None, ge=0, le=1, alias="graph-min-prob",
        description="Branches below this observation probability are pruned",
    )
