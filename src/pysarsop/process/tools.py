"""
Solver, simulator, evaluator and policy-graph wrappers around the SARSOP
executables.

    solve:     pomdpsol  <model> --output <policy> [options]
    simulate:  pomdpsim  <model> --policy-file <policy> [options]
    evaluate:  pomdpeval <model> --policy-file <policy> [options]
    polgraph:  polgraph  <model> --policy-file <policy> --policy-graph <dot> [options]
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Type, Union

from pysarsop.config import Config
from pysarsop.exceptions import FormatError
from pysarsop.policy.alphas import AlphaVectorSet, load_alpha_vectors
from pysarsop.policy.handle import SarsopPolicy
from pysarsop.pomdp.files import ModelFile, ModelWriter
from pysarsop.process.runner import ProcessResult, build_command, run_command
from pysarsop.schemas.options import (
    EvaluatorOptions,
    PolicyGraphOptions,
    SimulatorOptions,
    SolverOptions,
    ToolOptions,
)
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)

ModelLike = Union[ModelFile, str, Path, Any]
PolicyLike = Union[SarsopPolicy, str, Path]


def resolve_model(
    model: ModelLike,
    writer: Optional[ModelWriter] = None,
    observable: bool = False,
) -> Tuple[ModelFile, Any]:
    """
    Turn a model argument into a file on disk.

    ``observable`` marks a path or written model as a MOMDP; a ModelFile
    keeps its own flag.

    Returns:
        (model file, model object to bind to a policy)
    """
    if isinstance(model, ModelFile):
        return model, model
    if isinstance(model, (str, Path)):
        model_file = ModelFile(Path(model), observable=observable)
        return model_file, model_file
    if writer is None:
        raise TypeError(
            f"Cannot pass a {type(model).__name__} to SARSOP without a model writer"
        )
    return ModelFile.from_model(model, writer, observable=observable), model


def check_observable(model_file: ModelFile, alphas: AlphaVectorSet) -> None:
    """A MOMDP model must produce a policy tagged with observable states."""
    if model_file.observable and not alphas.observable:
        raise FormatError(
            f"{alphas.source}: MOMDP model {model_file} produced a policy "
            "without obsValue tags"
        )


def resolve_policy_file(policy: PolicyLike) -> Path:
    if isinstance(policy, SarsopPolicy):
        if policy.policy_file is None:
            raise ValueError("Policy has no backing policy file")
        return policy.policy_file
    return Path(policy)


class _Tool:
    """Shared construction: options schema plus executable name."""

    options_class: Type[ToolOptions] = ToolOptions
    default_executable: str = ""

    def __init__(
        self,
        options: Union[ToolOptions, Mapping[str, Any], None] = None,
        executable: Optional[str] = None,
        **option_values: Any,
    ):
        if option_values:
            if isinstance(options, ToolOptions):
                base = options.model_dump(exclude_unset=True)
            else:
                base = dict(options or {})
            options = {**base, **option_values}
        self.options = self.options_class.coerce(options)
        self.executable = executable or Config.executable(self.default_executable)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options.to_args()})"


class SarsopSolver(_Tool):
    """
    Runs pomdpsol and loads the resulting policy.

    Example:
        >>> solver = SarsopSolver(precision=0.01, timeout=60)
        >>> policy = solver.solve("tiger.pomdpx", "tiger.policy")  # doctest: +SKIP
    """

    options_class = SolverOptions
    default_executable = Config.POMDPSOL

    def solve(
        self,
        model: ModelLike,
        policy_file: Union[str, Path, None] = None,
        writer: Optional[ModelWriter] = None,
        policy: Optional[SarsopPolicy] = None,
        observable: bool = False,
    ) -> SarsopPolicy:
        """
        Solve a model and return a loaded policy.

        Args:
            model: ModelFile, path to a model file, or a model object to be
                written with ``writer``
            policy_file: Where pomdpsol writes the policy (defaults to the
                policy's own file, then Config.DEFAULT_POLICY_FILE)
            writer: Model writer for in-memory models
            policy: Existing handle to reload in place instead of creating one
            observable: Treat a path or written model as a MOMDP

        Returns:
            SarsopPolicy ready for queries

        Raises:
            SolverProcessError: If pomdpsol exits non-zero
            FormatError: If the policy file it wrote cannot be parsed, or a
                MOMDP model produced untagged vectors
        """
        model_file, bound_model = resolve_model(model, writer, observable)

        if policy_file is None and policy is not None:
            policy_file = policy.policy_file
        policy_path = Path(policy_file or Config.DEFAULT_POLICY_FILE)

        argv = build_command(
            self.executable, model_file.path, "--output", policy_path, self.options.to_args()
        )
        run_command(argv)

        alphas = load_alpha_vectors(policy_path)
        check_observable(model_file, alphas)

        if policy is not None:
            policy.rebind(policy_path)
            return policy

        return SarsopPolicy(alphas, policy_path, model=bound_model)


class SarsopSimulator(_Tool):
    """Runs pomdpsim on a solved policy."""

    options_class = SimulatorOptions
    default_executable = Config.POMDPSIM

    def simulate(self, model: ModelLike, policy: PolicyLike, writer: Optional[ModelWriter] = None) -> ProcessResult:
        model_file, _ = resolve_model(model, writer)
        argv = build_command(
            self.executable, model_file.path, "--policy-file",
            resolve_policy_file(policy), self.options.to_args(),
        )
        return run_command(argv)


class SarsopEvaluator(_Tool):
    """Runs pomdpeval on a solved policy; summary statistics are in stdout."""

    options_class = EvaluatorOptions
    default_executable = Config.POMDPEVAL

    def evaluate(self, model: ModelLike, policy: PolicyLike, writer: Optional[ModelWriter] = None) -> ProcessResult:
        model_file, _ = resolve_model(model, writer)
        argv = build_command(
            self.executable, model_file.path, "--policy-file",
            resolve_policy_file(policy), self.options.to_args(),
        )
        return run_command(argv)


class PolicyGraphGenerator(_Tool):
    """Runs polgraph to export a policy as a DOT graph."""

    options_class = PolicyGraphOptions
    default_executable = Config.POLGRAPH

    def polgraph(
        self,
        model: ModelLike,
        policy: PolicyLike,
        graph_file: Union[str, Path, None] = None,
        writer: Optional[ModelWriter] = None,
    ) -> Path:
        """
        Generate a policy graph.

        Returns:
            Path of the DOT file written by polgraph
        """
        model_file, _ = resolve_model(model, writer)
        graph_path = Path(graph_file or Config.DEFAULT_GRAPH_FILE)
        argv = build_command(
            self.executable, model_file.path, "--policy-file",
            resolve_policy_file(policy),
            ["--policy-graph", str(graph_path), *self.options.to_args()],
        )
        run_command(argv)
        logger.info(f"Exported policy graph to {graph_path}")
        return graph_path
