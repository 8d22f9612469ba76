"""
Tests for option schemas and their command-line rendering.
"""

import pytest
from pydantic import ValidationError

from pysarsop import EvaluatorOptions, PolicyGraphOptions, SimulatorOptions, SolverOptions


def test_solver_renders_only_set_options():
    """Test that fast + precision render and every other option is omitted."""
    args = SolverOptions(fast=True, precision=0.01).to_args()

    assert "--fast" in args
    i = args.index("--precision")
    assert args[i + 1] == "0.01"
    assert len(args) == 3


def test_default_options_render_nothing():
    assert SolverOptions().to_args() == []
    assert PolicyGraphOptions().to_args() == []


def test_flags_have_no_value():
    args = SolverOptions(fast=True, randomization=True).to_args()

    assert args == ["--fast", "--randomization"]


def test_wire_keys_and_field_names_both_accepted():
    """Test that dashed command-line keys and snake_case names are equivalent."""
    from_wire = SolverOptions.coerce({"trial-improvement-factor": 0.3, "policy-interval": 60})
    from_names = SolverOptions(trial_improvement_factor=0.3, policy_interval=60)

    assert from_wire == from_names
    args = from_wire.to_args()
    assert args[args.index("--trial-improvement-factor") + 1] == "0.3"
    assert "--policy-interval" in args


def test_all_solver_options():
    args = SolverOptions(
        timeout=120, memory=512, precision=1e-4, trial_improvement_factor=0.5,
    ).to_args()

    assert args[args.index("--timeout") + 1] == "120.0"
    assert args[args.index("--memory") + 1] == "512.0"
    assert args[args.index("--precision") + 1] == "0.0001"
    assert args[args.index("--trial-improvement-factor") + 1] == "0.5"


def test_simulator_options():
    """Test simLen/simNum rendering, seed 0 kept, output path passed through."""
    opts = SimulatorOptions(sim_len=100, sim_num=5, srand=0, output_file="runs/sim out.txt")
    args = opts.to_args()

    assert args[args.index("--simLen") + 1] == "100"
    assert args[args.index("--simNum") + 1] == "5"
    assert args[args.index("--srand") + 1] == "0"
    assert args[args.index("--output-file") + 1] == "runs/sim out.txt"
    assert "--fast" not in args


def test_simulator_defaults_render_nothing():
    """Test that unset simulation lengths fall back to the executable's defaults."""
    assert SimulatorOptions().to_args() == []
    assert EvaluatorOptions().to_args() == []
    assert SimulatorOptions(srand=1).to_args() == ["--srand", "1"]

    args = EvaluatorOptions(sim_num=4).to_args()
    assert args == ["--simNum", "4"]


def test_simulation_lengths_must_be_positive():
    with pytest.raises(ValidationError):
        SimulatorOptions(sim_len=0)
    with pytest.raises(ValidationError):
        EvaluatorOptions(sim_num=-1)


def test_evaluator_adds_memory():
    args = EvaluatorOptions.coerce({"simLen": 10, "simNum": 2, "memory": 256}).to_args()

    assert args[args.index("--memory") + 1] == "256.0"
    with pytest.raises(ValidationError):
        SimulatorOptions(sim_len=10, sim_num=2, memory=256)


def test_policy_graph_options():
    args = PolicyGraphOptions(graph_max_depth=3, graph_min_prob=0.05).to_args()

    assert args == ["--graph-max-depth", "3", "--graph-min-prob", "0.05"]


@pytest.mark.parametrize("kwargs", [
    {"precision": -1.0},
    {"timeout": 0},
    {"not_an_option": 1},
])
def test_invalid_solver_options_rejected(kwargs):
    with pytest.raises(ValidationError):
        SolverOptions(**kwargs)


def test_options_are_immutable():
    opts = SolverOptions(fast=True)

    with pytest.raises(ValidationError):
        opts.fast = False


def test_coerce_rejects_other_tool_options():
    with pytest.raises(TypeError):
        SolverOptions.coerce(PolicyGraphOptions())
