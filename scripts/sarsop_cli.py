#!/usr/bin/env python3
"""
Command-line front end for solving, simulating, evaluating and querying
SARSOP policies.

Examples:
    python -m scripts.sarsop_cli solve tiger.pomdpx --policy-file tiger.policy --precision 0.01
    python -m scripts.sarsop_cli query tiger.policy --belief 0.5,0.5
    python -m scripts.sarsop_cli evaluate tiger.pomdpx tiger.policy --sim-len 100 --sim-num 1000
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from pysarsop import (
    PolicyGraphGenerator,
    SarsopError,
    SarsopEvaluator,
    SarsopSimulator,
    SarsopSolver,
    load_policy,
)
from pysarsop.config import Config
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)


def parse_belief(text: str) -> List[float]:
    """Parse a comma-separated belief such as '0.3,0.7'."""
    try:
        return [float(x) for x in text.split(",") if x.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid belief: {text!r}") from None


def _set_options(args: argparse.Namespace, names: List[str]) -> Dict[str, object]:
    """Collect the options the user actually gave."""
    options = {}
    for name in names:
        value = getattr(args, name, None)
        if value is not None and value is not False:
            options[name] = value
    return options


def _add_sim_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("model", help="Model file (.pomdp / .pomdpx)")
    p.add_argument("policy", help="Policy file written by pomdpsol")
    p.add_argument("--sim-len", type=int, default=None, help="Steps per simulation")
    p.add_argument("--sim-num", type=int, default=None, help="Number of simulations")
    p.add_argument("--srand", type=int, default=None, help="Random seed")
    p.add_argument("--output-file", type=str, default=None, help="Results file")
    p.add_argument("--fast", action="store_true", help="Use the fast .pomdp parser")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run SARSOP tools and query policies")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="Run pomdpsol")
    p.add_argument("model", help="Model file (.pomdp / .pomdpx)")
    p.add_argument("--policy-file", type=str, default=Config.DEFAULT_POLICY_FILE,
                   help="Output policy file")
    p.add_argument("--fast", action="store_true", help="Use the fast .pomdp parser")
    p.add_argument("--randomization", action="store_true",
                   help="Turn on randomization for the sampling algorithm")
    p.add_argument("--precision", type=float, default=None,
                   help=f"Target precision (solver default {Config.DEFAULT_PRECISION})")
    p.add_argument("--timeout", type=float, default=None, help="[sec] Time limit")
    p.add_argument("--memory", type=float, default=None, help="[MB] Memory limit")
    p.add_argument("--trial-improvement-factor", type=float, default=None,
                   help=f"Trial improvement factor "
                        f"(solver default {Config.DEFAULT_TRIAL_IMPROVEMENT_FACTOR})")
    p.add_argument("--policy-interval", type=float, default=None,
                   help="[sec] Interval between intermediate policy write-outs")
    p.add_argument("--momdp", action="store_true",
                   help="Model has mixed observability; require obsValue tags in the policy")

    _add_sim_args(sub.add_parser("simulate", help="Run pomdpsim"))

    p = sub.add_parser("evaluate", help="Run pomdpeval")
    _add_sim_args(p)
    p.add_argument("--memory", type=float, default=None, help="[MB] Memory limit")

    p = sub.add_parser("polgraph", help="Run polgraph")
    p.add_argument("model", help="Model file (.pomdp / .pomdpx)")
    p.add_argument("policy", help="Policy file written by pomdpsol")
    p.add_argument("--graph-file", type=str, default=Config.DEFAULT_GRAPH_FILE,
                   help="Output DOT file")
    p.add_argument("--graph-max-depth", type=int, default=None)
    p.add_argument("--graph-max-branch", type=int, default=None)
    p.add_argument("--graph-min-prob", type=float, default=None)
    p.add_argument("--fast", action="store_true", help="Use the fast .pomdp parser")

    p = sub.add_parser("query", help="Print action and value for a belief")
    p.add_argument("policy", help="Policy file written by pomdpsol")
    p.add_argument("--belief", type=parse_belief, required=True,
                   help="Comma-separated belief, e.g. 0.3,0.7")
    p.add_argument("--observed-state", type=int, default=None,
                   help="Zero-based observable state (MOMDP policies)")

    return parser


def run(args: argparse.Namespace) -> Dict[str, object]:
    if args.command == "solve":
        options = _set_options(args, [
            "fast", "randomization", "precision", "timeout", "memory",
            "trial_improvement_factor", "policy_interval",
        ])
        policy = SarsopSolver(options).solve(args.model, args.policy_file, observable=args.momdp)
        return {"policy_file": str(policy.policy_file), "n_vectors": len(policy.vectors())}

    if args.command in ("simulate", "evaluate"):
        names = ["sim_len", "sim_num", "srand", "output_file", "fast"]
        if args.command == "evaluate":
            tool = SarsopEvaluator(_set_options(args, names + ["memory"]))
            result = tool.evaluate(args.model, args.policy)
        else:
            tool = SarsopSimulator(_set_options(args, names))
            result = tool.simulate(args.model, args.policy)
        return {"returncode": result.returncode, "stdout": result.stdout}

    if args.command == "polgraph":
        options = _set_options(args, [
            "fast", "graph_max_depth", "graph_max_branch", "graph_min_prob",
        ])
        graph = PolicyGraphGenerator(options).polgraph(args.model, args.policy, args.graph_file)
        return {"graph_file": str(graph)}

    policy = load_policy(args.policy)
    selection = policy.selection(args.belief, args.observed_state)
    return {"action": selection.action, "value": selection.value}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        result = run(args)
    except (SarsopError, ValidationError, FileNotFoundError) as exc:
        logger.error(str(exc))
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
