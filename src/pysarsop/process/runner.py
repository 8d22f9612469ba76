"""
Blocking invocation of the external SARSOP executables.
"""

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pysarsop.exceptions import SolverProcessError
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a successful external run."""
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str


def build_command(
    executable: PathLike,
    model_path: PathLike,
    target_flag: str,
    target_path: PathLike,
    args: Sequence[str] = (),
) -> List[str]:
    """
    Assemble an argument vector: <exe> <model> <flag> <target> [args...]

    No shell is involved, so paths and values are passed through verbatim.
    """
    return [str(executable), str(model_path), target_flag, str(target_path), *args]


def run_command(argv: Sequence[str], cwd: Optional[PathLike] = None) -> ProcessResult:
    """
    Run one external process and wait for it to exit.

    Args:
        argv: Argument vector, argv[0] is the executable
        cwd: Working directory for the process

    Returns:
        ProcessResult with captured output

    Raises:
        SolverProcessError: On non-zero exit (returncode attached) or when the
            executable cannot be started (returncode None)
    """
    argv = [str(a) for a in argv]
    logger.info(f"Running: {shlex.join(argv)}")

    try:
        completed = subprocess.run(argv, capture_output=True, text=True, cwd=cwd)
    except (FileNotFoundError, PermissionError) as exc:
        raise SolverProcessError(
            None, argv, message=f"Could not start {argv[0]}: {exc}"
        ) from exc

    if completed.stdout:
        logger.debug(f"{argv[0]} stdout:\n{completed.stdout}")
    if completed.stderr:
        logger.debug(f"{argv[0]} stderr:\n{completed.stderr}")

    if completed.returncode != 0:
        logger.error(f"{argv[0]} exited with status {completed.returncode}")
        raise SolverProcessError(completed.returncode, argv, completed.stderr)

    return ProcessResult(
        argv=argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
