"""
Exception types raised by the SARSOP host layer.
"""

from typing import Optional, Sequence


class SarsopError(Exception):
    """Base class for all errors raised by pysarsop."""


class FormatError(SarsopError):
    """Policy file is missing, unreadable or not valid policyx."""


class DimensionError(SarsopError, ValueError):
    """Belief length does not match the alpha vector length."""


class DomainError(SarsopError, LookupError):
    """No alpha vector exists for the requested observable state."""


class PolicyEmptyError(SarsopError):
    """The policy holds zero alpha vectors, so no action can be selected."""


class SolverProcessError(SarsopError):
    """
    An external SARSOP executable exited with a non-zero status.

    Attributes:
        returncode: Exit status, or None if the process could not be started
        argv: Command line that was run
        stderr: Captured standard error (may be empty)
    """

    def __init__(
        self,
        returncode: Optional[int],
        argv: Sequence[str],
        stderr: str = "",
        message: Optional[str] = None,
    ):
        self.returncode = returncode
        self.argv = list(argv)
        self.stderr = stderr or ""
        if message is None:
            message = f"{self.argv[0] if self.argv else '<empty>'} exited with status {returncode}"
            tail = self.stderr.strip().splitlines()[-1:] if self.stderr.strip() else []
            if tail:
                message = f"{message}: {tail[0]}"
        super().__init__(message)
