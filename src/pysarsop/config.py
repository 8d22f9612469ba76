"""
Configuration management for the SARSOP host layer.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Config:
    """Application configuration settings."""

    # External executables (looked up on PATH unless SARSOP_BIN_DIR is set)
    SARSOP_BIN_DIR: Optional[str] = os.getenv("SARSOP_BIN_DIR") or None
    POMDPSOL: str = os.getenv("SARSOP_POMDPSOL", "pomdpsol")
    POMDPSIM: str = os.getenv("SARSOP_POMDPSIM", "pomdpsim")
    POMDPEVAL: str = os.getenv("SARSOP_POMDPEVAL", "pomdpeval")
    POLGRAPH: str = os.getenv("SARSOP_POLGRAPH", "polgraph")

    # Default file names
    DEFAULT_MODEL_FILE: str = os.getenv("SARSOP_MODEL_FILE", "model.pomdpx")
    DEFAULT_POLICY_FILE: str = os.getenv("SARSOP_POLICY_FILE", "out.policy")
    DEFAULT_GRAPH_FILE: str = os.getenv("SARSOP_GRAPH_FILE", "policy.dot")

    # Solver defaults as documented by pomdpsol, shown in CLI help; pomdpsol
    # applies them itself when the option is left unset
    DEFAULT_PRECISION: float = 1e-3
    DEFAULT_TRIAL_IMPROVEMENT_FACTOR: float = 0.5

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def executable(cls, name: str) -> str:
        """
        Resolve an executable name against SARSOP_BIN_DIR.

        Args:
            name: Bare executable name (e.g. Config.POMDPSOL)

        Returns:
            Path to the executable, or the bare name when no bin dir is set
        """
        if cls.SARSOP_BIN_DIR and not os.path.dirname(name):
            return str(Path(cls.SARSOP_BIN_DIR) / name)
        return name
