"""
Model file descriptors passed to the SARSOP executables.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Union

from pysarsop.config import Config
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)

ModelWriter = Callable[[Any, str], None]


@dataclass(frozen=True)
class ModelFile:
    """
    Reference to a .pomdp / .pomdpx model file on disk.

    Attributes:
        path: Location of the model file
        observable: True for a mixed-observability model (MOMDP); the solver
            then tags every alpha vector with an observable-state value
    """
    path: Path
    observable: bool = False

    def __post_init__(self):
        path = Path(self.path)
        if not path.is_file():
            raise FileNotFoundError(f"Model file not found: {path}")
        object.__setattr__(self, "path", path)

    @classmethod
    def from_model(
        cls,
        model: Any,
        writer: ModelWriter,
        path: Union[str, Path, None] = None,
        observable: bool = False,
    ) -> "ModelFile":
        """
        Write an in-memory model to disk with an external writer.

        Args:
            model: Model object understood by the writer
            writer: Callable writer(model, path) producing the model file
            path: Output path (defaults to Config.DEFAULT_MODEL_FILE)
            observable: Whether the written model is a MOMDP

        Returns:
            Descriptor for the written file
        """
        path = Path(path or Config.DEFAULT_MODEL_FILE)
        logger.info(f"Generating model file: {path}")
        writer(model, str(path))
        return cls(path, observable=observable)

    def __str__(self) -> str:
        return str(self.path)
