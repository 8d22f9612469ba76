"""
Alpha vector storage and the policyx reader/writer.

pomdpsol writes its value function as XML::

    <Policy version="0.1" type="value" model="...">
      <AlphaVector vectorLength="2" numObsValue="1" numVectors="3">
        <Vector action="0" obsValue="0">-81.59 3.01 </Vector>
        ...
      </AlphaVector>
    </Policy>

``SparseVector`` elements holding ``<Entry>index value</Entry>`` children are
accepted as well. Action indices are stored zero-based, exactly as written.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union
import xml.etree.ElementTree as ET

import numpy as np

from pysarsop.exceptions import FormatError
from pysarsop.utils.logging_utils import get_logger

logger = get_logger(__name__)

# largest index or length that fits the int64 tables
MAX_INDEX = int(np.iinfo(np.int64).max)


@dataclass(frozen=True, eq=False)
class AlphaVectorSet:
    """
    Immutable table of alpha vectors and their actions.

    Attributes:
        vectors: (N, S) coefficient matrix, one row per alpha vector
        actions: (N,) zero-based action index of each vector
        observable_states: (N,) observable-state tag of each vector, or None
            for a plain POMDP policy
        source: File the set was parsed from, if any
    """
    vectors: np.ndarray
    actions: np.ndarray
    observable_states: Optional[np.ndarray] = None
    source: Optional[Path] = None

    def __post_init__(self):
        vectors = np.array(self.vectors, dtype=np.float64)
        actions = np.array(self.actions, dtype=np.int64).reshape(-1)

        if vectors.ndim != 2:
            raise ValueError(f"vectors must be a 2-D array, got shape {vectors.shape}")
        if len(actions) != len(vectors):
            raise ValueError(f"{len(vectors)} vectors but {len(actions)} actions")
        if np.any(actions < 0):
            raise ValueError("Action indices must be non-negative")

        tags = None
        if self.observable_states is not None:
            tags = np.array(self.observable_states, dtype=np.int64).reshape(-1)
            if len(tags) != len(vectors):
                raise ValueError(f"{len(vectors)} vectors but {len(tags)} observable states")
            if np.any(tags < 0):
                raise ValueError("Observable-state indices must be non-negative")
            tags.setflags(write=False)

        vectors.setflags(write=False)
        actions.setflags(write=False)

        object.__setattr__(self, "vectors", vectors)
        object.__setattr__(self, "actions", actions)
        object.__setattr__(self, "observable_states", tags)
        if self.source is not None:
            object.__setattr__(self, "source", Path(self.source))

    @classmethod
    def from_rows(
        cls,
        vectors: Sequence[Sequence[float]],
        actions: Sequence[int],
        observable_states: Optional[Sequence[int]] = None,
        n_states: Optional[int] = None,
    ) -> "AlphaVectorSet":
        """
        Build a set from Python sequences.

        Args:
            vectors: One coefficient sequence per alpha vector
            actions: Zero-based action per vector
            observable_states: Optional observable-state tag per vector
            n_states: Vector length; required when vectors is empty

        Returns:
            Validated, immutable AlphaVectorSet
        """
        rows = [list(v) for v in vectors]
        if not rows:
            matrix = np.empty((0, n_states or 0), dtype=np.float64)
        else:
            width = len(rows[0]) if n_states is None else n_states
            for i, row in enumerate(rows):
                if len(row) != width:
                    raise ValueError(f"Vector {i} has {len(row)} entries, expected {width}")
            matrix = np.array(rows, dtype=np.float64)
        return cls(matrix, actions, observable_states)

    @property
    def n_states(self) -> int:
        return int(self.vectors.shape[1])

    @property
    def observable(self) -> bool:
        """True if every vector carries an observable-state tag."""
        return self.observable_states is not None

    def __len__(self) -> int:
        return int(self.vectors.shape[0])

    def __iter__(self) -> Iterator[Tuple[np.ndarray, int, Optional[int]]]:
        for i in range(len(self)):
            tag = None if self.observable_states is None else int(self.observable_states[i])
            yield self.vectors[i], int(self.actions[i]), tag

    def __repr__(self) -> str:
        return (
            f"AlphaVectorSet(n_vectors={len(self)}, n_states={self.n_states}, "
            f"observable={self.observable})"
        )


def _local(tag: str) -> str:
    # strip "{namespace}" prefix
    return tag.rsplit("}", 1)[-1]


def _index_attr(elem: ET.Element, name: str, path: Path, required: bool) -> Optional[int]:
    raw = elem.get(name)
    if raw is None:
        if required:
            raise FormatError(f"{path}: <{_local(elem.tag)}> is missing the '{name}' attribute")
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        raise FormatError(f"{path}: '{name}' must be an integer, got {raw!r}") from None
    if value < 0:
        raise FormatError(f"{path}: '{name}' must be non-negative, got {value}")
    if value > MAX_INDEX:
        raise FormatError(f"{path}: '{name}' is out of range, got {value}")
    return value


def _dense_values(elem: ET.Element, path: Path) -> List[float]:
    try:
        return [float(tok) for tok in (elem.text or "").split()]
    except ValueError as exc:
        raise FormatError(f"{path}: non-numeric alpha vector entry ({exc})") from exc


def _sparse_values(elem: ET.Element, n_states: Optional[int], path: Path) -> List[float]:
    if n_states is None:
        raise FormatError(f"{path}: <SparseVector> requires a declared vectorLength")
    try:
        values = [0.0] * n_states
    except (MemoryError, OverflowError) as exc:
        raise FormatError(f"{path}: vectorLength {n_states} is too large") from exc
    for entry in elem:
        if _local(entry.tag) != "Entry":
            raise FormatError(f"{path}: unexpected <{_local(entry.tag)}> inside <SparseVector>")
        parts = (entry.text or "").split()
        if len(parts) != 2:
            raise FormatError(f"{path}: <Entry> must hold 'index value', got {entry.text!r}")
        try:
            j, v = int(parts[0]), float(parts[1])
        except ValueError as exc:
            raise FormatError(f"{path}: malformed <Entry> {entry.text!r}") from exc
        if not 0 <= j < n_states:
            raise FormatError(f"{path}: <Entry> index {j} outside 0..{n_states - 1}")
        values[j] = v
    return values


def load_alpha_vectors(path: Union[str, Path]) -> AlphaVectorSet:
    """
    Parse a policyx file produced by pomdpsol.

    Args:
        path: Policy file path

    Returns:
        AlphaVectorSet holding every vector in file order

    Raises:
        FormatError: If the file is missing, not well-formed XML, not a policyx
            document, or holds inconsistent vector lengths or bad indices
    """
    path = Path(path)
    if not path.is_file():
        raise FormatError(f"Policy file not found: {path}")

    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise FormatError(f"Could not parse policy file {path}: {exc}") from exc

    if _local(root.tag) != "Policy":
        raise FormatError(f"{path}: root element is <{_local(root.tag)}>, expected <Policy>")

    blocks = [child for child in root if _local(child.tag) == "AlphaVector"]
    if len(blocks) != 1:
        raise FormatError(f"{path}: expected one <AlphaVector> element, found {len(blocks)}")
    block = blocks[0]

    declared_length = _index_attr(block, "vectorLength", path, required=False)
    declared_count = _index_attr(block, "numVectors", path, required=False)

    n_states = declared_length
    rows: List[List[float]] = []
    actions: List[int] = []
    tags: List[Optional[int]] = []

    for elem in block:
        kind = _local(elem.tag)
        if kind == "Vector":
            values = _dense_values(elem, path)
        elif kind == "SparseVector":
            values = _sparse_values(elem, n_states, path)
        else:
            raise FormatError(f"{path}: unexpected <{kind}> inside <AlphaVector>")

        if n_states is None:
            n_states = len(values)
        if len(values) != n_states:
            raise FormatError(
                f"{path}: vector {len(rows)} has {len(values)} entries, expected {n_states}"
            )

        rows.append(values)
        actions.append(_index_attr(elem, "action", path, required=True))
        tags.append(_index_attr(elem, "obsValue", path, required=False))

    tagged = [t is not None for t in tags]
    if any(tagged) and not all(tagged):
        raise FormatError(f"{path}: 'obsValue' present on some vectors but not others")

    if declared_count is not None and declared_count != len(rows):
        logger.warning(
            f"{path}: numVectors={declared_count} but {len(rows)} vectors found"
        )

    try:
        matrix = (
            np.array(rows, dtype=np.float64) if rows
            else np.empty((0, n_states or 0), dtype=np.float64)
        )
    except (ValueError, MemoryError) as exc:
        raise FormatError(f"{path}: cannot allocate vectors of length {n_states} ({exc})") from exc
    alpha_set = AlphaVectorSet(
        matrix,
        np.array(actions, dtype=np.int64),
        np.array(tags, dtype=np.int64) if rows and all(tagged) else None,
        source=path,
    )

    logger.info(
        f"Loaded {len(alpha_set)} alpha vectors of length {alpha_set.n_states} "
        f"from {path} (observable={alpha_set.observable})"
    )
    return alpha_set


def write_alpha_vectors(alpha_set: AlphaVectorSet, path: Union[str, Path]) -> Path:
    """
    Write an AlphaVectorSet as a dense policyx file.

    Args:
        alpha_set: Set to serialize
        path: Output file

    Returns:
        Path written
    """
    path = Path(path)
    root = ET.Element("Policy", {"version": "0.1", "type": "value"})

    n_obs = 1
    if alpha_set.observable and len(alpha_set):
        n_obs = int(alpha_set.observable_states.max()) + 1

    block = ET.SubElement(root, "AlphaVector", {
        "vectorLength": str(alpha_set.n_states),
        "numObsValue": str(n_obs),
        "numVectors": str(len(alpha_set)),
    })
    for vector, action, tag in alpha_set:
        attrs = {"action": str(action)}
        if tag is not None:
            attrs["obsValue"] = str(tag)
        elem = ET.SubElement(block, "Vector", attrs)
        elem.text = " ".join(repr(float(v)) for v in vector) + " "

    path.parent.mkdir(parents=True, exist_ok=True)
    ET.ElementTree(root).write(path, encoding="utf-8", xml_declaration=True)
    logger.info(f"Wrote {len(alpha_set)} alpha vectors to {path}")
    return path
