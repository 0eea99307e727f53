"""Path depth columns for the report."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

DEPTH_COLUMN_PREFIX = "depth"


def depth_column(index: int) -> str:
    return f"{DEPTH_COLUMN_PREFIX} {index}"


def path_depths(file_path: Union[str, Path], root_path: Union[str, Path]) -> Dict[str, str]:
    """
    Split a file's path, relative to the parent of the analysis root, into depth columns.

    ex) root: /src/aa, file: /src/aa/bb/cc.java
        "depth 1": "aa"
        "depth 2": "bb"
        "depth 3": "cc.java"

    Raises:
        ValueError: If file_path does not lie inside root_path's parent.
    """
    relative_path = Path(file_path).relative_to(Path(root_path).parent)
    return {depth_column(i): part for i, part in enumerate(relative_path.parts, start=1)}
