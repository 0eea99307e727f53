"""
Base class for report writers.

Each concrete writer only knows how to render rows to a given path; writing to
the default output directory is implemented once here on top of that.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from importlens.exceptions import DirectoryCreationError, EmptyDatasetError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("analysis-results")
DEFAULT_TITLE = "Analysis Result"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

Rows = Sequence[Mapping[str, Optional[str]]]


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text to a sibling temporary file, then move it over path."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding=encoding)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


class ResultWriter(ABC):
    """Renders analysis rows into a persisted report."""

    def __init__(
        self,
        title: str = DEFAULT_TITLE,
        output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR,
    ):
        self.title = title
        self.output_dir = Path(output_dir)

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def get_file_extension(self) -> str:
        """File extension (without dot) used by export_to_default_location."""

    @abstractmethod
    def export(self, rows: Rows, save_path: Union[str, Path]) -> Path:
        """
        Write rows to save_path.

        Raises:
            EmptyDatasetError: If rows is empty
            ExportError: If the file cannot be written
        """

    def export_to_default_location(self, rows: Rows) -> Path:
        """
        Write rows into the output directory as <WriterName>_<yyyyMMdd_HHmmss>.<ext>.

        Raises:
            DirectoryCreationError: If the output directory cannot be created
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(
                f"[{self.name}] Failed to create output directory: {self.output_dir}"
            ) from e

        file_name = "{}_{}.{}".format(
            self.name,
            datetime.now().strftime(TIMESTAMP_FORMAT),
            self.get_file_extension(),
        )
        return self.export(rows, self.output_dir / file_name)

    def _check_rows(self, rows: Rows) -> None:
        if not rows:
            raise EmptyDatasetError(f"[{self.name}] No data to export")

    @staticmethod
    def column_names(rows: Rows) -> List[str]:
        """Insertion-ordered union of the keys of all rows."""
        columns = {}
        for row in rows:
            for key in row:
                columns.setdefault(key, None)
        return list(columns)

    @staticmethod
    def temporary_path(save_path: Path) -> Path:
        return save_path.with_name(save_path.name + ".tmp")
