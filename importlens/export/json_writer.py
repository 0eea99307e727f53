"""JSON report writer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from importlens.exceptions import ExportError

from .base import ResultWriter, Rows, atomic_write_text

logger = logging.getLogger(__name__)


class JsonResultWriter(ResultWriter):
    """
    Writes rows as a JSON document:

        {"title": ..., "columns": [...], "rows": [{column: value, ...}, ...]}

    Absent cells are written as empty strings, like in the Excel report.
    """

    def __init__(self, *args, indent: int = 2, **kwargs):
        super().__init__(*args, **kwargs)
        self.indent = indent

    def get_file_extension(self) -> str:
        return "json"

    def export(self, rows: Rows, save_path: Union[str, Path]) -> Path:
        self._check_rows(rows)
        save_path = Path(save_path)
        columns = self.column_names(rows)
        payload = {
            "title": self.title,
            "columns": columns,
            "rows": [{column: row.get(column) or "" for column in columns} for row in rows],
        }

        try:
            atomic_write_text(save_path, json.dumps(payload, indent=self.indent, ensure_ascii=False))
        except OSError as e:
            raise ExportError(f"[{self.name}] Failed to save JSON file: {save_path}") from e

        logger.info(f"Saved JSON file: {save_path}")
        return save_path
