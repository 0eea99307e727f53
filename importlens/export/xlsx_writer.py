"""Excel report writer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import xlsxwriter
from xlsxwriter.exceptions import XlsxWriterException

from importlens.exceptions import ExportError

from .base import ResultWriter, Rows

logger = logging.getLogger(__name__)

SHEET_NAME = "result"


class XlsxResultWriter(ResultWriter):
    """
    Writes rows to a single-sheet workbook.

    Layout:
      row 0   title band, merged across all columns when there is more than one
      row 1   header (column names in insertion order)
      row 2+  one line per data row; cells containing a newline wrap
    """

    def get_file_extension(self) -> str:
        return "xlsx"

    def export(self, rows: Rows, save_path: Union[str, Path]) -> Path:
        self._check_rows(rows)
        save_path = Path(save_path)
        tmp_path = self.temporary_path(save_path)
        columns = self.column_names(rows)

        try:
            workbook = xlsxwriter.Workbook(str(tmp_path))
            try:
                self._write_sheet(workbook, columns, rows)
            finally:
                workbook.close()
            tmp_path.replace(save_path)
        except (OSError, XlsxWriterException) as e:
            tmp_path.unlink(missing_ok=True)
            raise ExportError(f"[{self.name}] Failed to save Excel file: {save_path}") from e

        logger.info(f"Saved Excel file: {save_path}")
        return save_path

    def _write_sheet(self, workbook, columns, rows: Rows) -> None:
        sheet = workbook.add_worksheet(SHEET_NAME)

        default_format = workbook.add_format({"text_wrap": False, "valign": "top"})
        wrap_format = workbook.add_format({"text_wrap": True, "valign": "top"})
        title_format = workbook.add_format(
            {
                "bold": True,
                "font_size": 14,
                "text_wrap": True,
                "align": "center",
                "valign": "vcenter",
                "bg_color": "#C0C0C0",
                "pattern": 1,
            }
        )

        if len(columns) > 1:
            sheet.merge_range(0, 0, 0, len(columns) - 1, self.title, title_format)
        else:
            sheet.write_string(0, 0, self.title, title_format)

        for col_index, column in enumerate(columns):
            sheet.write_string(1, col_index, column, default_format)

        for row_index, row in enumerate(rows, start=2):
            for col_index, column in enumerate(columns):
                value = row.get(column) or ""
                cell_format = wrap_format if "\n" in value else default_format
                sheet.write_string(row_index, col_index, value, cell_format)

        sheet.autofit()
