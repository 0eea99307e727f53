"""
Tests for the report writers.
"""

import json
import re
import zipfile
from xml.etree import ElementTree

import pytest

from importlens.exceptions import DirectoryCreationError, EmptyDatasetError, ExportError
from importlens.export import (
    JsonResultWriter,
    ResultWriter,
    XlsxResultWriter,
    available_formats,
    get_writer,
)


NS = "{http://schemas.openxmlformats.org/spreadsheetml/2006/main}"

ROWS = [
    {"depth 1": "pkg", "depth 2": "A.java", "depth 3": None, "used": "x.y.X", "unused": "x.y.Y", "all": "x.y.X\nx.y.Y"},
    {"depth 1": "pkg", "depth 2": "sub", "depth 3": "B.java", "used": "z.Z", "unused": "", "all": "z.Z"},
]


def read_xlsx(path):
    with zipfile.ZipFile(path) as archive:
        return {
            "workbook": archive.read("xl/workbook.xml").decode("utf-8"),
            "sheet": archive.read("xl/worksheets/sheet1.xml").decode("utf-8"),
            "strings": archive.read("xl/sharedStrings.xml").decode("utf-8"),
        }


def cell_wraps(path, text):
    """Whether the cell holding the shared string text has wrapText set."""
    with zipfile.ZipFile(path) as archive:
        strings = ElementTree.fromstring(archive.read("xl/sharedStrings.xml"))
        sheet = ElementTree.fromstring(archive.read("xl/worksheets/sheet1.xml"))
        styles = ElementTree.fromstring(archive.read("xl/styles.xml"))

    shared = ["".join(si.itertext()) for si in strings.findall(f"{NS}si")]
    index = str(shared.index(text))
    cell = next(
        c for c in sheet.iter(f"{NS}c") if c.get("t") == "s" and c.findtext(f"{NS}v") == index
    )
    xf = styles.find(f"{NS}cellXfs").findall(f"{NS}xf")[int(cell.get("s", "0"))]
    alignment = xf.find(f"{NS}alignment")
    return alignment is not None and alignment.get("wrapText") == "1"


class TestXlsxResultWriter:
    """Tests for the Excel writer."""

    def test_export_layout(self, tmp_path):
        """Title band, header and data rows are written to the 'result' sheet."""
        writer = XlsxResultWriter(title="Import Analysis Results")
        path = writer.export(ROWS, tmp_path / "report.xlsx")

        content = read_xlsx(path)
        assert 'name="result"' in content["workbook"]
        assert '<mergeCell ref="A1:F1"/>' in content["sheet"]
        for text in ("Import Analysis Results", "depth 3", "unused", "A.java", "z.Z", "x.y.Y"):
            assert f">{text}<" in content["strings"]

    def test_multiline_cells_wrap(self, tmp_path):
        """Only cells holding a line break get a wrap-enabled style."""
        path = XlsxResultWriter().export(ROWS, tmp_path / "report.xlsx")

        assert cell_wraps(path, "x.y.X\nx.y.Y")
        assert not cell_wraps(path, "z.Z")
        assert not cell_wraps(path, "A.java")

    def test_single_column_has_no_merged_title(self, tmp_path):
        path = XlsxResultWriter().export([{"used": "a.B"}], tmp_path / "one.xlsx")

        assert "mergeCell" not in read_xlsx(path)["sheet"]

    def test_no_temporary_file_left(self, tmp_path):
        XlsxResultWriter().export(ROWS, tmp_path / "report.xlsx")

        assert [p.name for p in tmp_path.iterdir()] == ["report.xlsx"]

    def test_empty_rows_rejected(self, tmp_path):
        with pytest.raises(EmptyDatasetError):
            XlsxResultWriter().export([], tmp_path / "empty.xlsx")

        assert not (tmp_path / "empty.xlsx").exists()

    def test_extension(self):
        assert XlsxResultWriter().get_file_extension() == "xlsx"


class TestJsonResultWriter:
    """Tests for the JSON writer."""

    def test_export(self, tmp_path):
        path = JsonResultWriter(title="Imports").export(ROWS, tmp_path / "report.json")

        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["title"] == "Imports"
        assert payload["columns"] == ["depth 1", "depth 2", "depth 3", "used", "unused", "all"]
        assert payload["rows"][0]["depth 3"] == ""
        assert payload["rows"][0]["all"] == "x.y.X\nx.y.Y"

    def test_unwritable_destination(self, tmp_path):
        with pytest.raises(ExportError):
            JsonResultWriter().export(ROWS, tmp_path / "missing" / "report.json")

        assert not (tmp_path / "missing").exists()

    def test_empty_rows_rejected(self, tmp_path):
        with pytest.raises(EmptyDatasetError) as exc_info:
            JsonResultWriter().export([], tmp_path / "empty.json")

        assert "[JsonResultWriter]" in str(exc_info.value)


class TestExportToDefaultLocation:
    """Tests for the shared default-location routine."""

    @pytest.mark.parametrize("writer_class", [XlsxResultWriter, JsonResultWriter])
    def test_timestamped_file_name(self, tmp_path, writer_class):
        output_dir = tmp_path / "analysis-results" / "nested"
        writer = writer_class(output_dir=output_dir)

        path = writer.export_to_default_location(ROWS)

        assert path.parent == output_dir
        pattern = rf"{writer_class.__name__}_\d{{8}}_\d{{6}}\.{writer.get_file_extension()}"
        assert re.fullmatch(pattern, path.name)
        assert path.exists()

    def test_directory_creation_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = JsonResultWriter(output_dir=blocker / "results")

        with pytest.raises(DirectoryCreationError) as exc_info:
            writer.export_to_default_location(ROWS)

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_empty_rows_fail_after_directory_creation(self, tmp_path):
        writer = XlsxResultWriter(output_dir=tmp_path / "out")

        with pytest.raises(EmptyDatasetError):
            writer.export_to_default_location([])

        assert list((tmp_path / "out").iterdir()) == []


class TestWriterRegistry:
    def test_available_formats(self):
        assert available_formats() == ["json", "xlsx"]

    def test_get_writer(self, tmp_path):
        writer = get_writer("XLSX", title="T", output_dir=tmp_path)

        assert isinstance(writer, XlsxResultWriter)
        assert writer.title == "T"
        assert writer.output_dir == tmp_path

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_writer("csv")

    def test_column_names_union_in_insertion_order(self):
        rows = [{"a": "1", "b": "2"}, {"a": "3", "c": "4"}]

        assert ResultWriter.column_names(rows) == ["a", "b", "c"]
