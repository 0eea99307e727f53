"""
Tests for the command-line interface.
"""

import json
import shutil

import pytest

from importlens.cli.main import create_parser, main
from importlens.config import ConfigurationManager


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(ConfigurationManager, "DEFAULT_CONFIG_PATHS", ["importlens.yaml"])
    for name in ("IMPORTLENS_FORMAT", "IMPORTLENS_OUTPUT_DIR", "IMPORTLENS_EXTENSIONS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path, sample_project):
    target = tmp_path / "project"
    shutil.copytree(sample_project, target)
    return target


class TestAnalyzeCommand:
    def test_json_report(self, project, tmp_path, capsys):
        out = tmp_path / "imports.json"

        code = main(["--no-rich", "analyze", str(project), "--format", "json", "--output", str(out)])

        assert code == 0
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert len(payload["rows"]) == 2
        printed = capsys.readouterr().out
        assert "Files analysed: 2" in printed
        assert "java.util.Objects" in printed
        assert "Skipped files" in printed

    def test_default_location(self, project, tmp_path):
        code = main(["--no-rich", "analyze", str(project), "--output-dir", "reports"])

        assert code == 0
        reports = list((tmp_path / "reports").iterdir())
        assert len(reports) == 1
        assert reports[0].name.startswith("XlsxResultWriter_")
        assert reports[0].suffix == ".xlsx"

    def test_no_export(self, project, tmp_path):
        code = main(["--no-rich", "analyze", str(project), "--no-export"])

        assert code == 0
        assert not (tmp_path / "analysis-results").exists()

    def test_summary_file(self, project, tmp_path):
        """--summary saves rows, skipped files and statistics as JSON."""
        summary = tmp_path / "summary.json"

        code = main(["--no-rich", "analyze", str(project), "--no-export", "--summary", str(summary)])

        assert code == 0
        payload = json.loads(summary.read_text(encoding="utf-8"))
        assert payload["root_path"] == str(project.resolve())
        assert payload["columns"][-3:] == ["used", "unused", "all"]
        assert len(payload["rows"]) == 2
        assert [e["stage"] for e in payload["errors"]] == ["parse"]
        assert payload["errors"][0]["file_path"].endswith("Broken.java")
        assert payload["stats"]["files_scanned"] == 3
        assert payload["stats"]["files_analyzed"] == 2

    def test_summary_file_unwritable(self, project, tmp_path, capsys):
        target = tmp_path / "missing" / "summary.json"

        code = main(["--no-rich", "analyze", str(project), "--no-export", "--summary", str(target)])

        assert code == 1
        assert "Failed to save summary file" in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        code = main(["--no-rich", "analyze", str(tmp_path / "missing")])

        assert code == 1
        assert "Path not found" in capsys.readouterr().out

    def test_nothing_to_report(self, tmp_path, capsys):
        (tmp_path / "empty").mkdir()

        code = main(["--no-rich", "analyze", str(tmp_path / "empty"), "--format", "json"])

        assert code == 1
        assert "No data to export" in capsys.readouterr().out

    def test_invalid_worker_count(self, project, capsys):
        code = main(["--no-rich", "analyze", str(project), "--workers", "0"])

        assert code == 1
        assert "max_workers" in capsys.readouterr().out


class TestConfigCommand:
    def test_init_json(self, tmp_path):
        assert main(["config", "init", "--output", "custom.json", "--format", "json"]) == 0

        data = json.loads((tmp_path / "custom.json").read_text(encoding="utf-8"))
        assert data["output"]["format"] == "xlsx"

    def test_init_and_show(self, tmp_path, capsys):
        assert main(["config", "init", "--output", "importlens.yaml"]) == 0
        assert (tmp_path / "importlens.yaml").exists()

        assert main(["--no-rich", "config", "show"]) == 0
        assert "Format: xlsx" in capsys.readouterr().out


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: importlens" in capsys.readouterr().out

    def test_analyze_arguments(self):
        args = create_parser().parse_args(["analyze", "src", "--ext", "java", "JAVA", "--timeout", "1.5"])

        assert args.path == "src"
        assert args.ext == ["java", "JAVA"]
        assert args.timeout == 1.5
