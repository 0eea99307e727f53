"""
Tests for source file discovery.
"""

import pytest

from importlens.analysis.utils.file_discovery import (
    discover_source_files,
    has_allowed_extension,
    normalize_extensions,
)
from importlens.exceptions import PathNotFoundError


class TestDiscoverSourceFiles:
    """Tests for discover_source_files."""

    def test_sorted_java_files(self, sample_project):
        files = discover_source_files(sample_project)

        assert [f.relative_to(sample_project).as_posix() for f in files] == [
            "com/acme/App.java",
            "com/acme/Broken.java",
            "com/acme/util/Helper.java",
        ]

    def test_extension_match_is_case_insensitive(self, tmp_path):
        (tmp_path / "Upper.JAVA").write_text("class Upper {}")
        (tmp_path / "notes.txt").write_text("")

        files = discover_source_files(tmp_path, extensions=["Java"])

        assert [f.name for f in files] == ["Upper.JAVA"]

    def test_single_file_root(self, sample_project):
        app = sample_project / "com" / "acme" / "App.java"

        assert discover_source_files(app) == [app]

    def test_single_file_with_other_extension(self, sample_project):
        assert discover_source_files(sample_project / "com" / "acme" / "notes.txt") == []

    def test_excluded_directories(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "Hidden.java").write_text("class Hidden {}")
        (tmp_path / "Visible.java").write_text("class Visible {}")

        files = discover_source_files(tmp_path)

        assert [f.name for f in files] == ["Visible.java"]

    def test_missing_root_raises_with_context(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc_info:
            discover_source_files(tmp_path / "missing", context="Caller")

        assert str(exc_info.value).startswith("[Caller]")
        assert exc_info.value.path == tmp_path / "missing"

    def test_empty_directory(self, tmp_path):
        assert discover_source_files(tmp_path) == []


class TestExtensionHelpers:
    def test_normalize_extensions(self):
        assert normalize_extensions(["java", ".JAVA", " kt ", ""]) == [".java", ".kt"]

    def test_has_allowed_extension(self, tmp_path):
        assert has_allowed_extension(tmp_path / "A.Java", ["java"])
        assert not has_allowed_extension(tmp_path / "A.javax", ["java"])
