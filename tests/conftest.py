"""Shared fixtures for importlens tests."""

from pathlib import Path

import pytest

from importlens.analysis.parsing import JavaSourceParser

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
SAMPLE_PROJECT = FIXTURES_DIR / "sample_project"


@pytest.fixture
def java_parser():
    return JavaSourceParser()


@pytest.fixture
def sample_project():
    """Read-only Java tree: two valid files, one malformed file, one text file."""
    return SAMPLE_PROJECT


@pytest.fixture
def write_java(tmp_path):
    """Write a Java file below tmp_path and return its path."""

    def _write(relative_path: str, source: str) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
