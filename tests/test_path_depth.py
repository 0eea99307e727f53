"""
Tests for path depth columns.
"""

from pathlib import Path

import pytest

from importlens.analysis.path_depth import path_depths


class TestPathDepths:
    """Tests for path_depths."""

    def test_segments_relative_to_root_parent(self):
        """The root directory itself is the first depth column."""
        depths = path_depths(Path("/src/a/b/c.java"), Path("/src/a"))

        assert depths == {"depth 1": "a", "depth 2": "b", "depth 3": "c.java"}
        assert list(depths) == ["depth 1", "depth 2", "depth 3"]

    def test_single_file_root(self):
        """A file analysed on its own has only its file name as a depth."""
        depths = path_depths(Path("/src/a/Main.java"), Path("/src/a/Main.java"))

        assert depths == {"depth 1": "Main.java"}

    def test_file_outside_root_parent(self):
        with pytest.raises(ValueError):
            path_depths(Path("/elsewhere/X.java"), Path("/src/a"))
