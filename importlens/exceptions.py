"""
Exception hierarchy for importlens.

Run-level and writer-level failures are fatal and propagate to the caller.
Per-file failures (ParseError and read errors) are recovered by the aggregator,
which drops the offending file and keeps going.
"""

from pathlib import Path
from typing import Optional, Union


class ImportLensError(Exception):
    """Base class for all importlens errors."""

    pass


class PathNotFoundError(ImportLensError):
    """Raised when the analysis root does not exist."""

    def __init__(self, path: Union[str, Path], context: Optional[str] = None):
        self.path = Path(path)
        self.context = context
        prefix = f"[{context}] " if context else ""
        super().__init__(f"{prefix}Path not found: {self.path}")


class ParseError(ImportLensError):
    """Raised when a source file cannot be parsed into a syntax tree."""

    def __init__(
        self,
        file_path: Union[str, Path],
        message: str,
        line_number: Optional[int] = None,
    ):
        self.file_path = str(file_path)
        self.line_number = line_number
        location = f"{self.file_path}:{line_number}" if line_number else self.file_path
        super().__init__(f"{location}: {message}")


class DirectoryCreationError(ImportLensError):
    """Raised when the default output directory cannot be created."""

    pass


class EmptyDatasetError(ImportLensError):
    """Raised when a writer is asked to export zero rows."""

    pass


class ExportError(ImportLensError):
    """Raised when a report artifact cannot be written."""

    pass


class ConfigurationError(ImportLensError):
    """Raised when configuration validation fails."""

    pass
