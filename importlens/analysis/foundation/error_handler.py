"""
Standardized error handling for importlens analysis.

Per-file failures are recoverable: the failing stage is turned into an
AnalysisError record and the file is dropped from the report. Anything that
is not listed as recoverable propagates unchanged.
"""

import logging
import traceback
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Type, TypeVar

from importlens.exceptions import ParseError

from .models import AnalysisError, AnalysisStage

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECOVERABLE_ERRORS: Tuple[Type[BaseException], ...] = (ParseError, OSError, UnicodeDecodeError)


class StandardErrorHandler:
    """
    Central error collector.

    Collects errors encountered during analysis in the order they are added.
    """

    def __init__(self):
        self.errors: List[AnalysisError] = []

    def add_error(self, error: AnalysisError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)
        logger.debug(f"Added error: {error.file_path} - {error.message}")

    def get_errors(self) -> List[AnalysisError]:
        """Get all collected errors."""
        return self.errors.copy()

    def error_count(self) -> int:
        return len(self.errors)


def safe_run(
    stage: AnalysisStage,
    file_path: Path,
    func: Callable[..., T],
    *args,
    recoverable: Tuple[Type[BaseException], ...] = RECOVERABLE_ERRORS,
    **kwargs,
) -> Tuple[Optional[T], Optional[AnalysisError]]:
    """
    Execute a per-file step, capturing recoverable failures.

    Args:
        stage: Analysis stage where execution occurs
        file_path: Path to file being analyzed
        func: Function to execute
        recoverable: Exception types that drop the file instead of aborting the run
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Tuple of (result, error) where exactly one is None
    """
    try:
        return func(*args, **kwargs), None
    except recoverable as e:
        error = create_analysis_error(stage, file_path, e)
        logger.warning(f"Skipping {file_path} ({stage.value} failed): {error.message}")
        return None, error


def create_analysis_error(
    stage: AnalysisStage,
    file_path: Path,
    exception: BaseException,
) -> AnalysisError:
    """Create a standardized AnalysisError from an exception."""
    return AnalysisError(
        file_path=str(file_path),
        stage=stage,
        error_type=type(exception).__name__,
        message=str(exception),
        line_number=getattr(exception, "line_number", None),
        traceback="".join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        ),
    )
