"""
Foundation layer for importlens.

Core records and error-handling utilities the analysis pipeline depends on.
It has no dependencies on other analysis modules.
"""

from .models import AnalysisError, AnalysisStage, AnalysisStats
from .error_handler import (
    RECOVERABLE_ERRORS,
    StandardErrorHandler,
    create_analysis_error,
    safe_run,
)

__all__ = [
    "AnalysisError",
    "AnalysisStage",
    "AnalysisStats",
    "RECOVERABLE_ERRORS",
    "StandardErrorHandler",
    "create_analysis_error",
    "safe_run",
]
