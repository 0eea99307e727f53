"""
Foundation models for importlens.

Bookkeeping records shared by the analysis pipeline: where a file failed and
how much of the run succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class AnalysisStage(Enum):
    READ = "read"
    PARSE = "parse"


@dataclass
class AnalysisError:
    file_path: str
    stage: AnalysisStage
    error_type: str
    message: str
    line_number: Optional[int] = None
    traceback: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "stage": self.stage.value,
            "error_type": self.error_type,
            "message": self.message,
            "line_number": self.line_number,
            "traceback": self.traceback,
        }


@dataclass
class AnalysisStats:
    files_scanned: int = 0
    files_analyzed: int = 0
    errors_encountered: int = 0
    used_imports: int = 0
    unused_imports: int = 0
    analysis_duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "files_analyzed": self.files_analyzed,
            "errors_encountered": self.errors_encountered,
            "used_imports": self.used_imports,
            "unused_imports": self.unused_imports,
            "analysis_duration": self.analysis_duration,
        }
