"""
Result aggregation for import usage analysis.

Runs the per-file pipeline (read -> parse -> collect -> classify -> depths)
over every discovered file and folds the rows into one AnalysisTable whose
column schema is shared by all rows.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from importlens.config import ImportLensConfig

from .foundation import (
    AnalysisError,
    AnalysisStage,
    AnalysisStats,
    StandardErrorHandler,
    create_analysis_error,
    safe_run,
)
from .identifier_collector import IdentifierCollector
from .import_classifier import ImportClassifier
from .models import AnalysisRow, AnalysisTable, ClassificationResult
from .parsing import JavaSourceParser
from .path_depth import path_depths
from .utils.file_discovery import discover_source_files

logger = logging.getLogger(__name__)

_QUEUE_POLL_INTERVAL = 0.05  # seconds


@dataclass
class FileOutcome:
    """Result of analysing a single file: a row, or the error that dropped it."""

    file_path: Path
    row: Optional[AnalysisRow] = None
    classification: Optional[ClassificationResult] = None
    error: Optional[AnalysisError] = None


class ResultAggregator:
    """
    Analyse files and assemble the report table.

    Per-file work runs on a thread pool; rows are folded in the order of
    ``file_paths``, never in completion order.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        parse_timeout: Optional[float] = None,
        parser: Optional[JavaSourceParser] = None,
    ):
        self.max_workers = max_workers
        self.parse_timeout = parse_timeout
        self.parser = parser or JavaSourceParser()
        self.collector = IdentifierCollector()
        self.classifier = ImportClassifier()

    def analyze_file(self, file_path: Path, root_path: Path) -> FileOutcome:
        """Run the full pipeline for one file; read and parse failures are captured."""
        source, error = safe_run(AnalysisStage.READ, file_path, self.parser.read_source, file_path)
        if error is not None:
            return FileOutcome(file_path=file_path, error=error)

        tree, error = safe_run(AnalysisStage.PARSE, file_path, self.parser.parse, source, file_path)
        if error is not None:
            return FileOutcome(file_path=file_path, error=error)

        index = self.collector.collect(tree)
        classification = self.classifier.classify(tree.imports(), index)

        row: AnalysisRow = {}
        row.update(path_depths(file_path, root_path))
        row.update(classification.to_row_fields())
        logger.debug(
            f"{file_path}: {len(classification.used_imports)} used, "
            f"{len(classification.unused_imports)} unused"
        )
        return FileOutcome(file_path=file_path, row=row, classification=classification)

    def aggregate(
        self, file_paths: Sequence[Union[str, Path]], root_path: Union[str, Path]
    ) -> AnalysisTable:
        started = time.perf_counter()
        root_path = Path(root_path)
        paths = [Path(p) for p in file_paths]
        error_handler = StandardErrorHandler()
        stats = AnalysisStats(files_scanned=len(paths))

        outcomes = self._run_all(paths, root_path)

        rows: List[AnalysisRow] = []
        for outcome in outcomes:
            if outcome.error is not None:
                error_handler.add_error(outcome.error)
                continue
            rows.append(outcome.row)
            stats.used_imports += len(outcome.classification.used_imports)
            stats.unused_imports += len(outcome.classification.unused_imports)

        columns, rows = self._apply_schema(rows)

        stats.files_analyzed = len(rows)
        stats.errors_encountered = error_handler.error_count()
        stats.analysis_duration = time.perf_counter() - started

        return AnalysisTable(
            columns=columns,
            rows=rows,
            errors=error_handler.get_errors(),
            stats=stats,
            root_path=str(root_path),
        )

    def _run_all(self, paths: List[Path], root_path: Path) -> List[FileOutcome]:
        if not paths:
            return []
        started: Dict[int, float] = {}
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = [
                executor.submit(self._timed_analyze, index, started, path, root_path)
                for index, path in enumerate(paths)
            ]
            outcomes = self._wait_all(paths, futures, started)
        finally:
            # Workers past their deadline cannot be interrupted; leave them behind.
            executor.shutdown(wait=False, cancel_futures=True)
        return [outcomes[index] for index in range(len(paths))]

    def _timed_analyze(
        self, index: int, started: Dict[int, float], file_path: Path, root_path: Path
    ) -> FileOutcome:
        started[index] = time.monotonic()
        return self.analyze_file(file_path, root_path)

    def _wait_all(
        self,
        paths: List[Path],
        futures: List["Future[FileOutcome]"],
        started: Dict[int, float],
    ) -> Dict[int, FileOutcome]:
        """
        Wait for every file, giving each one parse_timeout seconds from the
        moment its worker picked it up.
        """
        outcomes: Dict[int, FileOutcome] = {}
        pending = {future: index for index, future in enumerate(futures)}

        while pending:
            timeout = self._next_wakeup(pending, started)
            done, _ = wait(list(pending), timeout=timeout, return_when=FIRST_COMPLETED)
            for future in done:
                outcomes[pending.pop(future)] = future.result()

            if self.parse_timeout is None:
                continue
            now = time.monotonic()
            for future, index in list(pending.items()):
                expired = index in started and now - started[index] >= self.parse_timeout
                if expired and not future.done():
                    del pending[future]
                    outcomes[index] = self._timed_out(paths[index])

        return outcomes

    def _next_wakeup(
        self, pending: Dict["Future[FileOutcome]", int], started: Dict[int, float]
    ) -> Optional[float]:
        if self.parse_timeout is None:
            return None
        now = time.monotonic()
        remaining = [
            started[index] + self.parse_timeout - now for index in pending.values() if index in started
        ]
        # Files still queued have no deadline yet; poll until a worker picks them up.
        return max(0.0, min(remaining + [_QUEUE_POLL_INTERVAL]))

    def _timed_out(self, path: Path) -> FileOutcome:
        # A timed-out file is treated like one that failed to parse.
        message = f"analysis exceeded {self.parse_timeout}s"
        error = create_analysis_error(AnalysisStage.PARSE, path, FutureTimeoutError(message))
        logger.warning(f"Skipping {path}: {message}")
        return FileOutcome(file_path=path, error=error)

    @staticmethod
    def _apply_schema(rows: List[AnalysisRow]) -> Tuple[List[str], List[AnalysisRow]]:
        """
        Give every row the key set of the widest row.

        Rows differ only in how many depth columns they have, so the row with
        the most keys (first one on ties) carries every column.
        """
        if not rows:
            return [], []
        columns = list(max(rows, key=len).keys())
        return columns, [{column: row.get(column) for column in columns} for row in rows]


class ImportUsageAnalyzer:
    """Analyse the imports of every source file below a root path."""

    def __init__(
        self,
        source_root: Union[str, Path],
        config: Optional[ImportLensConfig] = None,
    ):
        self.source_root = Path(source_root)
        self.config = config or ImportLensConfig.default()

    def discover(self) -> List[Path]:
        settings = self.config.analysis_settings
        return discover_source_files(
            self.source_root.resolve(),
            extensions=settings.extensions,
            exclude_dirs=set(settings.exclude_dirs),
            context=type(self).__name__,
        )

    def analyze(self) -> AnalysisTable:
        """
        Analyse the import declarations of all discovered files.

        Raises:
            PathNotFoundError: If the source root does not exist
        """
        file_paths = self.discover()
        logger.info(f"Found {len(file_paths)} source file(s) under {self.source_root}")

        settings = self.config.analysis_settings
        aggregator = ResultAggregator(
            max_workers=settings.max_workers,
            parse_timeout=settings.parse_timeout,
        )
        table = aggregator.aggregate(file_paths, self.source_root.resolve())

        logger.info(
            f"Analysis complete: {table.stats.files_analyzed} file(s) analysed, "
            f"{table.stats.errors_encountered} skipped"
        )
        return table
