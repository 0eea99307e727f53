"""
Analysis package for importlens

Provides the import usage pipeline:
- Java parsing behind the SyntaxTree protocol
- Usage collection and import classification
- Path depth columns and result aggregation
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

__all__ = [
    "ImportUsageAnalyzer",
    "ResultAggregator",
    "IdentifierCollector",
    "ImportClassifier",
    "JavaSourceParser",
    "path_depths",
]

_LAZY_EXPORTS: Dict[str, str] = {
    "ImportUsageAnalyzer": "importlens.analysis.aggregator",
    "ResultAggregator": "importlens.analysis.aggregator",
    "IdentifierCollector": "importlens.analysis.identifier_collector",
    "ImportClassifier": "importlens.analysis.import_classifier",
    "JavaSourceParser": "importlens.analysis.parsing",
    "path_depths": "importlens.analysis.path_depth",
}

if TYPE_CHECKING:
    from importlens.analysis.aggregator import ImportUsageAnalyzer as ImportUsageAnalyzer
    from importlens.analysis.aggregator import ResultAggregator as ResultAggregator
    from importlens.analysis.identifier_collector import IdentifierCollector as IdentifierCollector
    from importlens.analysis.import_classifier import ImportClassifier as ImportClassifier
    from importlens.analysis.parsing import JavaSourceParser as JavaSourceParser
    from importlens.analysis.path_depth import path_depths as path_depths


def __getattr__(name: str) -> Any:
    """
    Lazy attribute loading (PEP 562).
    Keeps tree-sitter out of the import path until a parser is actually needed.
    """
    mod_path = _LAZY_EXPORTS.get(name)
    if not mod_path:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    import importlib

    mod = importlib.import_module(mod_path)
    return getattr(mod, name)


def __dir__() -> List[str]:
    return sorted(set(globals().keys()) | set(_LAZY_EXPORTS.keys()))
