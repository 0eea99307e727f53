"""
Data models for import usage analysis.

ImportDeclaration and UsageIndex are the inputs of classification,
ClassificationResult is its output, and AnalysisTable is the aggregated report
handed to the writers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from .foundation.models import AnalysisError, AnalysisStats

WILDCARD = "*"

USED_COLUMN = "used"
UNUSED_COLUMN = "unused"
ALL_COLUMN = "all"

# An ordered mapping from column name to cell text; None marks an absent cell.
AnalysisRow = Dict[str, Optional[str]]


@dataclass(frozen=True)
class ImportDeclaration:
    """A single import statement as declared in a source file."""

    qualified_name: str
    is_static: bool = False
    line: Optional[int] = field(default=None, compare=False)

    @property
    def is_wildcard(self) -> bool:
        return self.qualified_name == WILDCARD or self.qualified_name.endswith("." + WILDCARD)

    @property
    def simple_name(self) -> str:
        """Last dot-separated segment; the wildcard marker for wildcard imports."""
        return self.qualified_name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class UsageIndex:
    """Names referenced in a file body, grouped by the kind of reference."""

    identifier_names: FrozenSet[str] = frozenset()
    type_names: FrozenSet[str] = frozenset()
    annotation_names: FrozenSet[str] = frozenset()
    static_callable_names: FrozenSet[str] = frozenset()

    def references_type_or_name(self, name: str) -> bool:
        return (
            name in self.identifier_names
            or name in self.type_names
            or name in self.annotation_names
        )

    def references_static_member(self, name: str) -> bool:
        return name in self.static_callable_names


@dataclass(frozen=True)
class ClassificationResult:
    """Imports of one file split into used and unused, in declaration order."""

    used_imports: List[ImportDeclaration] = field(default_factory=list)
    unused_imports: List[ImportDeclaration] = field(default_factory=list)

    @property
    def all_imports(self) -> List[ImportDeclaration]:
        """Used then unused imports, deduplicated by qualified name."""
        seen = set()
        result = []
        for declaration in self.used_imports + self.unused_imports:
            if declaration.qualified_name in seen:
                continue
            seen.add(declaration.qualified_name)
            result.append(declaration)
        return result

    def to_row_fields(self) -> Dict[str, str]:
        return {
            USED_COLUMN: _join(self.used_imports),
            UNUSED_COLUMN: _join(self.unused_imports),
            ALL_COLUMN: _join(self.all_imports),
        }


def _join(declarations: List[ImportDeclaration]) -> str:
    return "\n".join(d.qualified_name for d in declarations)


@dataclass
class AnalysisTable:
    """Ordered report rows sharing one column schema."""

    columns: List[str] = field(default_factory=list)
    rows: List[AnalysisRow] = field(default_factory=list)
    errors: List[AnalysisError] = field(default_factory=list)
    stats: AnalysisStats = field(default_factory=AnalysisStats)
    root_path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self) -> int:
        return len(self.rows)

    def depth_columns(self) -> List[str]:
        return [c for c in self.columns if c not in (USED_COLUMN, UNUSED_COLUMN, ALL_COLUMN)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_path": self.root_path,
            "columns": list(self.columns),
            "rows": [dict(row) for row in self.rows],
            "errors": [e.to_dict() for e in self.errors],
            "stats": self.stats.to_dict(),
        }
