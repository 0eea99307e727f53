"""
Import Classifier

Partitions declared imports into used and unused by simple-name matching
against a UsageIndex.
"""

from __future__ import annotations

from typing import Iterable, List

from .models import ClassificationResult, ImportDeclaration, UsageIndex


class ImportClassifier:
    """
    Lexical used/unused classification.

    A static import is used when its simple name is invoked as a method or
    accessed as a field. Any other import is used when its simple name shows up
    as a bare identifier, a type, or an annotation.

    Wildcard imports have "*" as their simple name, which never appears in a
    collected name set, so they always end up unused. Members reached through
    a wildcard are not resolved.
    """

    def is_used(self, declaration: ImportDeclaration, index: UsageIndex) -> bool:
        name = declaration.simple_name
        if declaration.is_static:
            return index.references_static_member(name)
        return index.references_type_or_name(name)

    def classify(
        self, imports: Iterable[ImportDeclaration], index: UsageIndex
    ) -> ClassificationResult:
        used: List[ImportDeclaration] = []
        unused: List[ImportDeclaration] = []
        for declaration in imports:
            if self.is_used(declaration, index):
                used.append(declaration)
            else:
                unused.append(declaration)
        return ClassificationResult(used_imports=used, unused_imports=unused)


def classify_imports(
    imports: Iterable[ImportDeclaration], index: UsageIndex
) -> ClassificationResult:
    return ImportClassifier().classify(imports, index)
