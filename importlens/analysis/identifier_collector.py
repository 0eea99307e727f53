"""
Identifier Collector

Builds the UsageIndex of a file from its syntax tree.
"""

from __future__ import annotations

import logging

from .models import UsageIndex
from .parsing import SyntaxTree

logger = logging.getLogger(__name__)


class IdentifierCollector:
    """
    Collect the names a file actually references.

    Four sets are produced:
      identifier_names       bare name expressions (locals, parameters, fields, Foo in Foo.bar())
      type_names             class/interface types in declarations, casts, generics, ...
      annotation_names       annotation usages (@Override -> Override)
      static_callable_names  method-call names plus field-access member names

    Import declarations are never looked at here; static_callable_names only
    serves to validate static imports.
    """

    __slots__ = ()

    def collect(self, tree: SyntaxTree) -> UsageIndex:
        static_callables = set(tree.method_call_names())
        static_callables.update(tree.field_access_names())
        index = UsageIndex(
            identifier_names=frozenset(tree.name_references()),
            type_names=frozenset(tree.type_references()),
            annotation_names=frozenset(tree.annotation_references()),
            static_callable_names=frozenset(static_callables),
        )
        logger.debug(
            "Collected %d names, %d types, %d annotations, %d static callables",
            len(index.identifier_names),
            len(index.type_names),
            len(index.annotation_names),
            len(index.static_callable_names),
        )
        return index


def collect_usage(tree: SyntaxTree) -> UsageIndex:
    return IdentifierCollector().collect(tree)
