"""
importlens - Import usage analysis for Java source trees

Classifies the declared imports of every Java file under a root as used or
unused by lexical name matching, and renders the results as a report annotated
with each file's path segments.
"""

__version__ = "0.1.0"

# Only expose version by default - everything else is lazy loaded
__all__ = ["__version__"]


def __getattr__(name):
    """Lazy loading of main API classes to keep `import importlens` cheap."""
    if name in {"ImportUsageAnalyzer", "ResultAggregator"}:
        from .analysis.aggregator import ImportUsageAnalyzer, ResultAggregator
        return {
            "ImportUsageAnalyzer": ImportUsageAnalyzer,
            "ResultAggregator": ResultAggregator,
        }[name]

    if name in {"ImportLensConfig", "load_config"}:
        from .config import ImportLensConfig, load_config
        return {
            "ImportLensConfig": ImportLensConfig,
            "load_config": load_config,
        }[name]

    if name in {"ResultWriter", "XlsxResultWriter", "JsonResultWriter", "get_writer"}:
        from . import export
        return getattr(export, name)

    raise AttributeError(f"module 'importlens' has no attribute '{name}'")
