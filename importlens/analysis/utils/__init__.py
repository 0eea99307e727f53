from .file_discovery import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXTENSIONS,
    discover_source_files,
    has_allowed_extension,
    normalize_extensions,
)

__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "DEFAULT_EXTENSIONS",
    "discover_source_files",
    "has_allowed_extension",
    "normalize_extensions",
]
