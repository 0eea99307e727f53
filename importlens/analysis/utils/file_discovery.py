"""
File discovery utility for deterministic source scanning.

Finds every regular file below a root whose name ends with one of the allowed
extensions, with directory exclusions and deterministic sorting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Set

from importlens.exceptions import PathNotFoundError


DEFAULT_EXTENSIONS = ["java"]

# VCS and IDE metadata never hold sources worth reporting on
DEFAULT_EXCLUDE_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".gradle",
}


def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """Lower-case extensions and prefix them with a dot ("JAVA" -> ".java")."""
    normalized = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in normalized:
            normalized.append(ext)
    return normalized


def has_allowed_extension(file_path: Path, extensions: Iterable[str]) -> bool:
    """Case-insensitive suffix match of the file name against the allow-list."""
    name = file_path.name.lower()
    return any(name.endswith(ext) for ext in normalize_extensions(extensions))


def discover_source_files(
    search_path: Path,
    extensions: Optional[Iterable[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    context: Optional[str] = None,
) -> List[Path]:
    """
    Discover source files with deterministic ordering.

    A file path is returned as-is (when its extension is allowed); a directory
    is searched recursively.

    Args:
        search_path: Directory or file to scan
        extensions: Allowed extensions, matched case-insensitively (default: ["java"])
        exclude_dirs: Directory names to skip below the root
        context: Label of the caller, used to prefix error messages

    Returns:
        Sorted list of matching file paths

    Raises:
        PathNotFoundError: If search_path does not exist
    """
    search_path = Path(search_path)
    if not search_path.exists():
        raise PathNotFoundError(search_path, context=context)

    allowed = normalize_extensions(extensions if extensions is not None else DEFAULT_EXTENSIONS)
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    if search_path.is_file():
        return [search_path] if has_allowed_extension(search_path, allowed) else []

    found_files = []
    for file_path in search_path.rglob("*"):
        if not file_path.is_file():
            continue
        relative_path = file_path.relative_to(search_path)
        if set(relative_path.parts[:-1]) & exclude_dirs:
            continue
        if has_allowed_extension(file_path, allowed):
            found_files.append(file_path)

    return sorted(found_files)
