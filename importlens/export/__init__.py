"""
Report writers for importlens.

Writers are looked up by format name:

    writer = get_writer("xlsx", title="Import Analysis Results")
    writer.export_to_default_location(table.rows)
"""

from typing import Dict, List, Type

from .base import DEFAULT_OUTPUT_DIR, DEFAULT_TITLE, ResultWriter
from .json_writer import JsonResultWriter
from .xlsx_writer import XlsxResultWriter

WRITERS: Dict[str, Type[ResultWriter]] = {
    "xlsx": XlsxResultWriter,
    "json": JsonResultWriter,
}


def available_formats() -> List[str]:
    return sorted(WRITERS)


def get_writer(output_format: str, **kwargs) -> ResultWriter:
    """Instantiate the writer registered for output_format."""
    try:
        writer_class = WRITERS[output_format.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported output format: {output_format!r} "
            f"(expected one of {', '.join(available_formats())})"
        ) from None
    return writer_class(**kwargs)


__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_TITLE",
    "JsonResultWriter",
    "ResultWriter",
    "WRITERS",
    "XlsxResultWriter",
    "available_formats",
    "get_writer",
]
