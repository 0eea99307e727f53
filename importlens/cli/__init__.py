"""Command-line interface for importlens."""

from .main import create_parser, main, setup_logging

__all__ = ["create_parser", "main", "setup_logging"]
