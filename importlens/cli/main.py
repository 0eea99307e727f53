"""
Command-line interface for importlens

Usage:
    importlens analyze <root> [--format xlsx|json] [--output FILE] ...
    importlens config show|init
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from importlens import __version__
from importlens.analysis.aggregator import ImportUsageAnalyzer
from importlens.analysis.models import UNUSED_COLUMN, AnalysisTable
from importlens.cli.rich_output import RichOutputManager
from importlens.config import SUPPORTED_FORMATS, ImportLensConfig
from importlens.exceptions import ExportError, ImportLensError
from importlens.export import get_writer
from importlens.export.base import atomic_write_text

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="importlens",
        description="importlens - find declared-but-unused imports in Java source trees",
        epilog='Use "importlens <command> --help" for detailed command help.',
    )

    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Classify the imports of every source file under a path"
    )
    analyze_parser.add_argument("path", help="Source root directory or single file")
    analyze_parser.add_argument(
        "--ext",
        nargs="+",
        metavar="EXT",
        help="File extensions to analyse (default: java)",
    )
    analyze_parser.add_argument(
        "--format",
        choices=SUPPORTED_FORMATS,
        help="Report format (default: xlsx)",
    )
    analyze_parser.add_argument(
        "--output", "-o", help="Report file path (default: timestamped file in the output directory)"
    )
    analyze_parser.add_argument("--output-dir", help="Directory for timestamped reports")
    analyze_parser.add_argument("--title", help="Title shown in the report")
    analyze_parser.add_argument(
        "--workers", type=int, help="Number of worker threads (default: automatic)"
    )
    analyze_parser.add_argument(
        "--timeout", type=float, help="Per-file analysis timeout in seconds"
    )
    analyze_parser.add_argument(
        "--no-export", action="store_true", help="Print the summary only, write no report"
    )
    analyze_parser.add_argument(
        "--summary",
        metavar="FILE",
        help="Also save the full result (rows, skipped files, statistics) as JSON",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_action", required=True)

    config_subparsers.add_parser("show", help="Show the effective configuration")

    init_parser = config_subparsers.add_parser("init", help="Write the default configuration")
    init_parser.add_argument(
        "--output",
        "-o",
        default="importlens.yaml",
        help="Where to write the file (default: importlens.yaml)",
    )
    init_parser.add_argument(
        "--format", choices=["json", "yaml"], default="yaml", help="File format (default: yaml)"
    )

    return parser


def apply_overrides(config: ImportLensConfig, args: argparse.Namespace) -> ImportLensConfig:
    """Apply command-line options on top of the loaded configuration."""
    analysis = config.analysis_settings
    output = config.output_settings

    if args.ext:
        analysis.extensions = list(args.ext)
    if args.workers is not None:
        analysis.max_workers = args.workers
    if args.timeout is not None:
        analysis.parse_timeout = args.timeout
    if args.format:
        output.format = args.format
    if args.output_dir:
        output.directory = args.output_dir
    if args.title:
        output.title = args.title

    config.validate()
    return config


def print_summary(table: AnalysisTable, output: RichOutputManager) -> None:
    stats = table.stats
    output.print_header("Import Analysis", table.root_path)
    output.print_info(f"Files scanned: {stats.files_scanned}")
    output.print_info(f"Files analysed: {stats.files_analyzed}")
    output.print_info(
        f"Imports: {stats.used_imports} used, {stats.unused_imports} unused "
        f"({stats.analysis_duration:.2f}s)"
    )

    if table.errors:
        output.print_section("Skipped files")
        for error in table.errors:
            output.print_warning(f"{error.file_path} ({error.stage.value}): {error.message}")

    depth_columns = table.depth_columns()
    flagged = [row for row in table.rows if row.get(UNUSED_COLUMN)]
    if not flagged:
        output.print_success("No unused imports found")
        return

    result_table = output.create_table("Unused imports", ["File", "Unused imports"])
    for row in flagged:
        file_label = "/".join(row[c] for c in depth_columns if row.get(c))
        output.add_table_row(result_table, file_label, row[UNUSED_COLUMN])
    output.print_table(result_table)


def save_summary(table: AnalysisTable, path: Path) -> None:
    """Write AnalysisTable.to_dict() as JSON."""
    try:
        atomic_write_text(path, json.dumps(table.to_dict(), indent=2, ensure_ascii=False))
    except OSError as e:
        raise ExportError(f"Failed to save summary file: {path}") from e


def cmd_analyze(args: argparse.Namespace, config: ImportLensConfig, output: RichOutputManager) -> int:
    """Handle analyze command."""
    config = apply_overrides(config, args)
    table = ImportUsageAnalyzer(Path(args.path), config).analyze()
    print_summary(table, output)

    if args.summary:
        save_summary(table, Path(args.summary))
        output.print_success(f"Summary written to {args.summary}")

    if args.no_export:
        return 0

    settings = config.output_settings
    writer = get_writer(settings.format, title=settings.title, output_dir=settings.directory)
    if args.output:
        saved = writer.export(table.rows, Path(args.output))
    else:
        saved = writer.export_to_default_location(table.rows)
    output.print_success(f"Report written to {saved}")
    return 0


def cmd_config(args: argparse.Namespace, config: ImportLensConfig, output: RichOutputManager) -> int:
    """Handle config command."""
    if args.config_action == "show":
        output.print_section("Configuration")
        output.console.print(config.get_config_summary(), markup=False)
    elif args.config_action == "init":
        ImportLensConfig.default().to_file(args.output, args.format)
        output.print_success(f"Default configuration file created at {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    output = RichOutputManager(use_rich=not args.no_rich)

    try:
        config = ImportLensConfig.load(config_path=args.config)
        if args.command == "config":
            return cmd_config(args, config, output)
        return cmd_analyze(args, config, output)
    except ImportLensError as e:
        logger.debug("Command failed", exc_info=True)
        output.print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
