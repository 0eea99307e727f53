"""
Rich terminal output utilities for the importlens CLI.

Provides headers, status lines and tables. With rich formatting disabled the
same content is printed without colour, markup or box drawing.
"""

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class RichOutputManager:
    """Manages terminal output with an optional plain-text mode."""

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """Initialize the output manager."""
        self.use_rich = use_rich
        if console is not None:
            self.console = console
        elif use_rich:
            self.console = Console()
        else:
            self.console = Console(color_system=None, highlight=False, emoji=False)

    def _print(self, text: str) -> None:
        if self.use_rich:
            self.console.print(text)
        else:
            self.console.print(text, markup=False)

    def print_header(self, title: str, subtitle: Optional[str] = None) -> None:
        """Print a formatted header."""
        if self.use_rich:
            if subtitle:
                header_text = f"[bold blue]{escape(title)}[/bold blue]\n[dim]{escape(subtitle)}[/dim]"
            else:
                header_text = f"[bold blue]{escape(title)}[/bold blue]"

            self.console.print(Panel(header_text, border_style="blue", padding=(1, 2)))
        else:
            self._print(f"\n=== {title} ===")
            if subtitle:
                self._print(subtitle)
            self.console.print()

    def print_section(self, title: str) -> None:
        """Print a section separator."""
        if self.use_rich:
            self.console.rule(f"[bold]{escape(title)}[/bold]", style="blue")
        else:
            self._print(f"\n--- {title} ---")

    def print_success(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[green]✓[/green] {escape(message)}")
        else:
            self._print(f"OK: {message}")

    def print_warning(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
        else:
            self._print(f"WARNING: {message}")

    def print_error(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[red]✗[/red] {escape(message)}")
        else:
            self._print(f"ERROR: {message}")

    def print_info(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[blue]ℹ[/blue] {escape(message)}")
        else:
            self._print(message)

    def create_table(self, title: str, columns: Iterable[str]) -> Table:
        """Create a table; plain mode uses ASCII borders and no styling."""
        if self.use_rich:
            table = Table(title=title, show_header=True, header_style="bold blue")
        else:
            table = Table(title=title, show_header=True, box=box.ASCII, header_style="")
        for column in columns:
            table.add_column(column)
        return table

    def add_table_row(self, table: Table, *values) -> None:
        table.add_row(*[Text("" if v is None else str(v)) for v in values])

    def print_table(self, table: Table) -> None:
        self.console.print(table)
