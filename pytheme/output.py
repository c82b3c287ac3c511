"""Terminal output for the pytheme CLI."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from .utils import format_size


class OutputFormatter:
    """Prints status messages, summaries and JSON results.

    Messages go through rich consoles; errors and warnings are written to
    stderr so that ``--json`` output on stdout stays parseable.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        if self.quiet:
            return
        self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}")

    def progress_message(self, message: str) -> None:
        """Print a per-file progress line."""
        if self.quiet or self.json_output:
            return
        self.console.print(f"[cyan]→[/cyan] {escape(message)}")

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a titled list of label/value pairs."""
        if self.quiet or self.json_output:
            return
        self.console.print(f"\n[bold]{title}[/bold]")
        for label, value in items:
            self.console.print(f"  {label}: {value}", markup=False)

    def output_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data))

    @staticmethod
    def format_size(size_bytes: int) -> str:
        return format_size(size_bytes)
