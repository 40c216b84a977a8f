"""Console output for the CLI, wrapping rich."""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table


class Console:
    """CLI output manager.

    Status messages go to stdout, errors to stderr.
    """

    def __init__(self, *, force_terminal: bool | None = None, quiet: bool = False) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    def events(self, events: list[dict[str, Any]], next_cursor: str, sink_id: str) -> None:
        """Print a page of events as a table, followed by the cursor to resume from."""
        table = Table(title=f"Events for sink {sink_id}", show_header=True, header_style="bold")
        table.add_column("ID", justify="right")
        table.add_column("Type", style="cyan")
        table.add_column("Data type")
        table.add_column("Op")
        table.add_column("Status")
        table.add_column("Errors", justify="right")
        table.add_column("Flow ID", style="dim")

        for event in events:
            status = event.get("delivery_status", "")
            if status == "ERROR":
                status = f"[red]{status}[/red]"
            table.add_row(
                str(event.get("event_id", "")),
                str(event.get("event_type", "")),
                str(event.get("data_type", "")),
                str(event.get("data_op", "")),
                status,
                str(event.get("error_count", 0)),
                str(event.get("flow_id") or ""),
            )

        self._console.print(table)
        self.info(f"Next cursor: {next_cursor or '(start)'}")


_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
