"""Rich console output for the remote-prompt CLI."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


class Console:
    """Handles all terminal output with Rich formatting."""

    def __init__(self, console: RichConsole | None = None):
        self._console = console or RichConsole()

    def print_target(self, host: str, port: int, bundle: bool):
        mode = "bundle" if bundle else "single question"
        self._console.print(
            Panel(
                f"Forwarding questions to [cyan]{host}:{port}[/cyan] ({mode} mode)",
                border_style="blue",
                expand=False,
            )
        )

    def print_answers(self, answers: Mapping[str, Any]):
        if not answers:
            self.print_info("No answers collected.")
            return
        table = Table(title="Answers", show_header=True, header_style="bold")
        table.add_column("Question", style="cyan")
        table.add_column("Answer")
        for name, value in answers.items():
            table.add_row(name, _format_value(value))
        self._console.print(table)

    def print_json(self, data: Any):
        self._console.print_json(json.dumps(data, ensure_ascii=False, default=str))

    def print_success(self, msg: str):
        self._console.print(f"[green]✓[/green] {msg}")

    def print_error(self, msg: str):
        self._console.print(f"[bold red]Error:[/bold red] {msg}")

    def print_info(self, msg: str):
        self._console.print(f"[dim]{msg}[/dim]")
