"""
CLI output formatting helpers.

Provides consistent formatting for human-readable and JSON output.
"""

import json
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fixguard.conflicts.models import ConflictResolutionResult, FixOperation


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"


error_console = Console(stderr=True)

RESOLUTION_COLORS = {
    "keep-first": "green",
    "keep-second": "green",
    "skip-both": "red",
    "merge": "cyan",
    "allow": "dim",
}


def _location(operation: FixOperation) -> str:
    """Render file:line or file:start-end for an operation."""
    if operation.line is None:
        return operation.file
    if operation.end_line is not None and operation.end_line != operation.line:
        return f"{operation.file}:{operation.line}-{operation.end_line}"
    return f"{operation.file}:{operation.line}"


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class Formatter:
    """Output formatter with support for multiple formats."""

    def __init__(
        self,
        format: OutputFormat = OutputFormat.HUMAN,
        verbose: bool = False,
        color: bool = True,
    ):
        """
        Initialize formatter.

        Args:
            format: Output format (human or json)
            verbose: Enable verbose output
            color: Enable colored output
        """
        self.format = format
        self.verbose = verbose
        self.color = color
        self.console = Console(force_terminal=color, no_color=not color)

    def error(self, message: str, code: Optional[str] = None, details: Optional[dict] = None):
        """Display error message."""
        if self.format == OutputFormat.JSON:
            output = {
                "status": "error",
                "error": {
                    "message": message,
                    "code": code or "ERROR",
                    "details": details,
                },
            }
            print(json.dumps(output, indent=2, default=str))
        else:
            error_console.print(f"[red]✗[/red] {message}")
            if code:
                error_console.print(f"  [dim]Code:[/dim] {code}")
            if details:
                for key, value in details.items():
                    error_console.print(f"  [dim]{key}:[/dim] {value}")

    def print_json(self, data: Any):
        """Print data as JSON."""
        print(json.dumps(data, indent=2, default=str))

    def print_resolution_result(
        self,
        result: ConflictResolutionResult,
        show_conflicts: bool = False,
    ):
        """Print a conflict resolution result."""
        if self.format == OutputFormat.JSON:
            self.print_json(result.to_dict())
            return

        stats = result.stats
        self.console.print()
        self.console.print(Panel.fit(
            f"[dim]Total:[/dim] {stats.total}\n"
            f"[green]Applicable:[/green] {stats.applicable}\n"
            f"[yellow]Skipped:[/yellow] {stats.skipped}\n"
            f"[cyan]Merged:[/cyan] {stats.merged}\n"
            f"[dim]Conflicts:[/dim] {stats.conflicts}",
            title="Conflict Resolution",
        ))

        if result.skipped:
            table = Table(title="Skipped Operations")
            table.add_column("Location", style="cyan")
            table.add_column("Action")
            table.add_column("Category")
            table.add_column("Reason")
            table.add_column("Conflicts With")

            for skipped in result.skipped:
                operation = skipped.operation.operation
                reason = skipped.reason
                if self.verbose and len(skipped.reasons) > 1:
                    reason = "\n".join(skipped.reasons)
                table.add_row(
                    _location(operation),
                    operation.action.value,
                    skipped.operation.issue.category.value,
                    reason,
                    ", ".join(_location(c.operation) for c in skipped.conflicts_with),
                )
            self.console.print(table)

        if result.merged:
            table = Table(title="Merged Operations")
            table.add_column("Location", style="cyan")
            table.add_column("Action")
            for operation in result.merged:
                table.add_row(_location(operation), operation.action.value)
            self.console.print(table)

        if show_conflicts and result.conflicts:
            table = Table(title="Conflicts")
            table.add_column("Type")
            table.add_column("A", style="cyan")
            table.add_column("B", style="cyan")
            table.add_column("Resolution")
            table.add_column("Reason")

            for conflict in result.conflicts:
                strategy = conflict.resolution.strategy.value
                color = RESOLUTION_COLORS.get(strategy, "white")
                table.add_row(
                    conflict.type.value,
                    f"#{conflict.operation_a.index} {_location(conflict.operation_a.operation)}",
                    f"#{conflict.operation_b.index} {_location(conflict.operation_b.operation)}",
                    f"[{color}]{strategy}[/{color}]",
                    conflict.resolution.reason,
                )
            self.console.print(table)

    def print_application_plan(self, plan: dict[str, list[FixOperation]]):
        """Print operations in the order they should be applied."""
        if self.format == OutputFormat.JSON:
            self.print_json({
                file_path: [op.to_dict() for op in operations]
                for file_path, operations in plan.items()
            })
            return

        if not plan:
            self.console.print("[dim]Nothing to apply[/dim]")
            return

        for file_path, operations in plan.items():
            table = Table(title=file_path)
            table.add_column("Step", justify="right")
            table.add_column("Lines", style="cyan")
            table.add_column("Action")
            table.add_column("New Code")

            for step, operation in enumerate(operations, start=1):
                lines = _location(operation)[len(operation.file):].lstrip(":") or "-"
                table.add_row(
                    str(step),
                    lines,
                    operation.action.value,
                    _truncate((operation.new_code or "").replace("\n", "\\n"), 40),
                )
            self.console.print(table)
