"""
Console reporter for survey validation results.

Formats validation results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from surveyload.ingestion.dataset import DataError, DatasetLoadAttempt, LoadStatus
from surveyload.ingestion.header import ParsedHeader
from surveyload.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console, max_errors: int = 50) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
            max_errors: Maximum number of data errors to list.
        """
        self.console = console
        self.max_errors = max_errors

    def print_result(self, result: ValidationResult) -> None:
        """
        Print a validation result.

        Args:
            result: Validation result to display.
        """
        self.console.print(
            f"[bold]{result.project}[/bold]: {escape(str(result.file_path))} "
            f"{self._format_status(result)}"
        )
        if result.digest:
            self.console.print(f"  [dim]MD5: {result.digest}[/dim]")

        attempt = result.attempt
        if attempt is None:
            self.console.print(f"  [yellow]{escape(result.error_message or '')}[/yellow]")
            return

        if attempt.header is not None:
            self._print_header(attempt.header)

        if attempt.error is not None:
            self.console.print()
            message = escape(result.error_message or "")
            self.console.print(f"[bold red]Load failed:[/bold red] {message}")

        if attempt.data_errors:
            self._print_data_errors(attempt.data_errors)

        self._print_summary(attempt)

    def _format_status(self, result: ValidationResult) -> str:
        """
        Format load status with color.

        Args:
            result: Validation result.

        Returns:
            Formatted status string with color markup.
        """
        if not result.exists:
            return "[yellow]Missing[/yellow]"
        if result.status is LoadStatus.LOADED:
            return "[green]Pass[/green]"
        if result.status is LoadStatus.LOADED_WITH_ERRORS:
            return "[yellow]Loaded with errors[/yellow]"
        return "[red]Fail[/red]"

    def _print_header(self, header: ParsedHeader) -> None:
        """Print header reconciliation as a table."""
        table = Table(title="Header Reconciliation", show_header=True)
        table.add_column("Check", style="cyan", no_wrap=True)
        table.add_column("Result")

        if header.org_col_found:
            org_status = f"[green]found at position {header.org_col_pos}[/green]"
        else:
            org_status = "[red]not found[/red]"
        table.add_row("Org node column", org_status)
        table.add_row("Missing columns", self._format_names(header.missing_columns, "red"))
        table.add_row("Extra columns", self._format_names(header.extra_columns, "yellow"))
        table.add_row(
            "Duplicate columns", self._format_names(header.duplicate_columns, "red")
        )

        self.console.print(table)

    def _format_names(self, names: tuple[str, ...], color: str) -> str:
        if not names:
            return "[green]none[/green]"
        shown = ', '.join(name or '(blank)' for name in names)
        return f"[{color}]{escape(shown)}[/{color}]"

    def _print_data_errors(self, errors: tuple[DataError, ...]) -> None:
        """
        Print data errors, up to max_errors.

        Args:
            errors: Collected data errors.
        """
        table = Table(title="Data Errors", show_header=True)
        table.add_column("Line", justify="right")
        table.add_column("Column", style="cyan")
        table.add_column("Message", style="dim")

        for error in errors[: self.max_errors]:
            table.add_row(str(error.line_num), escape(error.column_name), escape(error.message))

        self.console.print()
        self.console.print(table)
        if len(errors) > self.max_errors:
            self.console.print(
                f"[dim]... {len(errors) - self.max_errors} more error(s) not shown[/dim]"
            )

    def _print_summary(self, attempt: DatasetLoadAttempt) -> None:
        """
        Print summary statistics.

        Args:
            attempt: Load attempt.
        """
        rows = attempt.dataset.row_count if attempt.dataset is not None else 0
        nodes = len(attempt.dataset.nodes()) if attempt.dataset is not None else 0

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Status: {attempt.status.value}")
        self.console.print(f"  [green]Rows loaded: {rows}[/green]")
        self.console.print(f"  Org nodes: {nodes}")
        self.console.print(f"  [red]Data errors: {len(attempt.data_errors)}[/red]")
