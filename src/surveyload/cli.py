"""Command-line interface for surveyload."""

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape

app = typer.Typer(
    name="surveyload",
    help="Validate and load survey data against a declared schema.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def validate(
    data: Annotated[
        Path,
        typer.Argument(help="Path to the survey CSV file.", dir_okay=False),
    ],
    config: Annotated[
        Path,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ],
    mode: Annotated[
        str | None,
        typer.Option(
            "--mode",
            "-m",
            help="Validation mode: 'fail_fast' or 'capture_all_errors' (overrides config).",
        ),
    ] = None,
) -> None:
    """Validate a survey CSV file against the configured schema."""
    from surveyload.config.loader import load_config
    from surveyload.utils.logging import configure_logging
    from surveyload.validation import ConsoleReporter, ValidationRunner

    try:
        survey_config = load_config(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error: Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(
        level=survey_config.logging.level,
        json_output=survey_config.logging.json_output,
    )

    console.print(f"[blue]Validating {escape(str(data))} ({survey_config.project})[/blue]")

    runner = ValidationRunner(survey_config)
    result = runner.run(data, validation_mode=mode)

    reporter = ConsoleReporter(console)
    reporter.print_result(result)

    if not result.passed:
        raise typer.Exit(code=1)


@app.command(name="hash")
def hash_file(
    path: Annotated[
        Path,
        typer.Argument(help="File to hash.", exists=True, dir_okay=False),
    ],
) -> None:
    """Print the MD5 digest of a data file."""
    from surveyload.utils.hashing import file_md5_hash

    try:
        digest = file_md5_hash(path)
    except OSError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"{digest}  {path}")


@app.command()
def version() -> None:
    """Show version information."""
    from surveyload import __version__

    console.print(f"surveyload version {__version__}")


if __name__ == "__main__":
    app()
