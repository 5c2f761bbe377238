"""CLI for Garmin workout generation.

Builds Garmin FIT workout files and Garmin Connect import JSON from a
workout name and a JSON array of steps, and verifies existing FIT files.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Bootstrap must be imported before app imports to set up sys.path correctly
# when running directly (python cli/cli.py)
try:
    import cli.bootstrap
except ImportError:
    _project_root = Path(__file__).parent.parent
    if str(_project_root) not in sys.path:
        sys.path.insert(0, str(_project_root))

from garmin_workouts.config.settings import settings
from garmin_workouts.workouts.export_service import ExportResult, WorkoutExportService
from garmin_workouts.workouts.exporters.fit_exporter import FitVerification, verify_fit_file
from garmin_workouts.workouts.intake import WorkoutIntakeError, build_description

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="garmin-workout",
    help="Generate Garmin FIT workout files and Garmin Connect import JSON",
    add_completion=False,
)


def _setup_logging(debug: bool = False) -> None:
    """Set up logging with console and optional file output.

    Args:
        debug: Enable debug logging level
    """
    # Remove default handler
    logger.remove()

    log_level = "DEBUG" if debug else settings.log_level

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{file.name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=log_level,
        colorize=True,
    )

    if settings.log_dir:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"workout_{timestamp}.log"

        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {file.name}:{line} - {message}",
            level=log_level,
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
        )

    logger.debug(f"Logging initialized (level={log_level})")


def _print_result(result: ExportResult) -> None:
    if result.validation is not None and not result.validation.valid:
        console.print("[red]❌ JSON validation errors:[/red]")
        for error in result.validation.errors:
            console.print(f"   - {escape(error)}")
        console.print("[yellow]⚠️  Warning: JSON output has validation issues[/yellow]")

    if result.json_text is not None:
        console.print("\n--- JSON OUTPUT (copy for Garmin Connect import) ---")
        console.print(JSON(result.json_text))
        console.print("--- END JSON OUTPUT ---")
        console.print("💡 Paste the JSON above into the share-your-garmin-workout extension to import it\n")

    console.print("[bold green]✅ Files written:[/bold green]")
    for written in result.files:
        console.print(f"   • {escape(str(written.path))} ({written.kind}, {written.size} bytes)")


def _print_verification(path: Path, verification: FitVerification) -> None:
    table = Table(title="Messages by type")
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right")
    for mesg_type, count in verification.message_counts.items():
        table.add_row(escape(mesg_type), str(count))

    console.print(f"File: {escape(str(path))}")
    console.print(f"Size: {verification.size} bytes")
    console.print(f"is_fit: {verification.is_fit}")
    console.print(f"check_integrity: {verification.integrity}")
    if verification.errors:
        console.print("[yellow]⚠️  Errors:[/yellow]")
        for error in verification.errors:
            console.print(f"  - {escape(error)}")
    console.print(table)


@app.command()
def generate(
    name: str = typer.Option(None, "--name", "-n", help="Workout name"),
    steps: str = typer.Option(None, "--steps", "-s", help="Steps as a JSON array"),
    sport: str = typer.Option(settings.default_sport, "--sport", help="Sport key (running, cycling, ...)"),
    sub_sport: str = typer.Option(settings.default_sub_sport, "--sub-sport", "--subSport", help="FIT sub-sport"),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file or directory; .fit or .json selects a single format, otherwise both are written",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate a Garmin workout.

    Examples:
        # Both formats, named after the workout
        garmin-workout generate --name "Easy Run" --steps '[{"name": "Run", "duration": 1800}]'

        # FIT only
        garmin-workout generate --name "Easy Run" --steps '[...]' --output easy.fit
    """
    _setup_logging(debug)

    try:
        description = build_description(name=name, steps=steps, sport=sport, sub_sport=sub_sport)
    except WorkoutIntakeError as e:
        console.print(f"[red]❌ Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    console.print(f'🏃 Workout: "{escape(description.name)}"')
    console.print(f"   Steps: {len(description.steps)}")

    try:
        result = WorkoutExportService().export(description, output)
    except OSError as e:
        console.print(f"[red]❌ Error:[/red] {escape(str(e))}")
        logger.exception("Failed to write workout files")
        raise typer.Exit(1) from e

    console.print(f"   Mode: {result.plan.mode.value.upper()}")
    _print_result(result)


@app.command()
def verify(
    path: Path = typer.Argument(..., help="FIT file to verify"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Decode a FIT workout file and summarize its messages."""
    _setup_logging(debug)

    try:
        verification = verify_fit_file(path)
    except FileNotFoundError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    _print_verification(path, verification)

    if not verification.is_fit:
        console.print(Panel(Text("Not a FIT file", style="bold red"), border_style="red"))
        raise typer.Exit(1)

    if verification.ok:
        console.print(Panel(Text("FIT file is valid", style="bold green"), border_style="green"))
    else:
        console.print(Panel(Text("FIT file decoded with issues", style="bold yellow"), border_style="yellow"))


if __name__ == "__main__":
    app()
