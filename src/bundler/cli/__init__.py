"""
CLI for the project bundler.

Provides the command-line interface for bundling a source tree into a
single markdown document.
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from bundler.cli.ui import render_presets, render_skip_report, render_summary
from bundler.core.config import configure_logging, load_config
from bundler.core.errors import UnknownProjectTypeError
from bundler.core.file_scanner import BundleRecord
from bundler.core.path_utils import validate_source_path
from bundler.core.presets import AUTO, available_project_types, get_presets
from bundler.core.project_detector import detect_project_type
from bundler.services import BundleError, BundleService

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="project-bundler",
    help="Project Bundler - Concatenate a source tree into one markdown document",
    add_completion=False,
)


@app.command()
def bundle(
    src: Path = typer.Argument(Path("."), help="Source project directory"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output markdown file (default: bundle.md)"
    ),
    project_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help=f"Project type. Options: {', '.join(available_project_types())}",
    ),
    report_skipped: Optional[bool] = typer.Option(
        None, "--report-skipped/--no-report-skipped", help="Report all skipped files and reasons"
    ),
    ignore_dir: Optional[list[str]] = typer.Option(
        None, "--ignore-dir", help="Extra directory name to ignore. Can be specified multiple times."
    ),
    ignore_ext: Optional[list[str]] = typer.Option(
        None,
        "--ignore-ext",
        help="Extra extension or file name to ignore. Can be specified multiple times.",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml, or .json)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print each bundled file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Bundle a project directory into a single markdown file."""
    load_dotenv()

    try:
        cfg = load_config(config_file)
    except (FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {e}")
        raise typer.Exit(1)

    configure_logging(cfg.logging, verbose=verbose)

    validation = validate_source_path(src)
    if not validation.valid:
        console.print(f"[bold red]Error:[/bold red] {validation.error_message}")
        raise typer.Exit(1)

    requested_type = project_type or cfg.bundle.project_type
    output_path = output or Path(cfg.bundle.output)
    show_report = report_skipped if report_skipped is not None else cfg.bundle.report_skipped

    def on_record(record: BundleRecord) -> None:
        if not quiet:
            console.print(f"  + Bundling file: {record.relative_path}", highlight=False)

    service = BundleService(cfg)

    display_type = requested_type
    detection = None
    if requested_type == AUTO:
        detection = detect_project_type(src)
        if detection.detected:
            console.print(f"Auto-detected project type: {detection.project_type.value}")
        else:
            console.print("Could not auto-detect project type, using 'generic' defaults.")
        display_type = detection.project_type.value

    console.print(
        f"[bold blue]Bundling[/bold blue] '{src}' into '{output_path}' (type: {display_type})..."
    )

    try:
        result = service.bundle_directory(
            src,
            output_path=output_path,
            project_type=requested_type,
            extra_ignore_dirs=ignore_dir or [],
            extra_ignore_exts=ignore_ext or [],
            progress_callback=on_record,
            detection=detection,
        )
    except (UnknownProjectTypeError, BundleError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if show_report:
        render_skip_report(console, result.skipped)

    render_summary(console, result)


@app.command()
def presets():
    """List the available project presets."""
    render_presets(console, list(get_presets().values()))


@app.command()
def detect(
    src: Path = typer.Argument(Path("."), help="Project directory to inspect"),
):
    """Show which project type auto-detection would pick."""
    validation = validate_source_path(src)
    if not validation.valid:
        console.print(f"[bold red]Error:[/bold red] {validation.error_message}")
        raise typer.Exit(1)

    result = detect_project_type(src)
    if result.detected:
        console.print(
            f"Detected project type: [bold green]{result.project_type.value}[/bold green] "
            f"(landmark: {result.landmark})"
        )
    else:
        console.print(
            f"No landmark found; using [bold]{result.project_type.value}[/bold] defaults"
        )


def main() -> None:
    """Entry point for the project-bundler console script."""
    app()


if __name__ == "__main__":
    main()
