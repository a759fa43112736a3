"""
UI components module for the bundler CLI.

Provides styled terminal output using Rich for the run summary, the
skipped-files report, and the preset listing.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bundler.core.file_scanner import SkipLedger
from bundler.core.presets import Preset
from bundler.services import BundleResult


def render_summary(console: Console, result: BundleResult) -> None:
    """
    Render the summary panel for a completed run.

    Args:
        console: Rich Console instance for output.
        result: Result of the bundling run.
    """
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Project Type:", result.project_type)
    if result.landmark:
        summary.add_row("Detected From:", result.landmark)
    summary.add_row("Files Bundled:", str(result.total_files))
    summary.add_row("Bundle Size:", f"{result.total_bytes} bytes")
    summary.add_row("Duration:", f"{result.duration_seconds:.2f}s")

    if result.skipped:
        summary.add_row("Skipped:", f"[yellow]{result.skipped.total}[/yellow]")

    console.print(
        Panel(
            summary,
            title="[bold green]Bundle Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )
    console.print(f"Successfully created project bundle at '{result.output_path}'")


def render_skip_report(console: Console, ledger: SkipLedger) -> None:
    """
    Render the skipped-files report grouped by reason.

    Args:
        console: Rich Console instance for output.
        ledger: Ledger filled during the run.
    """
    console.print("\n[bold]--- Skipped Files Report ---[/bold]")

    if not ledger:
        console.print("No files were skipped.")
        return

    table = Table(show_header=True, header_style="bold cyan", expand=False)
    table.add_column("Reason", style="yellow", no_wrap=True)
    table.add_column("Path")

    for reason, paths in ledger.items():
        for i, path in enumerate(paths):
            table.add_row(reason.label if i == 0 else "", path)
        table.add_section()

    console.print(table)


def render_presets(console: Console, presets: list[Preset]) -> None:
    """
    Render a table describing each preset.

    Args:
        console: Rich Console instance for output.
        presets: Presets to list, in display order.
    """
    table = Table(title="Project Presets", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="bold green", no_wrap=True)
    table.add_column("Ignored Directories")
    table.add_column("Ignored Extensions/Names")
    table.add_column("Language Overrides")

    for preset in presets:
        languages = ", ".join(f"{ext}={tag}" for ext, tag in sorted(preset.languages.items()))
        table.add_row(
            preset.project_type.value,
            ", ".join(sorted(preset.ignore_dirs)),
            ", ".join(sorted(preset.ignore_exts)),
            languages or "[dim]-[/dim]",
        )

    console.print(table)
