"""Command line interface for projclean."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Optional

import typer
from result import Ok
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from projclean.config.defaults import default_config
from projclean.config.loader import default_config_path, load_config, sample_config_json
from projclean.config.schema import AppConfig, clamp_field
from projclean.services.analyzer import analyze_project
from projclean.services.summary import render_analysis, render_cleanup
from projclean.services.walker import CleanupWalker, prompt_confirmer

EXIT_CONFIG_ERROR = 1
EXIT_INTERRUPTED = 130

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="projclean - project file cleanup and structure analysis")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _resolve_config(root: Path, config_path: Path | None) -> AppConfig:
    path = config_path or default_config_path(root)
    if config_path is not None and not config_path.exists():
        err_console.print(f"[red]Config file not found:[/red] {escape(str(config_path))}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    result = load_config(path)
    if isinstance(result, Ok):
        return result.unwrap()

    message = result.unwrap_err()
    if config_path is not None:
        # An explicitly requested config has no acceptable fallback.
        err_console.print(escape(message), style="red")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    err_console.print(escape(message), style="yellow")
    err_console.print("Using default configuration.")
    return default_config()


RootOption = typer.Option(Path("."), "--root", "-r", help="Project root directory.", resolve_path=True)
ConfigOption = typer.Option(None, "--config", "-c", help="Path to cleanup-config.json.")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


@app.command()
def clean(
    root: Path = RootOption,
    config_path: Optional[Path] = ConfigOption,
    delete: bool = typer.Option(False, "--delete", help="Actually delete files (default is a dry run)."),
    no_prompt: bool = typer.Option(False, "--no-prompt", help="Delete without asking for each item."),
    threshold_days: Optional[int] = typer.Option(
        None, "--threshold-days", help="Override accessThresholdDays from the config."
    ),
    verbose: bool = VerboseOption,
) -> None:
    """Find build artifacts, stale files and empty directories; optionally delete them."""
    _setup_logging(verbose)
    root = root.resolve()
    config = _resolve_config(root, config_path)
    if no_prompt:
        config = dataclasses.replace(
            config, options=dataclasses.replace(config.options, prompt_before_deletion=False)
        )
    if threshold_days is not None:
        config = dataclasses.replace(
            config, access_threshold_days=clamp_field(threshold_days, "access_threshold_days")
        )

    walker = CleanupWalker(root, config, dry_run=not delete, confirmer=prompt_confirmer(console))
    try:
        result = walker.run()
    except KeyboardInterrupt:
        console.print("\nCleanup aborted by user")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None

    render_cleanup(console, result, root_prefix=f"{root}/")
    console.print("Cleanup completed!")


@app.command()
def analyze(
    root: Path = RootOption,
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Report directory sizes, file types, duplicates, naming issues and unused files."""
    _setup_logging(verbose)
    root = root.resolve()
    config = _resolve_config(root, config_path)
    try:
        report = analyze_project(root, config)
    except KeyboardInterrupt:
        console.print("\nAnalysis aborted by user")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None
    render_analysis(console, report)


@app.command("sample-config")
def sample_config() -> None:
    """Print the built-in default configuration as JSON."""
    typer.echo(sample_config_json())


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
