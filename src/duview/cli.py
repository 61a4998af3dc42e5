"""CLI interface for duview."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from duview import __version__
from duview.config import Settings
from duview.display import console, setup_logging, show_error, show_items, show_scanning_progress
from duview.errors import ClusterSizeError, StartupError
from duview.navigation import NavigationState
from duview.sizing import SizePolicy
from duview.startup import resolve_target_dir

# Create Typer app
app = typer.Typer(
    name="duview",
    help="Browse directory trees sorted by disk usage",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"duview version {__version__}")
        raise typer.Exit()


def load_settings(policy: Optional[SizePolicy], log_level: Optional[str]) -> Settings:
    """Environment settings with command-line overrides applied."""
    try:
        settings = Settings.from_env()
        overrides = {}
        if policy is not None:
            overrides["size_policy"] = policy
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            settings = Settings(**{**settings.model_dump(), **overrides})
    except ValueError as e:
        show_error(f"Invalid settings: {e}")
        raise typer.Exit(1)
    setup_logging(settings.log_level)
    return settings


def target_or_exit(path: Optional[str]) -> Path:
    """Resolve the scan target, printing the error and exiting on failure."""
    try:
        return resolve_target_dir(path)
    except StartupError as e:
        show_error(e.message, e.path)
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """duview - disk usage browser."""
    # If no command specified, browse the current directory
    if ctx.invoked_subcommand is None:
        ctx.invoke(browse, path=None, policy=None, log_level=None)


@app.command()
def browse(
    path: Optional[str] = typer.Argument(None, help="Directory to scan (default: current directory)"),
    policy: Optional[SizePolicy] = typer.Option(None, "--policy", "-p", help="On-disk size policy"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Browse a directory tree interactively."""
    settings = load_settings(policy, log_level)
    target = target_or_exit(path)

    from duview.tui.app import run_tui

    run_tui(target, NavigationState(policy=settings.size_policy))


@app.command()
def scan(
    path: Optional[str] = typer.Argument(None, help="Directory to scan (default: current directory)"),
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Show only the largest N entries"),
    policy: Optional[SizePolicy] = typer.Option(None, "--policy", "-p", help="On-disk size policy"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Scan a directory and print its entries, largest first."""
    settings = load_settings(policy, log_level)
    target = target_or_exit(path)
    state = NavigationState(policy=settings.size_policy)

    with show_scanning_progress() as progress:
        task = progress.add_task(f"Scanning {escape(str(target))}...", total=None)

        def update_progress(current: str) -> None:
            progress.update(task, description=f"Scanning {escape(current)}...")

        try:
            items = state.scan_root_from(target, progress_callback=update_progress)
        except ClusterSizeError as e:
            show_error(f"Cannot determine on-disk sizes: {e}")
            raise typer.Exit(1)

    show_items(items, title=str(target), top=top)


if __name__ == "__main__":
    app()
