"""Rich terminal display for duview."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from duview.models import SizeItem

console = Console()
err_console = Console(stderr=True)

BAR_WIDTH = 20


def setup_logging(level: str = "WARNING") -> None:
    """Route duview log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("duview")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def size_bar(relative: float, width: int = BAR_WIDTH) -> str:
    """Render a relative size in [0, 1] as a bar of block characters."""
    filled = round(width * relative)
    return f"[cyan]{'█' * filled}[/cyan][dim]{'░' * (width - filled)}[/dim]"


def item_label(item: SizeItem) -> str:
    """Name of a row, with a trailing slash for directories."""
    name = escape(item.name)
    return name if item.is_file else f"[bold]{name}/[/bold]"


def build_items_table(items: list[SizeItem], title: str | None = None, top: int | None = None) -> Table:
    """Table of rows in display order, optionally limited to the first ``top``."""
    table = Table(title=escape(title) if title else None, show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Disk", no_wrap=True)

    shown = items if top is None else items[:top]
    for item in shown:
        table.add_row(item_label(item), item.size_string, size_bar(item.relative_disk_size))

    return table


def show_items(items: list[SizeItem], title: str | None = None, top: int | None = None) -> None:
    """Print a projected view."""
    if not items:
        console.print("[dim]Nothing to show (empty directory)[/dim]")
        return

    console.print(build_items_table(items, title=title, top=top))
    if top is not None and len(items) > top:
        console.print(f"[dim]... and {len(items) - top} more[/dim]")


def show_scanning_progress() -> Progress:
    """Spinner shown while a directory tree is walked."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    )


def show_error(message: str, path: str = "") -> None:
    """Print a startup error and its offending path."""
    console.print(f"[red]{escape(message)}[/red]")
    if path:
        console.print(f"  [bold]{escape(path)}[/bold]")
