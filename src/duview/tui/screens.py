"""TUI screens for duview."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from duview.display import item_label, size_bar
from duview.errors import ClusterSizeError
from duview.models import SizeItem


class BrowserScreen(Screen):
    """Directory listing sorted by size, with drill-down navigation."""

    BINDINGS = [
        Binding("right", "step_into", "Open"),
        Binding("left,backspace", "step_out", "Back"),
        Binding("escape", "step_out", "Back", show=False),
        Binding("r", "rescan", "Rescan"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="main-container"):
            yield Static("", id="location")
            yield DataTable(id="items-table")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the screen."""
        table = self.query_one("#items-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("Name", "Size", "Disk")
        table.focus()

        self.action_rescan()

    def action_rescan(self) -> None:
        """Scan the target directory in a background thread."""
        self.query_one("#location", Static).update("[dim]Scanning...[/dim]")
        self.run_worker(self._scan, thread=True, exclusive=True)

    def _scan(self) -> None:
        app = self.app
        try:
            items = app.navigation.scan_root_from(app.target)
        except ClusterSizeError as e:
            self.app.call_from_thread(self.notify, f"Scan failed: {e}", severity="error")
            return

        # Update UI on main thread
        self.app.call_from_thread(self._show_items, items, 0)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter on a row opens it."""
        self._step_into(event.cursor_row)

    def action_step_into(self) -> None:
        table = self.query_one("#items-table", DataTable)
        self._step_into(table.cursor_row)

    def _step_into(self, index: int) -> None:
        items = self.app.navigation.step_into(index)
        if items is not None:
            self._show_items(items, 0)

    def action_step_out(self) -> None:
        result = self.app.navigation.step_out()
        if result is not None:
            index, items = result
            self._show_items(items, index)

    def _show_items(self, items: list[SizeItem], cursor: int) -> None:
        """Replace the table rows and place the cursor on row ``cursor``."""
        table = self.query_one("#items-table", DataTable)
        table.clear()
        for item in items:
            table.add_row(item_label(item), item.size_string, size_bar(item.relative_disk_size))

        location = escape(" / ".join(self.app.navigation.breadcrumbs()))
        self.query_one("#location", Static).update(f"[bold]{location}[/bold]")

        if items:
            table.move_cursor(row=cursor)
