"""Main TUI application for duview."""

from pathlib import Path

from textual.app import App
from textual.binding import Binding

from duview.navigation import NavigationState
from duview.tui.screens import BrowserScreen


class DuviewApp(App):
    """Interactive disk usage browser."""

    TITLE = "duview"
    SUB_TITLE = "Disk Usage"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, target: Path, state: NavigationState):
        super().__init__()
        self.target = target
        self.navigation = state

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.sub_title = str(self.target)
        self.push_screen(BrowserScreen())

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "Enter/Right to open a directory, Left/Backspace to go back, R to rescan",
            title="Help",
            timeout=5,
        )


def run_tui(target: Path, state: NavigationState) -> None:
    """Run the interactive TUI.

    Args:
        target: Directory to scan on startup
        state: Navigation state shared with the scan worker
    """
    app = DuviewApp(target, state)
    app.run()
