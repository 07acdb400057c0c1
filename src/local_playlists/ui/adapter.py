"""Host UI integration points.

The host application owns the window; the playlist page only reaches it
through a HostUIAdapter. ConsoleUIAdapter is the terminal binding used by
the CLI.
"""

from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from local_playlists.core.console import get_console

from .render import Page

BACK_ACTION = "Back"


class HostUIAdapter(Protocol):
    """Integration points the host UI must provide."""

    def insert_nav_item(self, label: str) -> bool:
        """Add a navigation entry for the playlist page. Returns False if it could not be placed."""
        ...

    def show_page(self, page: Page) -> None:
        """Replace the host content area with the page."""
        ...

    def hide_page(self) -> None:
        """Remove the page and restore the host content."""
        ...

    def alert(self, message: str) -> None:
        """Show a short message to the user."""
        ...


class ConsoleUIAdapter:
    """Draws pages on a Rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()
        self.nav_items: list[str] = []
        self.visible = False

    def insert_nav_item(self, label: str) -> bool:
        if label not in self.nav_items:
            self.nav_items.append(label)
        return True

    def show_page(self, page: Page) -> None:
        self.visible = True
        self.console.rule(f"[bold]{escape(page.title)}[/bold]")
        if page.subtitle:
            self.console.print(page.subtitle, style="dim")

        if page.view == "detail":
            self._print_rows(page)
        elif page.cards:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Playlist")
            table.add_column("Songs", justify="right")
            for card in page.cards:
                table.add_row(escape(card.name), card.subtitle)
            self.console.print(table)
        else:
            self.console.print(f"🎵 {page.empty_message}", style="bold")
            if page.empty_hint:
                self.console.print(page.empty_hint, style="dim")

        labels = ((BACK_ACTION,) if page.back_enabled else ()) + page.actions
        if labels:
            actions = "  ".join(f"[{action}]" for action in labels)
            self.console.print(actions, style="cyan", markup=False)

    def _print_rows(self, page: Page) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Title")
        table.add_column("Artist")
        table.add_column("Time", justify="right")
        for row in page.rows:
            table.add_row(
                str(row.number), escape(row.title), escape(row.artist), row.duration
            )
        self.console.print(table)

    def hide_page(self) -> None:
        self.visible = False

    def alert(self, message: str) -> None:
        self.console.print(message, markup=False)
