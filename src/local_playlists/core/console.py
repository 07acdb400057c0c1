"""Shared Rich console for the CLI and the console UI adapter."""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def get_console() -> Console:
    """Return the process-wide console, creating it on first use.

    Automatic highlighting is off so numbers and paths inside playlist and
    song names print as plain text.
    """
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def safe_print(message: str, style: Optional[str] = None) -> None:
    """Print text literally (no Rich markup) on the shared console.

    Messages carry user data such as playlist names, so square brackets must
    not be read as markup, and long lines are left unwrapped.

    Args:
        message: The message to print
        style: Optional Rich style string (e.g., "bold red", "green")
    """
    get_console().print(message, style=style, markup=False, emoji=False, soft_wrap=True)
