"""Playlist page UI: view state, rendering and host adapter."""

from .adapter import ConsoleUIAdapter, HostUIAdapter
from .render import Page, format_duration, render
from .state import ViewState, hide, show_detail, show_list

__all__ = [
    "ConsoleUIAdapter",
    "HostUIAdapter",
    "Page",
    "format_duration",
    "render",
    "ViewState",
    "hide",
    "show_detail",
    "show_list",
]
