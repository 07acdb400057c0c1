"""Application context for explicit state passing.

This module provides the AppContext dataclass that encapsulates application
state, so UI handlers take a context and return an updated one instead of
mutating globals.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from rich.console import Console

from local_playlists.core.config import Config
from local_playlists.ui.state import ViewState


@dataclass(frozen=True)
class AppContext:
    """Immutable application context passed to UI handlers.

    Attributes:
        config: Application configuration
        view_state: What the playlist page currently shows
        console: Rich Console for formatted output
    """

    config: Config
    view_state: ViewState
    console: Optional[Console] = None

    @classmethod
    def create(cls, config: Config, console: Optional[Console] = None) -> 'AppContext':
        """Create initial application context with the page hidden."""
        return cls(config=config, view_state=ViewState(), console=console)

    @property
    def playlists_dir(self) -> Path:
        return self.config.playlists_path

    def with_view_state(self, state: ViewState) -> 'AppContext':
        """Return new context with updated view state."""
        return replace(self, view_state=state)
