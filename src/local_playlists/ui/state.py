"""UI state management - immutable state updates.

The playlist page has two views: the list of all playlists and the detail
view of one playlist. Transitions return a new ViewState; nothing is mutated.
"""

from dataclasses import dataclass, field, replace
from typing import Literal, Optional

from local_playlists.domain.playlists import Playlist

View = Literal["list", "detail"]


@dataclass(frozen=True)
class ViewState:
    """What the playlist page currently shows."""

    view: View = "list"
    playlists: tuple[Playlist, ...] = field(default_factory=tuple)
    current: Optional[Playlist] = None  # Set only in the detail view
    page_visible: bool = False


def show_list(state: ViewState, playlists: list[Playlist]) -> ViewState:
    """Switch to the list view with freshly loaded playlists."""
    return replace(
        state,
        view="list",
        playlists=tuple(playlists),
        current=None,
        page_visible=True,
    )


def show_detail(state: ViewState, playlist: Playlist) -> ViewState:
    """Switch to the detail view of one playlist."""
    return replace(state, view="detail", current=playlist, page_visible=True)


def hide(state: ViewState) -> ViewState:
    """Leave the playlist page (the host navigated elsewhere)."""
    return replace(state, view="list", current=None, page_visible=False)


def find_playlist(state: ViewState, name: str) -> Optional[Playlist]:
    """Look up a loaded playlist by exact name."""
    for playlist in state.playlists:
        if playlist.name == name:
            return playlist
    return None
