"""Pure rendering of view state into a page description for the host UI."""

from dataclasses import dataclass
from typing import Optional

from .state import ViewState

PAGE_TITLE = "Local Playlists"
NAV_LABEL = "Local Playlists"
EMPTY_TITLE = "No local playlists yet"
EMPTY_HINT = "Import a playlist or create one from your current queue to get started"

LIST_ACTIONS = ("Import Playlist", "Create from Queue")
DETAIL_ACTIONS = ("Play All", "Shuffle", "Export", "Delete")

UNKNOWN_DURATION = "--:--"


@dataclass(frozen=True)
class PlaylistCard:
    name: str
    subtitle: str


@dataclass(frozen=True)
class SongRow:
    number: int
    title: str
    artist: str
    duration: str


@dataclass(frozen=True)
class Page:
    """Everything the host needs to draw the playlist page."""

    view: str
    title: str
    subtitle: str = ""
    actions: tuple[str, ...] = ()
    cards: tuple[PlaylistCard, ...] = ()
    rows: tuple[SongRow, ...] = ()
    empty_message: Optional[str] = None
    empty_hint: Optional[str] = None
    back_enabled: bool = False


def format_duration(duration: Optional[str]) -> str:
    """
    Format a duration in seconds as m:ss.

    Args:
        duration: Decimal seconds as text (fractions are dropped)

    Returns:
        "m:ss", or "--:--" when missing or not a number

    Examples:
        >>> format_duration("125")
        '2:05'
        >>> format_duration(None)
        '--:--'
    """
    if not duration:
        return UNKNOWN_DURATION
    try:
        seconds = int(float(duration))
    except (TypeError, ValueError):
        return UNKNOWN_DURATION
    if seconds < 0:
        return UNKNOWN_DURATION
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def _song_count(count: int) -> str:
    return f"{count} songs"


def render(state: ViewState) -> Page:
    """Build the page for the current view."""
    if state.view == "detail" and state.current is not None:
        playlist = state.current
        return Page(
            view="detail",
            title=playlist.name,
            subtitle=_song_count(len(playlist.songs)),
            actions=DETAIL_ACTIONS,
            rows=tuple(
                SongRow(
                    number=index + 1,
                    title=song.title,
                    artist=song.artist,
                    duration=format_duration(song.duration),
                )
                for index, song in enumerate(playlist.songs)
            ),
            back_enabled=True,
        )

    return Page(
        view="list",
        title=PAGE_TITLE,
        actions=LIST_ACTIONS,
        cards=tuple(
            PlaylistCard(name=playlist.name, subtitle=_song_count(len(playlist.songs)))
            for playlist in state.playlists
        ),
        empty_message=None if state.playlists else EMPTY_TITLE,
        empty_hint=None if state.playlists else EMPTY_HINT,
    )
