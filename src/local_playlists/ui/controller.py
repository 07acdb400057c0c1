"""UI event handlers for the playlist page.

Every handler takes the current AppContext and the host adapter, performs
one user action and returns the updated context. Results are reported to the
user through adapter.alert.
"""

import random
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger

from local_playlists.context import AppContext
from local_playlists.core.config import EXPORT_FORMATS
from local_playlists.domain import playback, playlists
from local_playlists.domain.playlists import Song

from .adapter import HostUIAdapter
from .render import NAV_LABEL, render
from .state import hide, show_detail, show_list


def start(ctx: AppContext, adapter: HostUIAdapter) -> AppContext:
    """Prepare the playlist directory and add the navigation entry."""
    ctx.playlists_dir.mkdir(parents=True, exist_ok=True)
    if not adapter.insert_nav_item(NAV_LABEL):
        logger.error("Failed to insert the Local Playlists navigation item")
    return ctx


def stop(ctx: AppContext, adapter: HostUIAdapter) -> AppContext:
    """Remove the playlist page from the host."""
    adapter.hide_page()
    return ctx.with_view_state(hide(ctx.view_state))


def open_list(ctx: AppContext, adapter: HostUIAdapter) -> AppContext:
    """Reload playlists from disk and show the list view."""
    state = show_list(ctx.view_state, playlists.get_all_playlists(ctx.playlists_dir))
    adapter.show_page(render(state))
    return ctx.with_view_state(state)


def open_detail(ctx: AppContext, adapter: HostUIAdapter, name: str) -> AppContext:
    """Show the detail view of a playlist, reloaded from disk."""
    playlist = playlists.get_playlist_by_name(ctx.playlists_dir, name)
    if playlist is None:
        adapter.alert("Playlist not found")
        return ctx

    state = show_detail(ctx.view_state, playlist)
    adapter.show_page(render(state))
    return ctx.with_view_state(state)


def leave(ctx: AppContext, adapter: HostUIAdapter) -> AppContext:
    """The user navigated to another host page."""
    return stop(ctx, adapter)


def import_file(
    ctx: AppContext, adapter: HostUIAdapter, pick_file: Callable[[], Optional[Path]]
) -> AppContext:
    """Ask for a playlist file, import it and refresh the list."""
    source = pick_file()
    if source is None:
        adapter.alert("Import cancelled")
        return ctx

    result = playlists.import_playlist(ctx.playlists_dir, source)
    if result.success:
        ctx = open_list(ctx, adapter)
    adapter.alert(result.message)
    return ctx


def create_from_queue(
    ctx: AppContext, adapter: HostUIAdapter, name: Optional[str], songs: Iterable[Song]
) -> AppContext:
    """Save the host's current queue as a new playlist."""
    if not name:
        return ctx

    result = playlists.create_from_queue(ctx.playlists_dir, name, songs)
    adapter.alert(result.message)
    return open_list(ctx, adapter)


def export_current(
    ctx: AppContext,
    adapter: HostUIAdapter,
    format_type: Optional[str],
    pick_destination: Callable[[str], Optional[Path]],
) -> AppContext:
    """Export the playlist shown in the detail view."""
    playlist = ctx.view_state.current
    if playlist is None:
        adapter.alert("Playlist not found")
        return ctx

    if not format_type or format_type not in EXPORT_FORMATS:
        return ctx

    destination = pick_destination(
        playlists.default_export_filename(playlist, format_type)
    )
    if destination is None:
        adapter.alert("Export cancelled")
        return ctx

    result = playlists.export_playlist(playlist, format_type, destination)
    adapter.alert(result.message)
    return ctx


def delete_current(
    ctx: AppContext, adapter: HostUIAdapter, confirm: Callable[[str], bool]
) -> AppContext:
    """Delete the playlist shown in the detail view after confirmation."""
    playlist = ctx.view_state.current
    if playlist is None:
        adapter.alert("Playlist not found")
        return ctx

    if not confirm(f'Delete playlist "{playlist.name}"?'):
        return ctx

    result = playlists.delete_playlist(ctx.playlists_dir, playlist.name)
    adapter.alert(result.message)
    if result.success:
        ctx = open_list(ctx, adapter)
    return ctx


def play_current(
    ctx: AppContext,
    adapter: HostUIAdapter,
    player: playback.Player,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> AppContext:
    """Play all resolvable songs of the playlist in the detail view."""
    outcome = playback.play_playlist(
        ctx.view_state.current, player, shuffle=shuffle, rng=rng
    )
    if not outcome.success:
        adapter.alert(outcome.message)
    return ctx


def play_song(
    ctx: AppContext, adapter: HostUIAdapter, index: int, player: playback.Player
) -> AppContext:
    """Play one song of the detail view by its zero-based position."""
    playlist = ctx.view_state.current
    if playlist is None or not 0 <= index < len(playlist.songs):
        adapter.alert("Song not found")
        return ctx

    outcome = playback.resolve_and_play(playlist.songs[index], player)
    if not outcome.success:
        adapter.alert(outcome.message)
    return ctx
