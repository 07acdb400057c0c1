"""
Playlist record storage for Local Playlists.

One pretty-printed JSON file per playlist, named after the sanitized playlist
name. Every save rewrites the whole record; there is no index and no locking,
so two names that sanitize to the same filename overwrite each other.
"""

import json
import os
import re
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from .models import OperationResult, Playlist, Song, current_timestamp

RECORD_SUFFIX = ".json"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


def playlist_filename(name: str) -> str:
    """
    Derive the storage filename for a playlist name.

    Every character outside [a-zA-Z0-9] becomes "_" and the result is
    lowercased, so "My Playlist!" and "my_playlist " both map to
    "my_playlist_.json".

    Args:
        name: Playlist display name

    Returns:
        Filename (not a path) ending in .json
    """
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', name).lower()}{RECORD_SUFFIX}"


def playlist_path(playlists_dir: Path, name: str) -> Path:
    """Full path of the record file for a playlist name."""
    return Path(playlists_dir) / playlist_filename(name)


def read_playlist_file(file_path: Path) -> Playlist:
    """
    Parse a single playlist record file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not a valid playlist record
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return Playlist.from_dict(data)


def serialize_playlist(playlist: Playlist) -> str:
    """Pretty-printed JSON for a playlist record."""
    return json.dumps(playlist.to_dict(), indent=2, ensure_ascii=False)


def get_all_playlists(playlists_dir: Path) -> list[Playlist]:
    """
    Load every playlist record in the directory.

    Records come back in directory-listing order. If the directory cannot be
    read or any single record fails to parse, an empty list is returned.

    Args:
        playlists_dir: Directory holding the playlist records

    Returns:
        List of playlists (possibly empty)
    """
    try:
        playlists = []
        for file_name in os.listdir(playlists_dir):
            if not file_name.endswith(RECORD_SUFFIX):
                continue
            playlists.append(read_playlist_file(Path(playlists_dir) / file_name))
        return playlists
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Error loading playlists from {playlists_dir}: {e}")
        return []


def get_playlist_by_name(playlists_dir: Path, name: str) -> Optional[Playlist]:
    """
    Find a playlist by its exact display name.

    Args:
        playlists_dir: Directory holding the playlist records
        name: Playlist display name

    Returns:
        The playlist, or None if no record carries that name
    """
    for playlist in get_all_playlists(playlists_dir):
        if playlist.name == name:
            return playlist
    return None


def save_playlist(playlists_dir: Path, playlist: Playlist) -> OperationResult:
    """
    Persist a playlist, overwriting any record with the same filename.

    Refreshes playlist.modified and sets playlist.created to the same value
    when it is not yet set. The playlist object is updated in place.

    Args:
        playlists_dir: Directory holding the playlist records
        playlist: Playlist to write

    Returns:
        OperationResult carrying the saved playlist and its path
    """
    try:
        if not playlist.name:
            raise ValueError("Playlist name is required")

        file_path = playlist_path(playlists_dir, playlist.name)

        playlist.modified = current_timestamp()
        if not playlist.created:
            playlist.created = playlist.modified

        content = serialize_playlist(playlist)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)

        logger.info(
            f"Saved playlist '{playlist.name}' ({len(playlist.songs)} songs) to {file_path}"
        )
        return OperationResult(
            True, "Playlist saved successfully", playlist=playlist, path=file_path
        )
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Error saving playlist: {e}")
        return OperationResult(False, str(e))


def delete_playlist(playlists_dir: Path, name: str) -> OperationResult:
    """
    Delete the record backing a playlist name.

    Args:
        playlists_dir: Directory holding the playlist records
        name: Playlist display name

    Returns:
        OperationResult; a missing record is reported as "Playlist not found"
    """
    try:
        file_path = playlist_path(playlists_dir, name)

        if file_path.exists():
            file_path.unlink()
            logger.info(f"Deleted playlist '{name}' ({file_path})")
            return OperationResult(
                True, "Playlist deleted successfully", path=file_path
            )

        logger.warning(f"Delete requested for unknown playlist '{name}'")
        return OperationResult(False, "Playlist not found")
    except OSError as e:
        logger.error(f"Error deleting playlist: {e}")
        return OperationResult(False, str(e))


def create_from_queue(
    playlists_dir: Path, name: str, songs: Iterable[Song]
) -> OperationResult:
    """
    Save a new playlist built from the songs currently in the player queue.

    Args:
        playlists_dir: Directory holding the playlist records
        name: Name for the new playlist
        songs: Songs captured from the queue, in queue order

    Returns:
        OperationResult from save_playlist, or a failure when there is
        nothing to save
    """
    name = (name or "").strip()
    if not name:
        return OperationResult(False, "Playlist name is required")

    queued = list(songs)
    if not queued:
        return OperationResult(False, "No songs found in queue. Play some music first!")

    return save_playlist(playlists_dir, Playlist(name=name, songs=queued))
