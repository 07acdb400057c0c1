"""
Playlist import functionality for Local Playlists.
Supports importing JSON, CSV, TXT and M3U playlists.

Every successful import is saved straight into the playlist directory, so an
import always produces a local copy.
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger

from .models import UNKNOWN_ARTIST, OperationResult, Playlist, Song, current_timestamp
from .storage import save_playlist

ARTIST_TITLE_SEPARATOR = " - "

# Lowercase substrings used to locate CSV columns in the header row
CSV_MEDIA_ID_COLUMN = "mediaid"
CSV_TITLE_COLUMN = "title"
CSV_ARTISTS_COLUMN = "artists"
CSV_PLAYLIST_NAME_COLUMN = "playlistname"
CSV_DURATION_COLUMN = "duration"


def detect_playlist_format(local_path: Path) -> Optional[str]:
    """
    Detect the format of a playlist file.

    Args:
        local_path: Path to the playlist file

    Returns:
        Format string ('json', 'csv', 'lines') or None if unknown.
        TXT and M3U share the line-oriented parser.
    """
    suffix = local_path.suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix == ".csv":
        return "csv"
    elif suffix in [".txt", ".m3u"]:
        return "lines"

    return None


def parse_json_playlist(content: str, fallback_name: str) -> Playlist:
    """
    Parse a JSON playlist record.

    Missing name falls back to fallback_name, missing songs to an empty list
    and missing created to the current time.

    Raises:
        ValueError: If content is not a JSON object
    """
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("JSON playlist must be an object")

    return Playlist(
        name=str(data.get("name") or fallback_name),
        songs=[Song.from_dict(song) for song in data.get("songs") or []],
        created=str(data.get("created") or current_timestamp()),
        modified=current_timestamp(),
    )


def _find_column(header: list[str], needle: str) -> int:
    for index, column in enumerate(header):
        if needle in column.lower():
            return index
    return -1


def _field(parts: list[str], index: int) -> Optional[str]:
    if 0 <= index < len(parts):
        return parts[index].strip()
    return None


def parse_csv_playlist(content: str, fallback_name: str) -> Playlist:
    """
    Parse a CSV playlist export.

    The first non-blank line is the header. Columns are located by
    case-insensitive substring match (mediaid, title, artists, playlistname,
    duration); each is optional. Rows are split on bare commas, so quoted
    fields containing commas shift the remaining columns. Rows too short to
    reach the detected mediaid/title/artists columns are skipped.

    Raises:
        ValueError: If the content has no non-blank lines
    """
    lines = [line for line in content.split("\n") if line.strip()]
    if not lines:
        raise ValueError("Empty CSV file")

    header = lines[0].split(",")
    media_id_idx = _find_column(header, CSV_MEDIA_ID_COLUMN)
    title_idx = _find_column(header, CSV_TITLE_COLUMN)
    artists_idx = _find_column(header, CSV_ARTISTS_COLUMN)
    playlist_name_idx = _find_column(header, CSV_PLAYLIST_NAME_COLUMN)
    duration_idx = _find_column(header, CSV_DURATION_COLUMN)

    playlist_name = fallback_name
    if len(lines) > 1 and playlist_name_idx >= 0:
        playlist_name = _field(lines[1].split(","), playlist_name_idx) or fallback_name

    required_width = max(media_id_idx, title_idx, artists_idx)

    songs = []
    for row_num, line in enumerate(lines[1:], start=2):
        parts = line.split(",")
        if len(parts) <= required_width:
            logger.debug(f"CSV row {row_num}: {len(parts)} fields, skipping")
            continue

        if media_id_idx >= 0:
            video_id = parts[media_id_idx].strip()
        else:
            video_id = ""

        if title_idx >= 0:
            title = parts[title_idx].strip()
        else:
            title = _field(parts, 1) or ""

        if artists_idx >= 0:
            artist = parts[artists_idx].strip()
        else:
            artist = _field(parts, 2) or UNKNOWN_ARTIST

        duration = _field(parts, duration_idx) if duration_idx >= 0 else None

        songs.append(
            Song(video_id=video_id, title=title, artist=artist, duration=duration)
        )

    now = current_timestamp()
    return Playlist(name=playlist_name, songs=songs, created=now, modified=now)


def parse_song_line(line: str) -> Song:
    """
    Parse one TXT/M3U line into a Song.

    "Artist - Title" splits on the first separator and leaves video_id empty
    for later resolution by search; anything else is taken as a raw
    identifier.
    """
    line = line.strip()
    if ARTIST_TITLE_SEPARATOR in line:
        artist, title = line.split(ARTIST_TITLE_SEPARATOR, 1)
        return Song(video_id="", title=title.strip(), artist=artist.strip())
    return Song(video_id=line, title=line, artist=UNKNOWN_ARTIST)


def parse_lines_playlist(content: str, name: str) -> Playlist:
    """
    Parse a TXT or M3U playlist: one song per non-blank line, '#' lines skipped.

    #EXTINF metadata is skipped with the other comments, so an M3U entry
    contributes only its identifier line.
    """
    songs = []
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        songs.append(parse_song_line(stripped))

    now = current_timestamp()
    return Playlist(name=name, songs=songs, created=now, modified=now)


def read_playlist_source(local_path: Path) -> Playlist:
    """
    Read and parse a playlist file without saving it.

    Args:
        local_path: Path to the source file

    Returns:
        Parsed playlist

    Raises:
        ValueError: If the format is unsupported or the content is invalid
        OSError: If the file cannot be read
    """
    format_type = detect_playlist_format(local_path)
    if format_type is None:
        raise ValueError("Unsupported file format")

    with open(local_path, "r", encoding="utf-8") as f:
        content = f.read()

    fallback_name = local_path.stem

    if format_type == "json":
        return parse_json_playlist(content, fallback_name)
    elif format_type == "csv":
        return parse_csv_playlist(content, fallback_name)
    return parse_lines_playlist(content, fallback_name)


def import_playlist(playlists_dir: Path, local_path: Path) -> OperationResult:
    """
    Import a playlist from a file, auto-detecting format, and save it.

    Args:
        playlists_dir: Directory holding the playlist records
        local_path: Path to the playlist file (.json, .csv, .txt, .m3u)

    Returns:
        OperationResult with the imported playlist on success
    """
    local_path = Path(local_path)

    if detect_playlist_format(local_path) is None:
        logger.warning(f"Unsupported playlist format: {local_path.suffix} ({local_path})")
        return OperationResult(False, "Unsupported file format")

    try:
        playlist = read_playlist_source(local_path)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Error importing playlist from {local_path}: {e}")
        return OperationResult(False, str(e))

    saved = save_playlist(playlists_dir, playlist)
    if not saved.success:
        return saved

    logger.info(f"Imported {local_path} as '{playlist.name}'")
    return OperationResult(
        True,
        f'Playlist "{playlist.name}" imported with {len(playlist.songs)} songs',
        playlist=playlist,
        path=saved.path,
    )
