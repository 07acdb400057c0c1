"""
Playlist export functionality for Local Playlists.
Supports exporting to JSON, CSV, M3U and plain text.
"""

from pathlib import Path
from typing import Callable

from loguru import logger

from .models import OperationResult, Playlist
from .storage import serialize_playlist

CSV_HEADER = "PlaylistName,MediaId,Title,Artists,Duration"
M3U_HEADER = "#EXTM3U"
M3U_UNKNOWN_DURATION = "-1"


def render_json(playlist: Playlist) -> str:
    """Full playlist record, pretty-printed."""
    return serialize_playlist(playlist)


def render_csv(playlist: Playlist) -> str:
    """
    CSV with one row per song.

    Fields are joined verbatim without quoting, so a comma inside a title or
    artist shifts the columns when the file is imported again.
    """
    rows = [
        f"{playlist.name},{song.video_id},{song.title},{song.artist},{song.duration or ''}"
        for song in playlist.songs
    ]
    return CSV_HEADER + "\n" + "\n".join(rows)


def render_m3u(playlist: Playlist) -> str:
    """Extended M3U: an #EXTINF line followed by the bare video id per song."""
    entries = [
        f"#EXTINF:{song.duration or M3U_UNKNOWN_DURATION},{song.artist} - {song.title}\n{song.video_id}"
        for song in playlist.songs
    ]
    return M3U_HEADER + "\n" + "\n".join(entries)


def render_txt(playlist: Playlist) -> str:
    """One 'Artist - Title' line per song, with ' [id]' when the id is known."""
    lines = []
    for song in playlist.songs:
        line = f"{song.artist} - {song.title}"
        if song.video_id:
            line += f" [{song.video_id}]"
        lines.append(line)
    return "\n".join(lines)


RENDERERS: dict[str, Callable[[Playlist], str]] = {
    "json": render_json,
    "csv": render_csv,
    "m3u": render_m3u,
    "txt": render_txt,
}


def render_playlist(playlist: Playlist, format_type: str) -> str:
    """
    Serialize a playlist to an interchange format.

    Args:
        playlist: Playlist to serialize
        format_type: 'json', 'csv', 'm3u' or 'txt'

    Returns:
        File content

    Raises:
        ValueError: If format is unsupported
    """
    renderer = RENDERERS.get(format_type)
    if renderer is None:
        raise ValueError(
            f"Unsupported format: {format_type}. Use one of: {', '.join(RENDERERS)}"
        )
    return renderer(playlist)


def default_export_filename(playlist: Playlist, format_type: str) -> str:
    """Suggested file name offered by the save picker."""
    return f"{playlist.name}.{format_type}"


def export_playlist(
    playlist: Playlist, format_type: str, output_path: Path
) -> OperationResult:
    """
    Export a playlist to a file chosen by the caller.

    The content is built completely before the file is opened, so a failed
    or unsupported export leaves no partial file behind.

    Args:
        playlist: Playlist to export
        format_type: 'json', 'csv', 'm3u' or 'txt'
        output_path: Destination file

    Returns:
        OperationResult with the written path on success
    """
    if format_type not in RENDERERS:
        logger.warning(f"Unsupported export format requested: {format_type}")
        return OperationResult(False, "Unsupported format")

    try:
        content = render_playlist(playlist, format_type)
        output_path = Path(output_path)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Error exporting playlist '{playlist.name}': {e}")
        return OperationResult(False, str(e))

    logger.info(
        f"Exported playlist '{playlist.name}' as {format_type} to {output_path}"
    )
    return OperationResult(
        True, "Playlist exported successfully", playlist=playlist, path=output_path
    )
