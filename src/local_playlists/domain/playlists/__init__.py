"""Playlists domain - local playlist records with import/export.

This domain handles:
- The Song/Playlist model and operation results
- One-JSON-file-per-playlist storage (list, save, delete)
- Import from JSON/CSV/TXT/M3U
- Export to JSON/CSV/M3U/TXT
"""

# Models
from .models import (
    UNKNOWN_ARTIST,
    Song,
    Playlist,
    OperationResult,
    current_timestamp,
)

# Storage
from .storage import (
    playlist_filename,
    playlist_path,
    get_all_playlists,
    get_playlist_by_name,
    save_playlist,
    delete_playlist,
    create_from_queue,
)

# Import
from .importers import (
    detect_playlist_format,
    read_playlist_source,
    import_playlist,
)

# Export
from .exporters import (
    render_playlist,
    default_export_filename,
    export_playlist,
)

__all__ = [
    # Models
    "UNKNOWN_ARTIST",
    "Song",
    "Playlist",
    "OperationResult",
    "current_timestamp",
    # Storage
    "playlist_filename",
    "playlist_path",
    "get_all_playlists",
    "get_playlist_by_name",
    "save_playlist",
    "delete_playlist",
    "create_from_queue",
    # Import
    "detect_playlist_format",
    "read_playlist_source",
    "import_playlist",
    # Export
    "render_playlist",
    "default_export_filename",
    "export_playlist",
]
