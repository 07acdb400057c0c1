"""Local Playlists - one-JSON-file-per-playlist store with JSON/CSV/M3U/TXT import and export."""

__version__ = "0.1.0"
