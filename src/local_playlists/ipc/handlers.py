"""Named request handlers exposed to the host UI.

Each handler takes positional JSON-compatible arguments and returns a
response dict that always carries "success" and "message".
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loguru import logger

from local_playlists.domain import playlists
from local_playlists.domain.playlists import OperationResult, Playlist

# Returns the chosen path, or None when the user cancelled
OpenPicker = Callable[[], Optional[Path]]
SavePicker = Callable[[str], Optional[Path]]

Handler = Callable[..., Dict[str, Any]]

GET_LOCAL_PLAYLISTS = "get-local-playlists"
SAVE_PLAYLIST = "save-playlist"
DELETE_PLAYLIST = "delete-playlist"
IMPORT_PLAYLIST_FILE = "import-playlist-file"
EXPORT_PLAYLIST_FILE = "export-playlist-file"


def _cancelled_picker(*_args: Any) -> Optional[Path]:
    return None


class HandlerRegistry:
    """Maps request names to handler functions."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        """Register a handler, replacing any previous one with the same name."""
        self._handlers[name] = handler

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, name: str, args: Optional[list] = None) -> Dict[str, Any]:
        """
        Run a handler and return its response.

        Unknown names and handler exceptions become failure responses.

        Args:
            name: Request name
            args: Positional arguments for the handler

        Returns:
            Response dict with at least "success" and "message"
        """
        if not isinstance(name, str):
            return {"success": False, "message": "Invalid request: request name must be a string"}

        handler = self._handlers.get(name)
        if handler is None:
            logger.warning(f"Unknown request '{name}' (known: {', '.join(self.names())})")
            return {"success": False, "message": f"Unknown request: {name}"}

        try:
            return handler(*(args or []))
        except Exception as e:
            logger.exception(f"Handler '{name}' failed")
            return {"success": False, "message": f"Error processing request: {e}"}


def _playlist_from_payload(payload: Any) -> Playlist:
    if isinstance(payload, Playlist):
        return payload
    return Playlist.from_dict(payload)


def create_playlist_handlers(
    playlists_dir: Path,
    open_picker: OpenPicker = _cancelled_picker,
    save_picker: SavePicker = _cancelled_picker,
    registry: Optional[HandlerRegistry] = None,
) -> HandlerRegistry:
    """
    Register the playlist request handlers.

    Args:
        playlists_dir: Directory holding the playlist records
        open_picker: Asks the user for a file to import
        save_picker: Asks the user for an export destination, given a default file name
        registry: Registry to add to (a new one if None)

    Returns:
        The registry
    """
    registry = registry or HandlerRegistry()

    def get_local_playlists() -> Dict[str, Any]:
        records = playlists.get_all_playlists(playlists_dir)
        return {
            "success": True,
            "message": f"{len(records)} playlists",
            "playlists": [playlist.to_dict() for playlist in records],
        }

    def save_playlist(payload: Any) -> Dict[str, Any]:
        try:
            playlist = _playlist_from_payload(payload)
        except ValueError as e:
            return OperationResult(False, str(e)).to_dict()
        return playlists.save_playlist(playlists_dir, playlist).to_dict()

    def delete_playlist(name: str) -> Dict[str, Any]:
        return playlists.delete_playlist(playlists_dir, name).to_dict()

    def import_playlist_file(path: Optional[str] = None) -> Dict[str, Any]:
        source = Path(path) if path else open_picker()
        if source is None:
            return {"success": False, "message": "Import cancelled"}
        return playlists.import_playlist(playlists_dir, source).to_dict()

    def export_playlist_file(
        payload: Any, format_type: str, path: Optional[str] = None
    ) -> Dict[str, Any]:
        try:
            playlist = _playlist_from_payload(payload)
        except ValueError as e:
            return OperationResult(False, str(e)).to_dict()

        if path:
            destination: Optional[Path] = Path(path)
        else:
            destination = save_picker(
                playlists.default_export_filename(playlist, format_type)
            )
        if destination is None:
            return {"success": False, "message": "Export cancelled"}
        return playlists.export_playlist(playlist, format_type, destination).to_dict()

    registry.register(GET_LOCAL_PLAYLISTS, get_local_playlists)
    registry.register(SAVE_PLAYLIST, save_playlist)
    registry.register(DELETE_PLAYLIST, delete_playlist)
    registry.register(IMPORT_PLAYLIST_FILE, import_playlist_file)
    registry.register(EXPORT_PLAYLIST_FILE, export_playlist_file)
    return registry
