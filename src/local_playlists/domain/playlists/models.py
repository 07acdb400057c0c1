"""
Playlist domain models.

Contains the canonical in-memory representation of playlist records and the
result value every store operation returns.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

UNKNOWN_ARTIST = "Unknown"


def current_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2026-10-19T08:15:30.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass
class Song:
    """One track reference.

    video_id is an opaque external identifier and may be empty when the song
    still has to be resolved by search. duration is decimal seconds as text.
    """

    video_id: str
    title: str
    artist: str = UNKNOWN_ARTIST
    album: Optional[str] = None
    duration: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk record shape (optional keys omitted when unset)."""
        data: dict[str, Any] = {
            "videoId": self.video_id,
            "title": self.title,
            "artist": self.artist,
        }
        if self.album is not None:
            data["album"] = self.album
        if self.duration is not None:
            data["duration"] = self.duration
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Song":
        """Create Song from a record dictionary, filling defaults for missing keys."""
        artist = data.get("artist")
        return cls(
            video_id=str(data.get("videoId") or ""),
            title=str(data.get("title") or ""),
            artist=UNKNOWN_ARTIST if artist is None else str(artist),
            album=_optional_text(data.get("album")),
            duration=_optional_text(data.get("duration")),
        )


@dataclass
class Playlist:
    """A named, ordered collection of songs."""

    name: str
    songs: list[Song] = field(default_factory=list)
    created: str = ""
    modified: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk record shape."""
        return {
            "name": self.name,
            "songs": [song.to_dict() for song in self.songs],
            "created": self.created,
            "modified": self.modified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Playlist":
        """Create Playlist from a record dictionary.

        Raises:
            ValueError: If the record is not a JSON object or has no name
        """
        if not isinstance(data, dict):
            raise ValueError("Playlist record must be a JSON object")
        name = data.get("name")
        if not name:
            raise ValueError("Playlist record has no name")
        return cls(
            name=str(name),
            songs=[Song.from_dict(song) for song in data.get("songs") or []],
            created=str(data.get("created") or ""),
            modified=str(data.get("modified") or ""),
        )


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a store operation.

    Operations never raise to their caller; failures carry the error text in
    message.
    """

    success: bool
    message: str
    playlist: Optional[Playlist] = None
    path: Optional[Path] = None

    def to_dict(self) -> dict[str, Any]:
        """Response payload for request handlers."""
        data: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.playlist is not None:
            data["playlist"] = self.playlist.to_dict()
        if self.path is not None:
            data["path"] = str(self.path)
        return data
