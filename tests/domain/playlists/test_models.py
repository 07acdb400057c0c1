"""Tests for playlist domain models."""

import re

import pytest

from local_playlists.domain.playlists.models import (
    UNKNOWN_ARTIST,
    OperationResult,
    Playlist,
    Song,
    current_timestamp,
)


class TestCurrentTimestamp:
    """Tests for record timestamps."""

    def test_iso_utc_with_milliseconds(self):
        stamp = current_timestamp()
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", stamp)


class TestSong:
    """Tests for Song serialization."""

    def test_to_dict_omits_unset_optional_fields(self):
        song = Song(video_id="abc123", title="Song", artist="Artist")
        assert song.to_dict() == {"videoId": "abc123", "title": "Song", "artist": "Artist"}

    def test_to_dict_includes_album_and_duration(self):
        song = Song(video_id="a", title="t", artist="r", album="LP", duration="200")
        data = song.to_dict()
        assert data["album"] == "LP"
        assert data["duration"] == "200"

    def test_from_dict_defaults(self):
        song = Song.from_dict({})
        assert song.video_id == ""
        assert song.title == ""
        assert song.artist == UNKNOWN_ARTIST
        assert song.album is None
        assert song.duration is None

    def test_from_dict_keeps_empty_artist(self):
        """Only a missing artist key falls back to Unknown."""
        song = Song.from_dict({"videoId": "x", "title": "t", "artist": ""})
        assert song.artist == ""

    def test_from_dict_stringifies_numeric_duration(self):
        song = Song.from_dict({"videoId": "x", "title": "t", "duration": 125})
        assert song.duration == "125"

    def test_dict_round_trip(self):
        song = Song(video_id="v", title="t", artist="a", album="b", duration="9.5")
        assert Song.from_dict(song.to_dict()) == song


class TestPlaylist:
    """Tests for Playlist serialization."""

    def test_to_dict_key_order(self):
        playlist = Playlist(name="Mix", songs=[Song("v", "t", "a")], created="c", modified="m")
        data = playlist.to_dict()
        assert list(data) == ["name", "songs", "created", "modified"]
        assert data["songs"] == [{"videoId": "v", "title": "t", "artist": "a"}]

    def test_from_dict_requires_name(self):
        with pytest.raises(ValueError):
            Playlist.from_dict({"songs": []})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            Playlist.from_dict(["not", "a", "record"])

    def test_from_dict_missing_songs(self):
        playlist = Playlist.from_dict({"name": "Bare"})
        assert playlist.songs == []
        assert playlist.created == ""


class TestOperationResult:
    """Tests for OperationResult payloads."""

    def test_failure_payload(self):
        assert OperationResult(False, "Playlist not found").to_dict() == {
            "success": False,
            "message": "Playlist not found",
        }

    def test_success_payload_includes_playlist_and_path(self, tmp_path):
        playlist = Playlist(name="Mix")
        result = OperationResult(True, "ok", playlist=playlist, path=tmp_path / "mix.json")

        data = result.to_dict()

        assert data["playlist"]["name"] == "Mix"
        assert data["path"] == str(tmp_path / "mix.json")

    def test_is_immutable(self):
        result = OperationResult(True, "ok")
        with pytest.raises(AttributeError):
            result.success = False
