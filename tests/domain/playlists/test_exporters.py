"""Tests for playlist export."""

import json
import os

import pytest

from local_playlists.domain.playlists.exporters import (
    CSV_HEADER,
    default_export_filename,
    export_playlist,
    render_csv,
    render_m3u,
    render_playlist,
    render_txt,
)
from local_playlists.domain.playlists.models import Playlist, Song


@pytest.fixture
def playlist() -> Playlist:
    return Playlist(
        name="Road Trip",
        songs=[
            Song(video_id="abc123", title="Song", artist="Artist", duration="125"),
            Song(video_id="", title="One More Time", artist="Daft Punk"),
        ],
        created="2024-01-01T00:00:00.000Z",
        modified="2024-01-02T00:00:00.000Z",
    )


class TestRenderers:
    """Tests for per-format rendering."""

    def test_m3u_single_song(self):
        single = Playlist(
            name="x",
            songs=[Song(video_id="abc123", title="Song", artist="Artist", duration="125")],
        )
        assert render_m3u(single) == "#EXTM3U\n#EXTINF:125,Artist - Song\nabc123"

    def test_m3u_unknown_duration(self, playlist):
        lines = render_m3u(playlist).split("\n")
        assert lines[3] == "#EXTINF:-1,Daft Punk - One More Time"
        assert lines[4] == ""

    def test_csv_rows(self, playlist):
        assert render_csv(playlist) == (
            f"{CSV_HEADER}\n"
            "Road Trip,abc123,Song,Artist,125\n"
            "Road Trip,,One More Time,Daft Punk,"
        )

    def test_csv_empty_playlist(self):
        assert render_csv(Playlist(name="Empty")) == CSV_HEADER + "\n"

    def test_txt_appends_known_ids(self, playlist):
        assert render_txt(playlist) == "Artist - Song [abc123]\nDaft Punk - One More Time"

    def test_json_is_full_record(self, playlist):
        data = json.loads(render_playlist(playlist, "json"))
        assert data == playlist.to_dict()

    def test_unknown_format_raises(self, playlist):
        with pytest.raises(ValueError):
            render_playlist(playlist, "xml")


class TestExportPlaylist:
    """Tests for export_playlist."""

    def test_writes_file(self, playlist, tmp_path):
        target = tmp_path / "road.m3u"

        result = export_playlist(playlist, "m3u", target)

        assert result.success
        assert result.message == "Playlist exported successfully"
        assert target.read_text(encoding="utf-8").startswith("#EXTM3U\n")

    def test_unsupported_format_creates_no_file(self, playlist, tmp_path):
        target = tmp_path / "road.xml"

        result = export_playlist(playlist, "xml", target)

        assert not result.success
        assert "Unsupported format" in result.message
        assert not target.exists()
        assert os.listdir(tmp_path) == []

    def test_unwritable_destination(self, playlist, tmp_path):
        result = export_playlist(playlist, "txt", tmp_path / "missing" / "road.txt")

        assert not result.success

    def test_does_not_touch_store(self, playlist, tmp_path):
        export_playlist(playlist, "json", tmp_path / "out.json")

        assert playlist.modified == "2024-01-02T00:00:00.000Z"


class TestDefaultExportFilename:
    """Tests for the save dialog suggestion."""

    def test_name_and_extension(self, playlist):
        assert default_export_filename(playlist, "csv") == "Road Trip.csv"
