"""Tests for page rendering."""

import pytest
from rich.console import Console

from local_playlists.domain.playlists import Playlist, Song
from local_playlists.ui import ConsoleUIAdapter
from local_playlists.ui.render import (
    DETAIL_ACTIONS,
    EMPTY_TITLE,
    LIST_ACTIONS,
    format_duration,
    render,
)
from local_playlists.ui.state import ViewState, show_detail, show_list


class TestFormatDuration:
    """Tests for m:ss formatting."""

    @pytest.mark.parametrize(
        "duration,expected",
        [
            ("125", "2:05"),
            ("59", "0:59"),
            ("3600", "60:00"),
            ("61.9", "1:01"),
            ("0", "0:00"),
            (None, "--:--"),
            ("", "--:--"),
            ("abc", "--:--"),
            ("-5", "--:--"),
        ],
    )
    def test_formats(self, duration, expected):
        assert format_duration(duration) == expected


class TestRender:
    """Tests for render()."""

    def test_empty_list(self):
        page = render(show_list(ViewState(), []))

        assert page.view == "list"
        assert page.cards == ()
        assert page.empty_message == EMPTY_TITLE
        assert page.empty_hint
        assert page.actions == LIST_ACTIONS

    def test_list_cards(self):
        page = render(
            show_list(ViewState(), [Playlist(name="A", songs=[Song("x", "t")]), Playlist(name="B")])
        )

        assert [(c.name, c.subtitle) for c in page.cards] == [("A", "1 songs"), ("B", "0 songs")]
        assert page.empty_message is None
        assert not page.back_enabled

    def test_detail_rows(self):
        playlist = Playlist(
            name="Mix",
            songs=[
                Song(video_id="a", title="First", artist="One", duration="125"),
                Song(video_id="", title="Second", artist="Two"),
            ],
        )

        page = render(show_detail(ViewState(), playlist))

        assert page.view == "detail"
        assert page.title == "Mix"
        assert page.subtitle == "2 songs"
        assert page.actions == DETAIL_ACTIONS
        assert page.back_enabled
        assert [(r.number, r.title, r.artist, r.duration) for r in page.rows] == [
            (1, "First", "One", "2:05"),
            (2, "Second", "Two", "--:--"),
        ]


class TestConsoleUIAdapter:
    """Tests for the terminal adapter."""

    def _adapter(self) -> ConsoleUIAdapter:
        return ConsoleUIAdapter(Console(record=True, width=100, color_system=None))

    def test_shows_list(self):
        adapter = self._adapter()

        adapter.show_page(render(show_list(ViewState(), [Playlist(name="[Road] Trip")])))

        output = adapter.console.export_text()
        assert "[Road] Trip" in output
        assert "[Import Playlist]" in output
        assert "[Back]" not in output
        assert adapter.visible

    def test_shows_empty_state(self):
        adapter = self._adapter()

        adapter.show_page(render(show_list(ViewState(), [])))

        assert EMPTY_TITLE in adapter.console.export_text()

    def test_shows_rows(self):
        adapter = self._adapter()
        playlist = Playlist(name="Mix", songs=[Song("a", "First", "One", duration="125")])

        adapter.show_page(render(show_detail(ViewState(), playlist)))

        output = adapter.console.export_text()
        assert "First" in output
        assert "2:05" in output
        assert "[Back]  [Play All]" in output

    def test_nav_item_inserted_once(self):
        adapter = self._adapter()

        assert adapter.insert_nav_item("Local Playlists")
        assert adapter.insert_nav_item("Local Playlists")

        assert adapter.nav_items == ["Local Playlists"]

    def test_alert_prints_literal(self):
        adapter = self._adapter()

        adapter.alert("[bold]not markup[/bold]")

        assert "[bold]not markup[/bold]" in adapter.console.export_text()
