"""Tests for immutable view state transitions."""

from local_playlists.domain.playlists import Playlist
from local_playlists.ui.state import ViewState, find_playlist, hide, show_detail, show_list


class TestViewState:
    """Tests for view transitions."""

    def test_initial_state_is_hidden_list(self):
        state = ViewState()

        assert state.view == "list"
        assert state.playlists == ()
        assert state.current is None
        assert not state.page_visible

    def test_show_list_does_not_mutate(self):
        state = ViewState()

        new_state = show_list(state, [Playlist(name="A")])

        assert state.playlists == ()
        assert new_state.page_visible
        assert [p.name for p in new_state.playlists] == ["A"]

    def test_detail_then_list_clears_current(self):
        playlist = Playlist(name="A")
        state = show_detail(show_list(ViewState(), [playlist]), playlist)

        assert state.view == "detail"
        assert state.current is playlist

        state = show_list(state, [playlist])
        assert state.view == "list"
        assert state.current is None

    def test_hide(self):
        state = hide(show_detail(ViewState(), Playlist(name="A")))

        assert not state.page_visible
        assert state.current is None

    def test_find_playlist(self):
        state = show_list(ViewState(), [Playlist(name="A"), Playlist(name="B")])

        assert find_playlist(state, "B").name == "B"
        assert find_playlist(state, "C") is None
