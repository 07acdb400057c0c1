"""Tests for the IPC server and client."""

import json
import shutil
import socket
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from local_playlists.core.config import NotificationsConfig
from local_playlists.ipc import client
from local_playlists.ipc.handlers import GET_LOCAL_PLAYLISTS, SAVE_PLAYLIST, create_playlist_handlers
from local_playlists.ipc.server import IPCServer, get_socket_path, handle_payload, read_line


@pytest.fixture
def registry(tmp_path):
    return create_playlist_handlers(tmp_path / "store")


@pytest.fixture
def short_socket_path():
    # AF_UNIX paths are limited to ~100 bytes, so avoid pytest's deep tmp_path
    directory = tempfile.mkdtemp(prefix="lp")
    yield Path(directory) / "control.sock"
    shutil.rmtree(directory, ignore_errors=True)


class TestSocketPath:
    """Tests for socket location."""

    def test_uses_runtime_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))

        assert get_socket_path() == tmp_path / "local-playlists" / "control.sock"

    def test_falls_back_to_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_socket_path() == tmp_path / "local-playlists" / "control.sock"


class TestHandlePayload:
    """Tests for request decoding."""

    def test_dispatches_request(self, registry):
        response = handle_payload(registry, b'{"request": "get-local-playlists", "args": []}\n')

        assert response["success"]
        assert response["playlists"] == []

    def test_invalid_json(self, registry):
        response = handle_payload(registry, b"not json\n")

        assert not response["success"]
        assert response["message"].startswith("Invalid JSON")

    def test_non_object(self, registry):
        response = handle_payload(registry, b"[1, 2]\n")

        assert not response["success"]

    def test_scalar_args_are_wrapped(self, registry):
        response = handle_payload(
            registry, b'{"request": "delete-playlist", "args": "Missing"}\n'
        )

        assert response["message"] == "Playlist not found"

    def test_missing_request_name(self, registry):
        response = handle_payload(registry, b"{}\n")

        assert response["message"] == "Unknown request: "

    @pytest.mark.parametrize(
        "raw",
        [b'{"request": ["x"], "args": []}\n', b'{"request": {"a": 1}}\n', b'{"request": 7}\n'],
    )
    def test_non_string_request_name(self, registry, raw):
        response = handle_payload(registry, raw)

        assert response == {
            "success": False,
            "message": "Invalid request: request name must be a string",
        }


class TestClientWithoutServer:
    """Tests for the client when nothing is listening."""

    def test_missing_socket(self, tmp_path):
        response = client.send_request(GET_LOCAL_PLAYLISTS, socket_path=tmp_path / "none.sock")

        assert response == {"success": False, "message": "Local Playlists is not running"}


class TestRoundTrip:
    """Tests for a live server/client exchange."""

    def test_save_and_list_over_socket(self, registry, short_socket_path):
        server = IPCServer(registry, socket_path=short_socket_path)
        server.start()
        assert server.running
        try:
            record = {"name": "Remote", "songs": [{"videoId": "a", "title": "t", "artist": "r"}]}
            saved = client.send_request(SAVE_PLAYLIST, [record], socket_path=short_socket_path)
            listed = client.send_request(GET_LOCAL_PLAYLISTS, socket_path=short_socket_path)
        finally:
            server.stop()

        assert saved["success"]
        assert [p["name"] for p in listed["playlists"]] == ["Remote"]
        assert not short_socket_path.exists()
        assert not server.running

    def test_bad_request_does_not_stop_server(self, registry, short_socket_path):
        server = IPCServer(registry, socket_path=short_socket_path)
        server.start()
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(5.0)
                sock.connect(str(short_socket_path))
                sock.sendall(b'{"request": {"a": 1}}\n')
                bad = json.loads(read_line(sock))

            listed = client.send_request(GET_LOCAL_PLAYLISTS, socket_path=short_socket_path)
            alive = server.running
        finally:
            server.stop()

        assert bad["success"] is False
        assert bad["message"].startswith("Invalid request")
        assert listed["success"]
        assert alive

    def test_unserializable_response_is_reported(self, registry, short_socket_path):
        registry.register("odd", lambda: {"success": True, "message": object()})
        server = IPCServer(registry, socket_path=short_socket_path)
        server.start()
        try:
            odd = client.send_request("odd", socket_path=short_socket_path)
            listed = client.send_request(GET_LOCAL_PLAYLISTS, socket_path=short_socket_path)
        finally:
            server.stop()

        assert odd["success"] is False
        assert odd["message"].startswith("Error processing request")
        assert listed["success"]


class TestNotifications:
    """Tests for desktop notifications on handled requests."""

    def test_success_notification(self, registry):
        server = IPCServer(registry, notifications_config=NotificationsConfig())

        with patch("local_playlists.ipc.server.notifications.notify_success") as mock_notify:
            server._notify({"success": True, "message": "Playlist saved successfully"})

        mock_notify.assert_called_once_with("Playlist saved successfully")

    def test_errors_can_be_muted(self, registry):
        server = IPCServer(
            registry, notifications_config=NotificationsConfig(show_errors=False)
        )

        with patch("local_playlists.ipc.server.notifications.notify_error") as mock_notify:
            server._notify({"success": False, "message": "Playlist not found"})

        mock_notify.assert_not_called()

    def test_no_config_means_no_notifications(self, registry):
        server = IPCServer(registry)

        with patch("local_playlists.ipc.server.notifications.notify_success") as mock_notify:
            server._notify({"success": True, "message": "1 playlists"})

        mock_notify.assert_not_called()
