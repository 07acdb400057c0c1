"""IPC server for receiving playlist requests from external processes."""

import json
import os
import socket
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from local_playlists import notifications
from local_playlists.core.config import NotificationsConfig, get_data_dir

from .handlers import HandlerRegistry

MAX_REQUEST_BYTES = 1024 * 1024
CONNECTION_TIMEOUT = 5.0


def get_socket_path() -> Path:
    """
    Get the path to the Local Playlists control socket.

    Returns:
        Path to Unix socket
    """
    # Use XDG_RUNTIME_DIR if available, otherwise fall back to the data dir
    runtime_dir = os.environ.get('XDG_RUNTIME_DIR')
    if runtime_dir:
        return Path(runtime_dir) / 'local-playlists' / 'control.sock'
    return get_data_dir() / 'control.sock'


def handle_payload(registry: HandlerRegistry, raw: bytes) -> Dict[str, Any]:
    """
    Decode one request line and dispatch it.

    Args:
        registry: Handlers to dispatch to
        raw: Newline-terminated JSON {"request": name, "args": [...]}

    Returns:
        Response dict
    """
    try:
        payload = json.loads(raw.decode('utf-8').strip())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return {'success': False, 'message': f'Invalid JSON: {e}'}

    if not isinstance(payload, dict):
        return {'success': False, 'message': 'Invalid request: expected a JSON object'}

    request = payload.get('request', '')
    if not isinstance(request, str):
        return {'success': False, 'message': 'Invalid request: request name must be a string'}
    args = payload.get('args', [])
    if not isinstance(args, list):
        args = [args]

    return registry.dispatch(request, args)


def read_line(conn: socket.socket) -> bytes:
    """Read from conn until the first newline, EOF or MAX_REQUEST_BYTES."""
    buffer = bytearray()
    while b'\n' not in buffer and len(buffer) < MAX_REQUEST_BYTES:
        chunk = conn.recv(4096)
        if not chunk:
            break
        buffer.extend(chunk)
    return bytes(buffer)


def _remove_socket_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove socket {path}: {e}")


class IPCServer:
    """Unix socket server for playlist requests.

    The socket is bound in start(); requests are then served from a daemon
    thread one connection at a time, so they are processed strictly in
    arrival order.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        socket_path: Optional[Path] = None,
        notifications_config: Optional[NotificationsConfig] = None,
    ):
        """
        Args:
            registry: Request handlers
            socket_path: Socket location (default: get_socket_path())
            notifications_config: Desktop notification settings (None disables them)
        """
        self.registry = registry
        self.socket_path = socket_path or get_socket_path()
        self.notifications_config = notifications_config
        self._listener: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._stopping = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind the socket and serve requests in a background thread."""
        if self.running:
            return

        self.socket_path.parent.mkdir(parents=True, exist_ok=True)
        _remove_socket_file(self.socket_path)

        listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            listener.bind(str(self.socket_path))
            listener.listen(5)
        except OSError:
            listener.close()
            raise
        # Wake up periodically to notice stop()
        listener.settimeout(1.0)
        self._listener = listener

        self._stopping.clear()
        self._thread = threading.Thread(
            target=self._serve, name='local-playlists-ipc', daemon=True
        )
        # Log to file only from the server thread
        self._thread.silent_logging = True  # type: ignore[attr-defined]
        self._thread.start()
        logger.info(f"IPC server listening on {self.socket_path}")

    def stop(self) -> None:
        """Stop serving, close the socket and remove the socket file."""
        self._stopping.set()

        if self._listener is not None:
            self._listener.close()

        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

        self._listener = None
        _remove_socket_file(self.socket_path)
        logger.info("IPC server stopped")

    def _serve(self) -> None:
        listener = self._listener
        while listener is not None and not self._stopping.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError as e:
                # close() from stop() lands here too
                if not self._stopping.is_set():
                    logger.error(f"Error accepting connection: {e}")
                break

            with conn:
                conn.settimeout(CONNECTION_TIMEOUT)
                self._handle_connection(conn)

    def _handle_connection(self, conn: socket.socket) -> None:
        """Answer one newline-terminated request on conn."""
        try:
            raw = read_line(conn)
            if not raw.strip():
                return

            response = handle_payload(self.registry, raw)
            self._notify(response)
            conn.sendall((json.dumps(response) + '\n').encode('utf-8'))
        except OSError as e:
            logger.error(f"Error handling IPC client: {e}")
        except Exception as e:
            # One bad request must not stop the server thread
            logger.exception("Unexpected error handling IPC request")
            self._reply(conn, {'success': False, 'message': f'Error processing request: {e}'})

    def _reply(self, conn: socket.socket, response: Dict[str, Any]) -> None:
        try:
            conn.sendall((json.dumps(response) + '\n').encode('utf-8'))
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Could not send IPC error response: {e}")

    def _notify(self, response: Dict[str, Any]) -> None:
        config = self.notifications_config
        if config is None or not config.enabled:
            return
        message = str(response.get('message', ''))
        if response.get('success'):
            if config.show_success:
                notifications.notify_success(message)
        elif config.show_errors:
            notifications.notify_error(message)
