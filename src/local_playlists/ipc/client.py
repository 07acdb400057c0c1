"""IPC client for sending requests to a running Local Playlists server."""

import json
import socket
from pathlib import Path
from typing import Any, Dict, List, Optional

from .server import get_socket_path, read_line

CLIENT_TIMEOUT = 5.0


def _failure(message: str) -> Dict[str, Any]:
    return {'success': False, 'message': message}


def send_request(
    request: str, args: Optional[List[Any]] = None, socket_path: Optional[Path] = None
) -> Dict[str, Any]:
    """
    Send a request to the running Local Playlists server.

    Args:
        request: Request name (e.g., 'get-local-playlists', 'delete-playlist')
        args: Request arguments (optional)
        socket_path: Socket location (default: get_socket_path())

    Returns:
        Response dict; always contains 'success' and 'message'
    """
    socket_path = socket_path or get_socket_path()
    if not socket_path.exists():
        return _failure("Local Playlists is not running")

    line = json.dumps({'request': request, 'args': args or []}) + '\n'

    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(CLIENT_TIMEOUT)
            sock.connect(str(socket_path))
            sock.sendall(line.encode('utf-8'))
            raw = read_line(sock)
    except socket.timeout:
        return _failure("Local Playlists not responding (timeout)")
    except (ConnectionRefusedError, FileNotFoundError):
        return _failure("Local Playlists is not running")
    except OSError as e:
        return _failure(f"Failed to send request: {e}")

    if not raw.strip():
        return _failure("No response from Local Playlists")

    try:
        response = json.loads(raw.decode('utf-8'))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _failure(f"Invalid response from Local Playlists: {e}")

    if not isinstance(response, dict):
        return _failure("Invalid response from Local Playlists")
    response.setdefault('success', False)
    response.setdefault('message', 'No message')
    return response
