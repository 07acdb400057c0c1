"""IPC (Inter-Process Communication) for Local Playlists.

Exposes the playlist request handlers to other processes (the host UI).
"""

from .client import send_request
from .handlers import HandlerRegistry, create_playlist_handlers
from .server import IPCServer, get_socket_path

__all__ = [
    'send_request',
    'HandlerRegistry',
    'create_playlist_handlers',
    'IPCServer',
    'get_socket_path',
]
