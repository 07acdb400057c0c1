"""Playback domain - resolving playlist songs to host play targets.

This domain handles:
- Watch/search URL resolution for a song
- Play order for a whole playlist (unresolved songs dropped, optional shuffle)
- Delegation to a host Player
"""

from .resolver import (
    PlayTarget,
    PlaybackOutcome,
    Player,
    BrowserPlayer,
    resolve_play_target,
    prepare_play_queue,
    resolve_and_play,
    play_playlist,
)

__all__ = [
    "PlayTarget",
    "PlaybackOutcome",
    "Player",
    "BrowserPlayer",
    "resolve_play_target",
    "prepare_play_queue",
    "resolve_and_play",
    "play_playlist",
]
