"""
Playback target resolution for playlist songs.

A song with a video id resolves to a direct watch URL; a song without one
resolves to a search URL built from its artist and title. Actually playing the
target is delegated to a Player supplied by the host.
"""

import random
import urllib.parse
import webbrowser
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from loguru import logger

from ..playlists.models import Playlist, Song

WATCH_URL = "https://music.youtube.com/watch?v={video_id}"
SEARCH_URL = "https://music.youtube.com/search?q={query}"


@dataclass(frozen=True)
class PlayTarget:
    """Where the host should navigate to play a song."""

    kind: Literal["watch", "search"]
    url: str


@dataclass(frozen=True)
class PlaybackOutcome:
    """Result of asking the host to play something."""

    success: bool
    message: str
    target: Optional[PlayTarget] = None


class Player(Protocol):
    """Host playback collaborator."""

    def play(self, target: PlayTarget) -> bool:
        """Start playing target immediately. Returns False if the host refused."""
        ...

    def enqueue(self, target: PlayTarget) -> bool:
        """Append target to the host play queue. Returns False if unsupported."""
        ...


def resolve_play_target(song: Song) -> PlayTarget:
    """Resolve a song to a play target.

    Examples:
        >>> resolve_play_target(Song(video_id="abc123", title="Song")).url
        'https://music.youtube.com/watch?v=abc123'

        >>> resolve_play_target(Song(video_id="", title="One More Time", artist="Daft Punk")).url
        'https://music.youtube.com/search?q=Daft%20Punk%20One%20More%20Time'
    """
    if song.video_id:
        return PlayTarget(
            kind="watch",
            url=WATCH_URL.format(video_id=urllib.parse.quote(song.video_id, safe="")),
        )

    query = f"{song.artist} {song.title}"
    return PlayTarget(
        kind="search", url=SEARCH_URL.format(query=urllib.parse.quote(query, safe=""))
    )


def prepare_play_queue(
    playlist: Playlist, shuffle: bool = False, rng: Optional[random.Random] = None
) -> list[Song]:
    """Songs that can be played directly (non-empty video id), optionally shuffled.

    Args:
        playlist: Source playlist (not modified)
        shuffle: Shuffle the resulting order
        rng: Random source for shuffling (module-level random if None)

    Returns:
        New list of songs
    """
    songs = [song for song in playlist.songs if song.video_id]
    if shuffle:
        (rng or random).shuffle(songs)
    return songs


def resolve_and_play(song: Song, player: Player) -> PlaybackOutcome:
    """Resolve a single song and hand it to the player."""
    target = resolve_play_target(song)
    logger.info(f"Playing {song.artist} - {song.title} via {target.kind}: {target.url}")

    if not player.play(target):
        return PlaybackOutcome(
            False, f"Could not play: {song.artist} - {song.title}", target
        )

    if target.kind == "search":
        return PlaybackOutcome(
            True, f"Searching for: {song.artist} - {song.title}", target
        )
    return PlaybackOutcome(True, f"Playing: {song.artist} - {song.title}", target)


def play_playlist(
    playlist: Optional[Playlist],
    player: Player,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> PlaybackOutcome:
    """Play the first resolvable song of a playlist and queue the rest.

    Songs without a video id are left out; a song the player fails to enqueue
    is logged and skipped.
    """
    if playlist is None or not playlist.songs:
        return PlaybackOutcome(False, "Playlist not found or empty")

    songs = prepare_play_queue(playlist, shuffle=shuffle, rng=rng)
    if not songs:
        return PlaybackOutcome(
            False, "No songs with valid video IDs found in this playlist"
        )

    first = resolve_play_target(songs[0])
    if not player.play(first):
        return PlaybackOutcome(
            False, f"Could not play playlist '{playlist.name}'", first
        )

    for song in songs[1:]:
        if not player.enqueue(resolve_play_target(song)):
            logger.warning(f"Failed to add song to queue: {song.title}")

    logger.info(f"Started playlist '{playlist.name}' with {len(songs)} songs")
    return PlaybackOutcome(True, f"Started playlist with {len(songs)} songs", first)


class BrowserPlayer:
    """Player that opens play targets in the system web browser."""

    def play(self, target: PlayTarget) -> bool:
        return webbrowser.open(target.url)

    def enqueue(self, target: PlayTarget) -> bool:
        # A browser tab has no queue
        logger.debug(f"Would add to queue: {target.url}")
        return False
