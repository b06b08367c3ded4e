"""Playlist window parsing.

Walks a ``fetchPlaylistWithGatedEntityRelations`` response::

    data.playlistV2.content.items[]
        .uid
        .itemV2.data.name
        .itemV2.data.albumOfTrack.coverArt.sources[<cover_index>].url
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Sequence
import logging

from ...errors import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaylistEntry:
    uid: str  # playlist entry uid, not the catalog track id
    name: str
    cover_url: str


def _dig(node: Any, path: Sequence[str | int], where: str) -> Any:
    walked: List[str] = []
    for key in path:
        walked.append(str(key))
        try:
            node = node[key]
        except (KeyError, IndexError, TypeError):
            raise ParseError(f"{where}: missing {'.'.join(walked)}") from None
        if node is None:
            raise ParseError(f"{where}: missing {'.'.join(walked)}")
    return node


def _string(node: Any, path: Sequence[str | int], where: str) -> str:
    value = _dig(node, path, where)
    if not isinstance(value, str):
        raise ParseError(f"{where}: {'.'.join(str(p) for p in path)} is not a string")
    return value


def parse_playlist_window(payload: Any, cover_index: int = 1) -> List[PlaylistEntry]:
    """Extract (uid, name, cover url) for every item of a playlist window.

    Args:
        payload: Decoded JSON response
        cover_index: Position in the coverArt.sources list to use

    Returns:
        Entries in playlist order

    Raises:
        ParseError: If the envelope or any item field is missing, or an item
            has too few cover art sources
    """
    items = _dig(payload, ("data", "playlistV2", "content", "items"), "playlist response")
    if not isinstance(items, list):
        raise ParseError("playlist response: data.playlistV2.content.items is not a list")

    entries: List[PlaylistEntry] = []
    for idx, item in enumerate(items):
        where = f"item {idx}"
        uid = _string(item, ("uid",), where)
        data = _dig(item, ("itemV2", "data"), where)
        name = _string(data, ("name",), where)
        sources = _dig(data, ("albumOfTrack", "coverArt", "sources"), where)
        if not isinstance(sources, list) or len(sources) <= cover_index:
            count = len(sources) if isinstance(sources, list) else 0
            raise ParseError(f"{where} ({name!r}): needs more than {cover_index} cover art sources, got {count}")
        cover_url = _string(sources, (cover_index, "url"), where)
        entries.append(PlaylistEntry(uid=uid, name=name, cover_url=cover_url))
    return entries


def fetch_window(client, playlist_id: str, offset: int, limit: int, cover_index: int = 1) -> List[PlaylistEntry]:
    """Fetch and parse one playlist window.

    Args:
        client: PathfinderClient (or compatible) instance
        playlist_id: Spotify playlist ID (without the ``spotify:playlist:`` prefix)
        offset: Index of the first item
        limit: Maximum number of items

    Returns:
        List of PlaylistEntry in playlist order
    """
    payload = client.fetch_playlist_window(playlist_id, offset, limit)
    entries = parse_playlist_window(payload, cover_index=cover_index)
    logger.debug(f"Parsed {len(entries)} entries from playlist {playlist_id}")
    return entries


__all__ = ["PlaylistEntry", "parse_playlist_window", "fetch_window"]
