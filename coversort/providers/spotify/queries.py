"""Persisted-query request bodies for the Spotify pathfinder endpoint.

Each operation is identified by a fixed operation name and a sha256 hash the
server uses to look up the query text. The hashes are defined by Spotify and
must be sent byte-for-byte; they are not derived locally.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Sequence, Tuple

PERSISTED_QUERY_VERSION = 1

FETCH_PLAYLIST_OPERATION = "fetchPlaylistWithGatedEntityRelations"
FETCH_PLAYLIST_HASH = "19ff1327c29e99c208c86d7a9d8f1929cfdf3d3202a0ff4253c821f1901aa94d"

MOVE_ITEMS_OPERATION = "moveItemsInPlaylist"
MOVE_ITEMS_HASH = "47c69e71df79e3c80e4af7e7a9a727d82565bb20ae20dc820d6bc6f94def482d"


class MoveType(str, Enum):
    AFTER = "AFTER_UID"
    BEFORE = "BEFORE_UID"


def playlist_uri(playlist_id: str) -> str:
    return f"spotify:playlist:{playlist_id}"


@dataclass(frozen=True)
class FetchPlaylistVariables:
    playlist_id: str
    offset: int
    limit: int

    def to_wire(self) -> Dict[str, Any]:
        return {
            "uri": playlist_uri(self.playlist_id),
            "offset": self.offset,
            "limit": self.limit,
        }


@dataclass(frozen=True)
class MoveItemsVariables:
    playlist_id: str
    uids: Tuple[str, ...]
    from_uid: str
    move_type: MoveType = MoveType.AFTER

    def to_wire(self) -> Dict[str, Any]:
        return {
            "playlistUri": playlist_uri(self.playlist_id),
            "newPosition": {
                "fromUid": self.from_uid,
                "moveType": self.move_type.value,
            },
            "uids": list(self.uids),
        }


def move_items(playlist_id: str, uids: Sequence[str], from_uid: str,
               move_type: MoveType = MoveType.AFTER) -> MoveItemsVariables:
    """Convenience constructor accepting any sequence of uids."""
    return MoveItemsVariables(playlist_id, tuple(uids), from_uid, move_type)


_OPERATIONS = {
    FetchPlaylistVariables: (FETCH_PLAYLIST_OPERATION, FETCH_PLAYLIST_HASH),
    MoveItemsVariables: (MOVE_ITEMS_OPERATION, MOVE_ITEMS_HASH),
}


def build_query(variables: FetchPlaylistVariables | MoveItemsVariables) -> Dict[str, Any]:
    """Build the JSON body for one pathfinder request.

    Args:
        variables: Operation-specific variables; their type selects the
            operation name and persisted query hash.

    Returns:
        Dict ready to be sent as the JSON request body

    Raises:
        TypeError: If variables is not a supported operation
    """
    try:
        operation_name, query_hash = _OPERATIONS[type(variables)]
    except KeyError:
        raise TypeError(f"Unsupported pathfinder operation: {type(variables).__name__}") from None
    return {
        "operationName": operation_name,
        "variables": variables.to_wire(),
        "extensions": {
            "persistedQuery": {
                "sha256Hash": query_hash,
                "version": PERSISTED_QUERY_VERSION,
            },
        },
    }


__all__ = [
    "MoveType",
    "FetchPlaylistVariables",
    "MoveItemsVariables",
    "move_items",
    "playlist_uri",
    "build_query",
    "FETCH_PLAYLIST_OPERATION",
    "FETCH_PLAYLIST_HASH",
    "MOVE_ITEMS_OPERATION",
    "MOVE_ITEMS_HASH",
]
