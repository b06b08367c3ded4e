"""Translate a ranked track order into remote move calls.

The pathfinder API only offers uid-relative moves ("put X after Y"), resolved
against the playlist's state at call time. Moving ``t[i]`` after ``t[i-1]``
strictly left to right keeps the prefix ``t[0..i-1]`` contiguous and in order,
so no later move disturbs an earlier placement. Moves are therefore sent one at
a time and each response is received before the next move is built.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Sequence
import logging

from ..models import MoveOperation, Track
from ..providers.spotify.queries import MoveType

logger = logging.getLogger(__name__)


def _common_prefix(ranked: Sequence[Track], current_order: Sequence[str]) -> int:
    # unranked entries are never moved, so only the relative order of ranked uids counts
    ranked_uids = {track.uid for track in ranked}
    order = [uid for uid in current_order if uid in ranked_uids]
    count = 0
    for track, uid in zip(ranked, order):
        if track.uid != uid:
            break
        count += 1
    return count


def plan_moves(ranked: Sequence[Track], current_order: Optional[Sequence[str]] = None) -> List[MoveOperation]:
    """Build the move sequence that realises ``ranked`` remotely.

    Args:
        ranked: Tracks in target order
        current_order: Entry uids in their current remote order. Leading
            tracks already in target order relative to each other need no
            move; uids not in ``ranked`` (skipped entries) are ignored.

    Returns:
        One ``MoveOperation`` per adjacent pair after the in-place prefix,
        each anchoring ``ranked[i]`` after ``ranked[i-1]``
    """
    start = 1
    if current_order is not None:
        start = max(start, _common_prefix(ranked, current_order))
    return [
        MoveOperation(target_uid=ranked[i].uid, anchor_uid=ranked[i - 1].uid, anchor_side=MoveType.AFTER)
        for i in range(start, len(ranked))
    ]


def execute_moves(
    client,
    playlist_id: str,
    moves: Sequence[MoveOperation],
    on_move: Optional[Callable[[int, int, MoveOperation], None]] = None,
) -> int:
    """Send moves strictly in order, one in flight at a time.

    A failing move raises immediately; moves already sent stay applied.

    Args:
        client: PathfinderClient (or compatible) instance
        playlist_id: Spotify playlist ID
        moves: Planned moves, in order
        on_move: Called as ``on_move(done, total, move)`` after each completed move

    Returns:
        Number of moves executed
    """
    total = len(moves)
    done = 0
    for move in moves:
        response = client.move_items(playlist_id, [move.target_uid], move.anchor_uid, move.anchor_side)
        done += 1
        logger.debug(f"Move {move.target_uid} {move.anchor_side.value} {move.anchor_uid}: {response}")
        if on_move is not None:
            on_move(done, total, move)
    return done


__all__ = ["plan_moves", "execute_moves"]
