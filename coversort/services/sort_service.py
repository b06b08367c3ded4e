"""Sort service: reorder one playlist window by cover art color.

Phases, in order:
- Fetch the playlist window and parse its entries
- Download and profile every cover (bounded concurrency)
- Rank tracks by Lab distance to the reference color
- Plan and execute uid-relative moves, one at a time

Any error aborts the run. Moves already executed stay applied remotely.
"""

from __future__ import annotations
import time
import logging
from typing import List

from ..color import LabColor
from ..models import MoveOperation
from ..providers.spotify.playlist import fetch_window
from ..utils.logging_helpers import log_progress
from .profile_service import profile_entries
from .rank_service import DEFAULT_REFERENCE, rank_tracks
from .reorder_service import execute_moves, plan_moves

logger = logging.getLogger(__name__)


class SortResult:
    """Results from a sort run."""

    def __init__(self):
        self.playlist_id: str | None = None
        self.tracks_found = 0
        self.tracks_profiled = 0
        self.tracks_skipped = 0
        self.moves_planned = 0
        self.moves_executed = 0
        self.ranked: List[str] = []
        self.moves: List[MoveOperation] = []
        self.dry_run = False
        self.duration_seconds = 0.0


def sort_playlist(
    client,
    playlist_id: str,
    offset: int,
    limit: int,
    reference: LabColor = DEFAULT_REFERENCE,
    workers: int = 1,
    skip_undecodable: bool = False,
    cover_index: int = 1,
    dry_run: bool = False,
) -> SortResult:
    """Reorder ``limit`` tracks starting at ``offset`` by cover color.

    Args:
        client: PathfinderClient (or compatible) instance
        playlist_id: Spotify playlist ID
        offset: Index of the first playlist item to sort
        limit: Number of items to sort
        reference: Lab color the ordering starts from
        workers: Maximum concurrent cover downloads
        skip_undecodable: Exclude tracks with undecodable covers instead of aborting
        cover_index: Cover art resolution tier to download
        dry_run: Plan moves without sending them

    Returns:
        SortResult with statistics
    """
    result = SortResult()
    result.playlist_id = playlist_id
    result.dry_run = dry_run
    start = time.time()

    entries = fetch_window(client, playlist_id, offset, limit, cover_index=cover_index)
    result.tracks_found = len(entries)
    logger.info(f"Found {len(entries)} tracks")

    outcome = profile_entries(client, entries, workers=workers, skip_undecodable=skip_undecodable)
    result.tracks_profiled = len(outcome.tracks)
    result.tracks_skipped = len(outcome.skipped)

    ranked = rank_tracks(outcome.tracks, reference)
    result.ranked = [track.name for track in ranked]

    moves = plan_moves(ranked, current_order=[entry.uid for entry in entries])
    result.moves = moves
    result.moves_planned = len(moves)
    names = {track.uid: track.name for track in ranked}

    if dry_run:
        for idx, move in enumerate(moves, start=1):
            log_progress(idx, len(moves), f"would move '{names[move.target_uid]}' after '{names[move.anchor_uid]}'")
    else:
        def report(done: int, total: int, move: MoveOperation) -> None:
            log_progress(done, total, f"sorted '{names[move.target_uid]}' after '{names[move.anchor_uid]}'")

        result.moves_executed = execute_moves(client, playlist_id, moves, on_move=report)

    result.duration_seconds = time.time() - start
    logger.info(f"Tracks sorted: {len(ranked)}")
    return result


__all__ = ["SortResult", "sort_playlist"]
