"""Spotify provider package.

This package contains all Spotify-specific logic:
- queries.py: persisted-query request bodies
- client.py: HTTP client for pathfinder requests and cover downloads
- playlist.py: playlist window parsing
"""

from .client import PathfinderClient, ClientConfig
from .playlist import PlaylistEntry, fetch_window, parse_playlist_window
from .queries import MoveType, build_query

__all__ = [
    "PathfinderClient",
    "ClientConfig",
    "PlaylistEntry",
    "fetch_window",
    "parse_playlist_window",
    "MoveType",
    "build_query",
]
