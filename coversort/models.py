"""Domain models for a sort run."""
from __future__ import annotations
from dataclasses import dataclass

from .color import LabColor
from .providers.spotify.queries import MoveType


@dataclass(frozen=True)
class Track:
    uid: str  # playlist entry uid; the only handle move calls accept
    name: str
    color: LabColor


@dataclass(frozen=True)
class MoveOperation:
    """Place ``target_uid`` directly after/before ``anchor_uid``'s current position."""
    target_uid: str
    anchor_uid: str
    anchor_side: MoveType = MoveType.AFTER


__all__ = ["Track", "MoveOperation"]
