"""Order tracks by perceptual closeness to a reference color."""

from __future__ import annotations
from typing import List, Sequence

from ..color import LabColor, squared_distance
from ..models import Track

DEFAULT_REFERENCE = LabColor(100.0, 0.0, 0.0)


def rank_tracks(tracks: Sequence[Track], reference: LabColor = DEFAULT_REFERENCE) -> List[Track]:
    """Sort by ascending squared Lab distance to ``reference``.

    ``sorted`` is stable, so tracks at equal distance keep their fetch order.
    """
    return sorted(tracks, key=lambda track: squared_distance(track.color, reference))


__all__ = ["rank_tracks", "DEFAULT_REFERENCE"]
