"""Cover art profiling: one representative Lab color per track.

The representative color is the unweighted mean of every pixel's RGB
channels, converted to Lab. Downloads and decoding of different tracks are
independent, so they run on a bounded thread pool; results are returned in
playlist order.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import io
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..color import LabColor, rgb_to_lab
from ..errors import DivideByZeroError, ImageDecodeError
from ..models import Track
from ..providers.spotify.playlist import PlaylistEntry

logger = logging.getLogger(__name__)


@dataclass
class ProfileOutcome:
    tracks: List[Track] = field(default_factory=list)
    skipped: List[PlaylistEntry] = field(default_factory=list)


def decode_image(data: bytes) -> Image.Image:
    """Decode image bytes into an RGB Pillow image.

    Raises:
        ImageDecodeError: If the bytes are not a decodable image
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return img.convert("RGB")


def average_rgb(img: Image.Image) -> Tuple[int, int, int]:
    """Mean of each RGB channel over all pixels (integer division).

    Raises:
        DivideByZeroError: If the image has zero width or height
    """
    width, height = img.size
    total = width * height
    if total == 0:
        raise DivideByZeroError(f"Image has no pixels ({width}x{height})")
    pixels = np.asarray(img.convert("RGB"), dtype=np.uint8).reshape(-1, 3)
    # 64-bit sums: 255 * pixel count cannot overflow for any decodable image
    sums = pixels.sum(axis=0, dtype=np.uint64)
    r, g, b = (int(s) // total for s in sums)
    return r, g, b


def profile_image(data: bytes) -> LabColor:
    """Representative Lab color of encoded image bytes."""
    return rgb_to_lab(*average_rgb(decode_image(data)))


def profile_entry(client, entry: PlaylistEntry) -> Track:
    """Download one entry's cover art and compute its color."""
    data = client.download(entry.cover_url)
    color = profile_image(data)
    logger.debug(f"Profiled '{entry.name}' -> L={color.l:.1f} a={color.a:.1f} b={color.b:.1f}")
    return Track(uid=entry.uid, name=entry.name, color=color)


def _profile_or_skip(client, entry: PlaylistEntry, skip_undecodable: bool) -> Track | None:
    try:
        return profile_entry(client, entry)
    except (ImageDecodeError, DivideByZeroError) as e:
        if not skip_undecodable:
            raise
        logger.warning(f"Skipping '{entry.name}' ({entry.uid}): {e}")
        return None


def profile_entries(
    client,
    entries: Sequence[PlaylistEntry],
    workers: int = 1,
    skip_undecodable: bool = False,
) -> ProfileOutcome:
    """Profile every entry, returning tracks in the same order as ``entries``.

    Args:
        client: Object with a ``download(url) -> bytes`` method
        entries: Parsed playlist entries
        workers: Maximum concurrent downloads; 1 runs sequentially
        skip_undecodable: Exclude tracks whose artwork cannot be decoded or
            has no pixels instead of aborting

    Returns:
        ProfileOutcome with profiled tracks and skipped entries

    Raises:
        NetworkError, AuthError: Download failed
        ImageDecodeError, DivideByZeroError: Unless skip_undecodable is set
    """
    if workers <= 1 or len(entries) <= 1:
        results = [_profile_or_skip(client, entry, skip_undecodable) for entry in entries]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_profile_or_skip, client, entry, skip_undecodable) for entry in entries]
            try:
                results = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

    outcome = ProfileOutcome()
    for entry, track in zip(entries, results):
        if track is None:
            outcome.skipped.append(entry)
        else:
            outcome.tracks.append(track)
    return outcome


__all__ = [
    "ProfileOutcome",
    "decode_image",
    "average_rgb",
    "profile_image",
    "profile_entry",
    "profile_entries",
]
