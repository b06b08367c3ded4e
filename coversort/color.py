"""Color space conversion.

sRGB (0-255, D65) -> CIE XYZ -> CIE L*a*b*. L covers 0-100, with a and b
close to 0 on the neutral (grey) axis.
"""

from __future__ import annotations
from dataclasses import dataclass

# D65 reference white
_XN, _YN, _ZN = 0.95047, 1.0, 1.08883

_EPSILON = 216 / 24389
_KAPPA = 24389 / 27


@dataclass(frozen=True)
class LabColor:
    l: float  # noqa: E741
    a: float
    b: float

    def squared_distance(self, other: LabColor) -> float:
        return squared_distance(self, other)


def _linearize(channel: int) -> float:
    c = channel / 255.0
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def _f(t: float) -> float:
    if t > _EPSILON:
        return t ** (1 / 3)
    return (_KAPPA * t + 16) / 116


def rgb_to_lab(r: int, g: int, b: int) -> LabColor:
    """Convert an sRGB triple (0-255 per channel) to Lab.

    Raises:
        ValueError: If a channel is outside 0-255
    """
    for name, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name}={value} is outside 0-255")

    rl, gl, bl = _linearize(r), _linearize(g), _linearize(b)

    x = rl * 0.4124564 + gl * 0.3575761 + bl * 0.1804375
    y = rl * 0.2126729 + gl * 0.7151522 + bl * 0.0721750
    z = rl * 0.0193339 + gl * 0.1191920 + bl * 0.9503041

    fx = _f(x / _XN)
    fy = _f(y / _YN)
    fz = _f(z / _ZN)

    return LabColor(
        l=116 * fy - 16,
        a=500 * (fx - fy),
        b=200 * (fy - fz),
    )


def squared_distance(first: LabColor, second: LabColor) -> float:
    """Squared Euclidean distance in Lab space."""
    dl = first.l - second.l
    da = first.a - second.a
    db = first.b - second.b
    return dl * dl + da * da + db * db


__all__ = ["LabColor", "rgb_to_lab", "squared_distance"]
