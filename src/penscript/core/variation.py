"""Per-instance natural variation for rendered glyphs.

Every rendered copy of a glyph gets one random rigid transform (uniform
scale, rotation and offset about its center) so repeated letters do not look
stamped. The random source is injected so renders can be reproduced.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from fontTools.misc.transform import Transform

from penscript.domain import Bounds, Stroke


class RandomSource(Protocol):
    """Anything that can draw a uniform float, e.g. ``random.Random``."""

    def uniform(self, a: float, b: float) -> float: ...


@dataclass(frozen=True)
class VariationParams:
    """Ranges for one glyph instance's random transform.

    Attributes:
        position_jitter: Max offset on each axis, in normalized units
        rotation_range: Max rotation either way, in degrees
        scale_range: Max relative scale change either way (0.05 = +/-5%)
    """

    position_jitter: float = 0.02
    rotation_range: float = 3.0
    scale_range: float = 0.05

    def __post_init__(self) -> None:
        if self.position_jitter < 0 or self.rotation_range < 0 or self.scale_range < 0:
            raise ValueError("Variation ranges must be non-negative")

    @classmethod
    def from_level(cls, variation: float) -> "VariationParams":
        """Derive ranges from a render variation level (0-10)."""
        return cls(
            position_jitter=variation * 0.01,
            rotation_range=variation * 1.5,
            scale_range=variation * 0.02,
        )

    @property
    def is_identity(self) -> bool:
        return self.position_jitter == 0 and self.rotation_range == 0 and self.scale_range == 0


IDENTITY = VariationParams(0.0, 0.0, 0.0)


def variation_transform(
    bounds: Bounds, params: VariationParams, rng: RandomSource
) -> Transform:
    """Draw one random transform for a glyph instance.

    Applied to a point, the transform moves the glyph center to the origin,
    scales, rotates, moves back and adds the offset.
    """
    angle = math.radians(rng.uniform(-params.rotation_range, params.rotation_range))
    scale = 1 + rng.uniform(-params.scale_range, params.scale_range)
    offset_x = rng.uniform(-params.position_jitter, params.position_jitter)
    offset_y = rng.uniform(-params.position_jitter, params.position_jitter)

    center_x, center_y = bounds.center
    # fontTools composes right to left: the last call is applied first
    return (
        Transform()
        .translate(center_x + offset_x, center_y + offset_y)
        .rotate(angle)
        .scale(scale)
        .translate(-center_x, -center_y)
    )


def apply_variation(
    strokes: Sequence[Stroke],
    params: VariationParams,
    rng: RandomSource,
) -> list[Stroke]:
    """Apply one random rigid transform to every point of a glyph.

    Args:
        strokes: Normalized strokes of one glyph instance
        params: Variation ranges
        rng: Random source, drawn from exactly four times

    Returns:
        New strokes; identical coordinates when every range is zero
    """
    transform = variation_transform(Bounds.from_strokes(strokes), params, rng)

    varied: list[Stroke] = []
    for stroke in strokes:
        points = []
        for p in stroke.points:
            x, y = transform.transformPoint((p.x, p.y))
            points.append(p.moved(x, y))
        varied.append(Stroke.of(points))
    return varied
