from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

Vector3 = tuple[float, float, float]
Color = tuple[float, float, float]


@dataclass(frozen=True)
class Vertex:
    position: Vector3
    color: Color


@dataclass(frozen=True)
class LineSegment:
    start: Vertex
    end: Vertex
    thickness: float = 1.0


@dataclass(frozen=True)
class Bounds:
    minimum: Vector3
    maximum: Vector3

    @property
    def center(self) -> Vector3:
        return (
            (self.minimum[0] + self.maximum[0]) / 2.0,
            (self.minimum[1] + self.maximum[1]) / 2.0,
            (self.minimum[2] + self.maximum[2]) / 2.0,
        )

    @property
    def radius(self) -> float:
        """Radius of the sphere through the box corners."""

        extent = np.subtract(self.maximum, self.minimum)
        return float(np.linalg.norm(extent)) / 2.0


def segment_bounds(segments: Iterable[LineSegment]) -> Bounds | None:
    """Axis-aligned box around every endpoint, or ``None`` when empty."""

    points = [
        point
        for segment in segments
        for point in (segment.start.position, segment.end.position)
    ]
    if not points:
        return None
    array = np.asarray(points, dtype=np.float64)
    low = array.min(axis=0)
    high = array.max(axis=0)
    return Bounds(
        minimum=(float(low[0]), float(low[1]), float(low[2])),
        maximum=(float(high[0]), float(high[1]), float(high[2])),
    )
