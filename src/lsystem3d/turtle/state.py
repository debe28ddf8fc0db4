from __future__ import annotations

from dataclasses import dataclass

import numpy as np

Color = tuple[float, float, float]

DEFAULT_PALETTE: tuple[Color, ...] = (
    (0.0, 1.0, 0.0),  # green
    (0.8, 0.4, 0.0),  # brown
    (1.0, 0.0, 0.0),  # red
    (0.0, 0.0, 1.0),  # blue
    (1.0, 1.0, 0.0),  # yellow
    (1.0, 0.0, 1.0),  # magenta
    (0.0, 1.0, 1.0),  # cyan
    (1.0, 0.5, 0.0),  # orange
    (0.5, 0.0, 0.5),  # purple
    (0.5, 1.0, 0.5),  # light green
)

DEPTH_LOW_Y = -10.0
DEPTH_HIGH_Y = 10.0
DEPTH_LOW_COLOR: Color = (0.4, 0.2, 0.0)
DEPTH_HIGH_COLOR: Color = (0.0, 0.8, 0.2)

MIN_LINE_WIDTH = 0.1
MAX_LINE_WIDTH = 5.0


def depth_color(y: float) -> Color:
    """Blend from bark brown at y=-10 to leaf green at y=+10, clamped."""

    t = (y - DEPTH_LOW_Y) / (DEPTH_HIGH_Y - DEPTH_LOW_Y)
    t = min(max(t, 0.0), 1.0)
    r0, g0, b0 = DEPTH_LOW_COLOR
    r1, g1, b1 = DEPTH_HIGH_COLOR
    return (r0 + t * (r1 - r0), g0 + t * (g1 - g0), b0 + t * (b1 - b0))


@dataclass(eq=False)
class TurtleState:
    """Position and orientation frame of the turtle.

    ``heading`` and ``up`` are unit length and perpendicular; ``right`` is
    derived from them.
    """

    position: np.ndarray
    heading: np.ndarray
    up: np.ndarray
    color: Color
    line_width: float = 1.0

    @property
    def right(self) -> np.ndarray:
        return np.cross(self.heading, self.up)

    def copy(self) -> "TurtleState":
        return TurtleState(
            position=self.position.copy(),
            heading=self.heading.copy(),
            up=self.up.copy(),
            color=self.color,
            line_width=self.line_width,
        )

    def isclose(self, other: "TurtleState", *, tolerance: float = 1e-9) -> bool:
        return (
            np.allclose(self.position, other.position, atol=tolerance)
            and np.allclose(self.heading, other.heading, atol=tolerance)
            and np.allclose(self.up, other.up, atol=tolerance)
            and np.allclose(self.color, other.color, atol=tolerance)
            and abs(self.line_width - other.line_width) <= tolerance
        )
