from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence

import numpy as np

from lsystem3d import ColorMode
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.rendering.geometry import LineSegment, Vertex
from lsystem3d.turtle.commands import TurtleCommand, parse_command
from lsystem3d.turtle.state import (DEFAULT_PALETTE, MAX_LINE_WIDTH,
                                    MIN_LINE_WIDTH, Color, TurtleState,
                                    depth_color)
from lsystem3d.utilities.env import Configuration
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

WORLD_Z = np.array([0.0, 0.0, 1.0])
WIDEN_FACTOR = 1.2
NARROW_FACTOR = 0.8


def _rotate(vector: np.ndarray, axis: np.ndarray, cos_a: float, sin_a: float) -> np.ndarray:
    """Rodrigues rotation of ``vector`` about the unit ``axis`` (right-hand rule)."""

    return (
        vector * cos_a
        + np.cross(axis, vector) * sin_a
        + axis * (np.dot(axis, vector) * (1.0 - cos_a))
    )


def _normalized(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def initial_frame(direction: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """Heading along ``direction`` with up as +Z made perpendicular to it."""

    heading = _normalized(np.asarray(direction, dtype=np.float64))
    up = WORLD_Z - heading * np.dot(WORLD_Z, heading)
    if np.linalg.norm(up) < 1e-9:
        # Heading is parallel to Z: use the up a pitch of +Y onto Z would give.
        up = np.array([0.0, -math.copysign(1.0, heading[2]), 0.0])
    return heading, _normalized(up)


class Turtle3D:
    """Interprets an expanded L-system string as 3D turtle commands.

    Drawing commands are reported through a callback as :class:`LineSegment`
    values; the turtle itself never touches a renderer.
    """

    def __init__(
        self,
        *,
        angle_degrees: float = 25.0,
        step_length: float = 1.0,
        color_mode: ColorMode = ColorMode.DEPTH,
        palette: Sequence[Color] = DEFAULT_PALETTE,
        start_position: Sequence[float] = (0.0, 0.0, 0.0),
        start_direction: Sequence[float] = (0.0, 1.0, 0.0),
        renormalize_interval: int | None = None,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one color")
        self.angle = math.radians(angle_degrees)
        self.step_length = step_length
        self.color_mode = color_mode
        self._palette = tuple(palette)
        self._start_position = np.asarray(start_position, dtype=np.float64)
        self._start_heading, self._start_up = initial_frame(start_direction)
        self._renormalize_interval = (
            renormalize_interval
            if renormalize_interval is not None
            else Configuration.renormalize_interval()
        )
        self._stack: list[TurtleState] = []
        self._palette_index = 0
        self._commands_since_renormalize = 0
        self._state = self._initial_state()

    @classmethod
    def from_rule(cls, rule: LSystemRule) -> "Turtle3D":
        return cls(
            angle_degrees=rule.angle,
            step_length=rule.step_length,
            color_mode=rule.color_mode,
            palette=rule.palette or DEFAULT_PALETTE,
            start_position=rule.start_position,
            start_direction=rule.start_direction,
        )

    @property
    def state(self) -> TurtleState:
        return self._state

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    def _initial_state(self) -> TurtleState:
        return TurtleState(
            position=self._start_position.copy(),
            heading=self._start_heading.copy(),
            up=self._start_up.copy(),
            color=self._palette[0],
        )

    def reset(self) -> None:
        self._state = self._initial_state()
        self._stack.clear()
        self._palette_index = 0
        self._commands_since_renormalize = 0

    def interpret(
        self, symbols: Iterable[str], emit: Callable[[LineSegment], None]
    ) -> int:
        """Reset, then run every symbol left to right.

        Returns the number of segments passed to ``emit``.
        """

        self.reset()
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)
        emitted = 0
        for symbol in symbols:
            command = parse_command(symbol)
            if command is None:
                continue
            state = self._state
            match command:
                case TurtleCommand.DRAW | TurtleCommand.DRAW_ALT:
                    emit(self._forward(draw=True))
                    emitted += 1
                case TurtleCommand.MOVE | TurtleCommand.MOVE_ALT:
                    self._forward(draw=False)
                case TurtleCommand.YAW_LEFT:
                    state.heading = _rotate(state.heading, state.up, cos_a, sin_a)
                case TurtleCommand.YAW_RIGHT:
                    state.heading = _rotate(state.heading, state.up, cos_a, -sin_a)
                case TurtleCommand.PITCH_DOWN:
                    self._pitch(cos_a, -sin_a)
                case TurtleCommand.PITCH_UP:
                    self._pitch(cos_a, sin_a)
                case TurtleCommand.ROLL_LEFT:
                    state.up = _rotate(state.up, state.heading, cos_a, sin_a)
                case TurtleCommand.ROLL_RIGHT:
                    state.up = _rotate(state.up, state.heading, cos_a, -sin_a)
                case TurtleCommand.TURN_AROUND:
                    state.heading = -state.heading
                case TurtleCommand.PUSH:
                    self._stack.append(state.copy())
                case TurtleCommand.POP:
                    if self._stack:
                        self._state = self._stack.pop()
                case TurtleCommand.NEXT_COLOR:
                    self._palette_index = (self._palette_index + 1) % len(self._palette)
                    state.color = self._palette[self._palette_index]
                case TurtleCommand.WIDEN:
                    state.line_width = min(state.line_width * WIDEN_FACTOR, MAX_LINE_WIDTH)
                case TurtleCommand.NARROW:
                    state.line_width = max(state.line_width * NARROW_FACTOR, MIN_LINE_WIDTH)

            self._commands_since_renormalize += 1
            if self._commands_since_renormalize >= self._renormalize_interval:
                self._renormalize()

        self._renormalize()
        logger.debug("Turtle emitted %d segments", emitted)
        return emitted

    def trace(self, symbols: Iterable[str]) -> list[LineSegment]:
        """Interpret ``symbols`` and collect the emitted segments."""

        segments: list[LineSegment] = []
        self.interpret(symbols, segments.append)
        return segments

    def _forward(self, *, draw: bool) -> LineSegment | None:
        state = self._state
        start = state.position
        end = start + state.heading * self.step_length
        state.position = end
        if not draw:
            return None
        if self.color_mode == ColorMode.DEPTH:
            color = depth_color(float(start[1]))
        else:
            color = state.color
        return LineSegment(
            start=Vertex(_as_tuple(start), color),
            end=Vertex(_as_tuple(end), color),
            thickness=state.line_width,
        )

    def _pitch(self, cos_a: float, sin_a: float) -> None:
        state = self._state
        right = state.right
        state.heading = _rotate(state.heading, right, cos_a, sin_a)
        state.up = _rotate(state.up, right, cos_a, sin_a)

    def _renormalize(self) -> None:
        """Gram-Schmidt the frame back to orthonormal."""

        state = self._state
        heading = _normalized(state.heading)
        up = state.up - heading * np.dot(state.up, heading)
        state.heading = heading
        state.up = _normalized(up)
        self._commands_since_renormalize = 0


def _as_tuple(vector: np.ndarray) -> tuple[float, float, float]:
    return (float(vector[0]), float(vector[1]), float(vector[2]))
