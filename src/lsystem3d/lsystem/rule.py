from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from lsystem3d import ColorMode
from lsystem3d.errors import RuleValidationError
from lsystem3d.utilities.env import Configuration

Vector3 = tuple[float, float, float]
Color = tuple[float, float, float]

DEFAULT_STEP_LENGTH = 1.0
DEFAULT_START_POSITION: Vector3 = (0.0, 0.0, 0.0)
DEFAULT_START_DIRECTION: Vector3 = (0.0, 1.0, 0.0)


def _require(cond: bool, path: str, msg: str) -> None:
    if not cond:
        raise RuleValidationError(path, msg)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_str(value: Any, path: str) -> str:
    _require(isinstance(value, str), path, "must be a string")
    return value


def _as_finite(value: Any, path: str) -> float:
    _require(_is_number(value), path, "must be a number")
    _require(math.isfinite(value), path, "must be finite")
    return float(value)


def _as_bool(value: Any, path: str) -> bool:
    _require(isinstance(value, bool), path, "must be a boolean")
    return value


def _as_vector3(value: Any, path: str) -> Vector3:
    _require(
        isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 3,
        path,
        "must be a list of three numbers",
    )
    x, y, z = (_as_finite(item, f"{path}[{index}]") for index, item in enumerate(value))
    return (x, y, z)


def _as_color(value: Any, path: str) -> Color:
    color = _as_vector3(value, path)
    for index, channel in enumerate(color):
        _require(0.0 <= channel <= 1.0, f"{path}[{index}]", "must be within [0, 1]")
    return color


def _as_iterations(value: Any, path: str) -> int:
    _require(
        isinstance(value, int) and not isinstance(value, bool),
        path,
        "must be an integer",
    )
    maximum = Configuration.max_iterations()
    _require(
        0 <= value <= maximum,
        path,
        f"must be between 0 and {maximum}",
    )
    return value


def _as_rules(value: Any, path: str) -> dict[str, str]:
    _require(isinstance(value, Mapping), path, "must be a mapping of symbol to string")
    rules: dict[str, str] = {}
    for symbol, replacement in value.items():
        entry_path = f"{path}[{symbol!r}]"
        _require(
            isinstance(symbol, str) and len(symbol) == 1,
            entry_path,
            "left-hand side must be a single symbol",
        )
        rules[symbol] = _as_str(replacement, entry_path)
    return rules


def _as_palette(value: Any, path: str) -> tuple[Color, ...]:
    _require(
        isinstance(value, Sequence) and not isinstance(value, str),
        path,
        "must be a list of [r, g, b] triples",
    )
    _require(len(value) > 0, path, "must not be empty")
    return tuple(_as_color(item, f"{path}[{index}]") for index, item in enumerate(value))


@dataclass(frozen=True)
class LSystemRule:
    """A validated rule set: axiom, productions and drawing parameters.

    ``angle`` is in degrees. Symbols with no production are copied through
    unchanged when rewriting.
    """

    name: str
    axiom: str
    angle: float
    iterations: int
    rules: dict[str, str] = field(default_factory=dict)
    step_length: float = DEFAULT_STEP_LENGTH
    start_position: Vector3 = DEFAULT_START_POSITION
    start_direction: Vector3 = DEFAULT_START_DIRECTION
    depth_based: bool = True
    palette: tuple[Color, ...] | None = None
    description: str = ""

    @property
    def color_mode(self) -> ColorMode:
        return ColorMode.DEPTH if self.depth_based else ColorMode.PALETTE

    @classmethod
    def from_mapping(cls, data: Any) -> "LSystemRule":
        """Validate a deserialized rule value.

        Unknown keys are ignored. Raises :class:`RuleValidationError` naming
        the first offending field.
        """

        _require(isinstance(data, Mapping), "<rule>", "must be a mapping")
        for required in ("name", "axiom", "angle", "iterations", "rules"):
            _require(required in data, required, "is required")

        name = _as_str(data["name"], "name")
        axiom = _as_str(data["axiom"], "axiom")
        angle = _as_finite(data["angle"], "angle")
        iterations = _as_iterations(data["iterations"], "iterations")
        rules = _as_rules(data["rules"], "rules")
        _require(
            axiom != "" or iterations == 0,
            "axiom",
            "must not be empty when iterations > 0",
        )

        step_length = DEFAULT_STEP_LENGTH
        if "step_length" in data:
            step_length = _as_finite(data["step_length"], "step_length")
            _require(step_length > 0, "step_length", "must be greater than 0")

        start_position = DEFAULT_START_POSITION
        if "start_position" in data:
            start_position = _as_vector3(data["start_position"], "start_position")

        start_direction = DEFAULT_START_DIRECTION
        if "start_direction" in data:
            start_direction = _as_vector3(data["start_direction"], "start_direction")
            _require(
                math.hypot(*start_direction) > 0.0,
                "start_direction",
                "must not be the zero vector",
            )

        depth_based = True
        palette = None
        if "colors" in data:
            colors = data["colors"]
            _require(isinstance(colors, Mapping), "colors", "must be a mapping")
            if "depth_based" in colors:
                depth_based = _as_bool(colors["depth_based"], "colors.depth_based")
            if "palette" in colors:
                palette = _as_palette(colors["palette"], "colors.palette")

        description = data.get("description", "")

        return cls(
            name=name,
            axiom=axiom,
            angle=angle,
            iterations=iterations,
            rules=rules,
            step_length=step_length,
            start_position=start_position,
            start_direction=start_direction,
            depth_based=depth_based,
            palette=palette,
            description=description if isinstance(description, str) else "",
        )

    def to_mapping(self) -> dict[str, Any]:
        colors: dict[str, Any] = {"depth_based": self.depth_based}
        if self.palette is not None:
            colors["palette"] = [list(color) for color in self.palette]
        return {
            "name": self.name,
            "axiom": self.axiom,
            "angle": self.angle,
            "iterations": self.iterations,
            "rules": dict(self.rules),
            "step_length": self.step_length,
            "start_position": list(self.start_position),
            "start_direction": list(self.start_direction),
            "colors": colors,
            "description": self.description,
        }

    def with_overrides(
        self,
        *,
        angle: float | None = None,
        iterations: int | None = None,
        step_length: float | None = None,
        depth_based: bool | None = None,
    ) -> "LSystemRule":
        """Return a re-validated copy with the given parameters replaced."""

        data = self.to_mapping()
        if angle is not None:
            data["angle"] = angle
        if iterations is not None:
            data["iterations"] = iterations
        if step_length is not None:
            data["step_length"] = step_length
        if depth_based is not None:
            data["colors"]["depth_based"] = depth_based
        return LSystemRule.from_mapping(data)
