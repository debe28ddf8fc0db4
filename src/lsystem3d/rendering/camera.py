from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from lsystem3d.rendering.geometry import Bounds
from lsystem3d.rendering.matrices import look_at_lh, perspective_lh

WORLD_UP = (0.0, 1.0, 0.0)
ROTATE_SENSITIVITY = 0.01
ZOOM_SENSITIVITY = 0.1
PITCH_LIMIT = math.pi / 2 - 0.1
MIN_DISTANCE = 1.0
MAX_DISTANCE = 100.0
FIT_MARGIN = 1.1


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class OrbitCamera:
    """Camera orbiting ``target`` at ``distance`` along yaw/pitch angles.

    The position is always derived from the orbit parameters; every
    interaction that changes them recomputes it.
    """

    def __init__(
        self,
        aspect: float,
        *,
        target: Sequence[float] = (0.0, 0.0, 0.0),
        yaw: float = 0.0,
        pitch: float = -0.3,
        distance: float = 10.0,
        fov: float = math.radians(45.0),
        near: float = 0.1,
        far: float = 1000.0,
    ) -> None:
        if not (0.0 < near < far) or not math.isfinite(far):
            raise ValueError("near and far must satisfy 0 < near < far < inf")
        if not (0.0 < fov < math.pi):
            raise ValueError("fov must be within (0, pi) radians")
        self.target = np.asarray(target, dtype=np.float64)
        self.yaw = float(yaw)
        self.pitch = _clamp(float(pitch), -PITCH_LIMIT, PITCH_LIMIT)
        self.distance = _clamp(float(distance), MIN_DISTANCE, MAX_DISTANCE)
        self.fov = fov
        self.near = near
        self.far = far
        self.aspect = 1.0
        self.set_aspect(aspect)
        self.position = np.zeros(3, dtype=np.float64)
        self._last_cursor: tuple[float, float] | None = None
        self._rotating = False
        self.update_from_angles()

    @property
    def is_rotating(self) -> bool:
        return self._rotating

    def update_from_angles(self) -> None:
        offset = np.array(
            [
                math.cos(self.pitch) * math.cos(self.yaw),
                math.sin(self.pitch),
                math.cos(self.pitch) * math.sin(self.yaw),
            ]
        )
        self.position = self.target + self.distance * offset

    def view_matrix(self) -> np.ndarray:
        return look_at_lh(self.position, self.target, WORLD_UP)

    def projection_matrix(self) -> np.ndarray:
        return perspective_lh(self.fov, self.aspect, self.near, self.far)

    def view_projection(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    def start_rotate(self, cursor: tuple[float, float]) -> None:
        self._rotating = True
        self._last_cursor = cursor

    def stop_rotate(self) -> None:
        self._rotating = False
        self._last_cursor = None

    def update_rotate(self, cursor: tuple[float, float]) -> None:
        if self._rotating and self._last_cursor is not None:
            delta_x = cursor[0] - self._last_cursor[0]
            delta_y = cursor[1] - self._last_cursor[1]
            self.yaw -= delta_x * ROTATE_SENSITIVITY
            self.pitch = _clamp(
                self.pitch - delta_y * ROTATE_SENSITIVITY, -PITCH_LIMIT, PITCH_LIMIT
            )
            self.update_from_angles()
        self._last_cursor = cursor

    def zoom(self, delta: float) -> None:
        self.distance = _clamp(
            self.distance * (1.0 + ZOOM_SENSITIVITY * delta), MIN_DISTANCE, MAX_DISTANCE
        )
        self.update_from_angles()

    def set_aspect(self, aspect: float) -> None:
        if not math.isfinite(aspect) or aspect <= 0.0:
            raise ValueError(f"aspect must be finite and positive, got {aspect}")
        self.aspect = float(aspect)

    def fit_bounds(self, bounds: Bounds) -> None:
        """Aim at the box centre and back off until its bounding sphere fits."""

        self.target = np.asarray(bounds.center, dtype=np.float64)
        half_fov = self.fov / 2.0
        if self.aspect < 1.0:
            half_fov = math.atan(math.tan(half_fov) * self.aspect)
        distance = FIT_MARGIN * bounds.radius / math.sin(half_fov)
        self.distance = _clamp(distance, MIN_DISTANCE, MAX_DISTANCE)
        self.update_from_angles()
