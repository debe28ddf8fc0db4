"""Left-handed view and projection matrices.

Matrices act on column vectors (``clip = M @ [x, y, z, 1]``). The projection
maps view-space depth ``near..far`` to NDC z ``0..1`` and puts view-space z
in clip w.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def _normalized(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def look_at_lh(
    eye: Sequence[float], target: Sequence[float], up: Sequence[float]
) -> np.ndarray:
    eye_v = np.asarray(eye, dtype=np.float64)
    forward = _normalized(np.asarray(target, dtype=np.float64) - eye_v)
    side = _normalized(np.cross(np.asarray(up, dtype=np.float64), forward))
    true_up = np.cross(forward, side)
    return np.array(
        [
            [side[0], side[1], side[2], -np.dot(side, eye_v)],
            [true_up[0], true_up[1], true_up[2], -np.dot(true_up, eye_v)],
            [forward[0], forward[1], forward[2], -np.dot(forward, eye_v)],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def perspective_lh(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    height = 1.0 / math.tan(fov_y / 2.0)
    width = height / aspect
    depth = far / (far - near)
    return np.array(
        [
            [width, 0.0, 0.0, 0.0],
            [0.0, height, 0.0, 0.0],
            [0.0, 0.0, depth, -depth * near],
            [0.0, 0.0, 1.0, 0.0],
        ],
        dtype=np.float64,
    )
