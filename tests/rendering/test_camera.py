import math

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from lsystem3d.rendering.camera import (MAX_DISTANCE, MIN_DISTANCE,
                                        PITCH_LIMIT, OrbitCamera)
from lsystem3d.rendering.geometry import Bounds

WIDTH = 64
HEIGHT = 48


def _to_screen(camera: OrbitCamera, point: tuple[float, float, float]) -> tuple[float, float]:
    clip = camera.view_projection() @ np.array([*point, 1.0])
    ndc = clip[:3] / clip[3]
    return (ndc[0] + 1.0) * 0.5 * WIDTH, (1.0 - ndc[1]) * 0.5 * HEIGHT


def _to_ndc(camera: OrbitCamera, point: tuple[float, float, float]) -> np.ndarray:
    clip = camera.view_projection() @ np.array([*point, 1.0])
    return clip[:3] / clip[3]


class TestCameraProjection:
    """The orbit parameters place the target at the screen centre."""

    def test_target_projects_to_centre(self, front_camera: OrbitCamera) -> None:
        """A camera on +X looking at the origin sees it in the middle of the frame."""

        x, y = _to_screen(front_camera, (0.0, 0.0, 0.0))

        assert abs(x - WIDTH / 2) <= 1.0
        assert abs(y - HEIGHT / 2) <= 1.0

    @given(
        target=st.tuples(*[st.floats(min_value=-50.0, max_value=50.0)] * 3),
        yaw=st.floats(min_value=-10.0, max_value=10.0),
        pitch=st.floats(min_value=-1.4, max_value=1.4),
        distance=st.floats(min_value=1.0, max_value=100.0),
    )
    def test_target_is_always_centred(
        self,
        target: tuple[float, float, float],
        yaw: float,
        pitch: float,
        distance: float,
    ) -> None:
        """Wherever the camera orbits, the target stays at the screen centre."""

        camera = OrbitCamera(
            WIDTH / HEIGHT, target=target, yaw=yaw, pitch=pitch, distance=distance
        )

        x, y = _to_screen(camera, target)

        assert abs(x - WIDTH / 2) <= 1.0
        assert abs(y - HEIGHT / 2) <= 1.0

    def test_position_follows_orbit_formula(self) -> None:
        camera = OrbitCamera(1.0, target=(1.0, 2.0, 3.0), yaw=0.5, pitch=0.25, distance=4.0)

        expected = np.array(
            [
                1.0 + 4.0 * math.cos(0.25) * math.cos(0.5),
                2.0 + 4.0 * math.sin(0.25),
                3.0 + 4.0 * math.cos(0.25) * math.sin(0.5),
            ]
        )

        assert np.allclose(camera.position, expected)

    def test_screen_axes(self, front_camera: OrbitCamera) -> None:
        """World +Y is screen up; from +X looking back, world +Z is screen right."""

        _, above = _to_screen(front_camera, (0.0, 1.0, 0.0))
        right, _ = _to_screen(front_camera, (0.0, 0.0, 1.0))

        assert above < HEIGHT / 2
        assert right > WIDTH / 2

    def test_nearer_points_have_smaller_depth(self, front_camera: OrbitCamera) -> None:
        near = _to_ndc(front_camera, (2.0, 0.0, 0.0))[2]
        far = _to_ndc(front_camera, (-2.0, 0.0, 0.0))[2]

        assert 0.0 < near < far < 1.0


class TestCameraInteraction:
    """Drag, wheel and resize input keep the camera in its allowed ranges."""

    def test_drag_changes_yaw_and_pitch(self, front_camera: OrbitCamera) -> None:
        front_camera.start_rotate((100, 100))
        front_camera.update_rotate((110, 95))

        assert front_camera.yaw == pytest.approx(-0.1)
        assert front_camera.pitch == pytest.approx(0.05)
        assert np.linalg.norm(front_camera.position) == pytest.approx(10.0)

    def test_motion_without_drag_is_ignored(self, front_camera: OrbitCamera) -> None:
        """Moving the mouse without a held button leaves the orbit alone."""

        front_camera.update_rotate((100, 100))
        front_camera.update_rotate((300, 300))

        assert front_camera.yaw == 0.0
        assert front_camera.pitch == 0.0
        assert not front_camera.is_rotating

    def test_stop_rotate_ends_drag(self, front_camera: OrbitCamera) -> None:
        front_camera.start_rotate((0, 0))
        front_camera.stop_rotate()
        front_camera.update_rotate((50, 50))

        assert front_camera.yaw == 0.0

    def test_pitch_clamps_exactly_below(self, front_camera: OrbitCamera) -> None:
        """Dragging far down pins pitch to -pi/2 + 0.1."""

        front_camera.start_rotate((0, 0))
        for step in range(1, 20):
            front_camera.update_rotate((0, step * 100))

        assert front_camera.pitch == -math.pi / 2 + 0.1

    def test_pitch_clamps_exactly_above(self, front_camera: OrbitCamera) -> None:
        front_camera.start_rotate((0, 0))
        front_camera.update_rotate((0, -1000))

        assert front_camera.pitch == PITCH_LIMIT

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [(1.0, 11.0), (-1.0, 9.0), (-50.0, MIN_DISTANCE), (500.0, MAX_DISTANCE)],
        ids=["out", "in", "clamped-near", "clamped-far"],
    )
    def test_zoom_scales_distance(
        self, front_camera: OrbitCamera, delta: float, expected: float
    ) -> None:
        front_camera.zoom(delta)

        assert front_camera.distance == pytest.approx(expected)
        assert np.linalg.norm(front_camera.position) == pytest.approx(expected)

    @pytest.mark.parametrize("aspect", [0.0, -1.0, math.inf, math.nan])
    def test_set_aspect_rejects_invalid(
        self, front_camera: OrbitCamera, aspect: float
    ) -> None:
        with pytest.raises(ValueError):
            front_camera.set_aspect(aspect)

    def test_set_aspect_updates_projection(self, front_camera: OrbitCamera) -> None:
        front_camera.set_aspect(2.0)

        projection = front_camera.projection_matrix()

        assert projection[0, 0] == pytest.approx(projection[1, 1] / 2.0)

    @pytest.mark.parametrize(
        ("near", "far"), [(0.0, 10.0), (5.0, 1.0), (0.1, math.inf)]
    )
    def test_invalid_clip_planes(self, near: float, far: float) -> None:
        with pytest.raises(ValueError):
            OrbitCamera(1.0, near=near, far=far)


class TestCameraFitBounds:
    """Framing a figure keeps its whole bounding box on screen."""

    @pytest.mark.parametrize("aspect", [WIDTH / HEIGHT, 0.5])
    @pytest.mark.parametrize("yaw", [0.0, 1.0, 2.5])
    def test_box_corners_fit_on_screen(self, aspect: float, yaw: float) -> None:
        bounds = Bounds(minimum=(-3.0, -8.0, -2.0), maximum=(4.0, 6.0, 1.0))
        camera = OrbitCamera(aspect, yaw=yaw)

        camera.fit_bounds(bounds)

        assert np.allclose(camera.target, bounds.center)
        for x in (bounds.minimum[0], bounds.maximum[0]):
            for y in (bounds.minimum[1], bounds.maximum[1]):
                for z in (bounds.minimum[2], bounds.maximum[2]):
                    ndc = _to_ndc(camera, (x, y, z))
                    assert np.all(np.abs(ndc[:2]) <= 1.0), f"Corner {(x, y, z)} is off screen."

    def test_fit_distance_is_clamped(self, front_camera: OrbitCamera) -> None:
        front_camera.fit_bounds(Bounds(minimum=(0.0, 0.0, 0.0), maximum=(0.0, 0.0, 0.0)))

        assert front_camera.distance == MIN_DISTANCE
