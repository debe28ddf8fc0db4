import math

import numpy as np
import pytest

from lsystem3d.rendering.matrices import look_at_lh, perspective_lh


class TestLookAt:
    """The view matrix moves the eye to the origin looking down +Z."""

    def test_eye_maps_to_origin(self) -> None:
        view = look_at_lh((3.0, 4.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))

        eye = view @ np.array([3.0, 4.0, 5.0, 1.0])

        assert np.allclose(eye[:3], 0.0)

    def test_target_lies_on_positive_z(self) -> None:
        """In a left-handed view space the target is straight ahead at +distance."""

        view = look_at_lh((0.0, 0.0, -7.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))

        target = view @ np.array([0.0, 0.0, 0.0, 1.0])

        assert np.allclose(target[:3], (0.0, 0.0, 7.0))

    def test_rotation_block_is_orthonormal(self) -> None:
        view = look_at_lh((1.0, 2.0, 3.0), (-4.0, 0.5, 2.0), (0.0, 1.0, 0.0))

        rotation = view[:3, :3]

        assert np.allclose(rotation @ rotation.T, np.eye(3))
        assert np.linalg.det(rotation) == pytest.approx(1.0)


class TestPerspective:
    """The projection maps the view frustum depth range onto NDC z in [0, 1]."""

    @pytest.mark.parametrize(("depth", "ndc_z"), [(0.1, 0.0), (1000.0, 1.0)])
    def test_clip_planes_map_to_unit_depth(self, depth: float, ndc_z: float) -> None:
        projection = perspective_lh(math.radians(45.0), 4 / 3, 0.1, 1000.0)

        clip = projection @ np.array([0.0, 0.0, depth, 1.0])

        assert clip[3] == pytest.approx(depth)
        assert clip[2] / clip[3] == pytest.approx(ndc_z, abs=1e-9)

    def test_frustum_edge_maps_to_ndc_edge(self) -> None:
        """A point on the top edge of the field of view lands on NDC y = 1."""

        fov = math.radians(60.0)
        projection = perspective_lh(fov, 2.0, 0.1, 100.0)
        depth = 5.0

        top = projection @ np.array([0.0, depth * math.tan(fov / 2), depth, 1.0])
        side = projection @ np.array([depth * math.tan(fov / 2) * 2.0, 0.0, depth, 1.0])

        assert top[1] / top[3] == pytest.approx(1.0)
        assert side[0] / side[3] == pytest.approx(1.0)
