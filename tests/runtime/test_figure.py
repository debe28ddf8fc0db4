import pytest

from lsystem3d.errors import ExpansionLimitError
from lsystem3d.lsystem.presets import get_preset
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.renderer import BACKGROUND_COLOR, LineRenderer
from lsystem3d.runtime.figure import build_figure, render_figure


def _koch(iterations: int) -> LSystemRule:
    return LSystemRule(
        name="Koch",
        axiom="F",
        angle=90.0,
        iterations=iterations,
        rules={"F": "F+F-F-F+F"},
    )


class TestBuildFigure:
    """Expansion and interpretation combine into one immutable figure."""

    def test_one_segment_per_draw_symbol(self) -> None:
        figure = build_figure(_koch(2))

        assert len(figure.symbols) == 49
        assert len(figure.segments) == figure.symbols.count("F") == 25

    def test_bounds_cover_every_endpoint(self) -> None:
        figure = build_figure(_koch(1))

        assert figure.bounds is not None
        for segment in figure.segments:
            for point in (segment.start.position, segment.end.position):
                for axis in range(3):
                    assert figure.bounds.minimum[axis] - 1e-9 <= point[axis]
                    assert point[axis] <= figure.bounds.maximum[axis] + 1e-9

    def test_koch_one_pass_outline(self) -> None:
        """One Koch pass spans one unit to the left and three units up."""

        figure = build_figure(_koch(1))

        assert figure.bounds is not None
        assert figure.bounds.minimum == pytest.approx((-1.0, 0.0, 0.0), abs=1e-9)
        assert figure.bounds.maximum == pytest.approx((0.0, 3.0, 0.0), abs=1e-9)

    def test_figure_without_segments_has_no_bounds(self) -> None:
        rule = LSystemRule(name="X", axiom="X", angle=90.0, iterations=5, rules={})

        figure = build_figure(rule)

        assert figure.segments == ()
        assert figure.bounds is None

    def test_cap_is_enforced(self) -> None:
        with pytest.raises(ExpansionLimitError):
            build_figure(_koch(3), max_length=100)


class TestRenderFigure:
    """A frame is clear, emit, rasterize."""

    def test_frame_starts_from_clear_buffers(self, front_camera: OrbitCamera) -> None:
        renderer = LineRenderer(64, 48)
        figure = build_figure(get_preset("plant"))
        render_figure(renderer, figure, front_camera)

        stats = render_figure(renderer, None, front_camera)

        assert stats.submitted == 0
        assert renderer.line_count == 0
        assert (renderer.get_buffer() == BACKGROUND_COLOR).all()

    def test_figure_segments_are_submitted(self, front_camera: OrbitCamera) -> None:
        renderer = LineRenderer(64, 48)
        figure = build_figure(_koch(1))

        stats = render_figure(renderer, figure, front_camera)

        assert stats.submitted == len(figure.segments)
        assert renderer.line_count == len(figure.segments)
