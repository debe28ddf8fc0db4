from __future__ import annotations

from dataclasses import dataclass

from lsystem3d.lsystem.rewriter import expand
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.geometry import Bounds, LineSegment, segment_bounds
from lsystem3d.rendering.renderer import LineRenderer, RenderStats
from lsystem3d.turtle.turtle import Turtle3D
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Figure:
    """Camera-independent result of expanding and interpreting one rule."""

    rule: LSystemRule
    symbols: str
    segments: tuple[LineSegment, ...]
    bounds: Bounds | None


def build_figure(rule: LSystemRule, *, max_length: int | None = None) -> Figure:
    symbols = expand(rule, max_length=max_length)
    segments = tuple(Turtle3D.from_rule(rule).trace(symbols))
    logger.info(
        "Built '%s': %d symbols, %d segments",
        rule.name,
        len(symbols),
        len(segments),
    )
    return Figure(
        rule=rule,
        symbols=symbols,
        segments=segments,
        bounds=segment_bounds(segments),
    )


def render_figure(
    renderer: LineRenderer, figure: Figure | None, camera: OrbitCamera
) -> RenderStats:
    """One frame: clear, re-emit the figure's segments, rasterize."""

    renderer.clear()
    if figure is not None:
        renderer.extend(figure.segments)
    return renderer.render(camera)
