from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import numpy as np

from lsystem3d.errors import BufferSizeError
from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.geometry import LineSegment
from lsystem3d.rendering.rasterizer import SegmentBatch, rasterize
from lsystem3d.utilities.env import Configuration, RasterStrategy
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

BACKGROUND_COLOR = 0x000020
# Screen coordinates beyond this lose integer precision as sample positions.
SCREEN_LIMIT = float(2**24)


@dataclass(frozen=True)
class RenderStats:
    submitted: int
    drawn: int
    culled: int


class LineRenderer:
    """Software renderer for colored 3D line segments.

    Holds one frame's segment list plus a packed ``0x00RRGGBB`` pixel buffer
    and an NDC depth buffer, both row-major with the origin at the top left.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        strategy_provider: Callable[[], RasterStrategy] | None = None,
    ) -> None:
        self._strategy_provider = strategy_provider or Configuration.raster_strategy
        self._lines: list[LineSegment] = []
        self._arrays: tuple[np.ndarray, np.ndarray, np.ndarray] | None = None
        self._allocate(width, height)

    def _allocate(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise BufferSizeError(width, height)
        self._width = width
        self._height = height
        self._pixels = np.full(width * height, BACKGROUND_COLOR, dtype=np.uint32)
        self._depth = np.full(width * height, np.inf, dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def clear(self) -> None:
        self._pixels.fill(BACKGROUND_COLOR)
        self._depth.fill(np.inf)
        self._lines.clear()
        self._arrays = None

    def add_line(self, segment: LineSegment) -> None:
        self._lines.append(segment)
        self._arrays = None

    def extend(self, segments: Iterable[LineSegment]) -> None:
        self._lines.extend(segments)
        self._arrays = None

    def resize(self, width: int, height: int) -> None:
        self._allocate(width, height)
        logger.debug("Resized render buffers to %dx%d", width, height)

    def get_buffer(self) -> np.ndarray:
        """Read-only row-major view of the packed pixel buffer."""

        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def get_depth_buffer(self) -> np.ndarray:
        view = self._depth.view()
        view.flags.writeable = False
        return view

    def render(self, camera: OrbitCamera) -> RenderStats:
        """Project and rasterize every stored segment.

        Segments with an endpoint at or behind the eye plane (clip ``w <= 0``),
        with non-finite coordinates, or projecting further than
        ``SCREEN_LIMIT`` pixels from the origin are dropped whole.
        """

        submitted = len(self._lines)
        if submitted == 0:
            return RenderStats(submitted=0, drawn=0, culled=0)

        positions, colors, thickness = self._segment_arrays()
        matrix = camera.view_projection()
        homogeneous = np.concatenate(
            [positions.reshape(-1, 3), np.ones((submitted * 2, 1))], axis=1
        )
        with np.errstate(invalid="ignore", over="ignore"):
            clip = (homogeneous @ matrix.T).reshape(submitted, 2, 4)
        w = clip[:, :, 3]
        keep = np.all(w > 0.0, axis=1) & np.all(np.isfinite(clip), axis=(1, 2))

        clip = clip[keep]
        with np.errstate(over="ignore"):
            ndc = clip[:, :, :3] / clip[:, :, 3:4]
        screen = np.empty_like(ndc)
        screen[:, :, 0] = (ndc[:, :, 0] + 1.0) * 0.5 * self._width
        screen[:, :, 1] = (1.0 - ndc[:, :, 1]) * 0.5 * self._height
        screen[:, :, 2] = ndc[:, :, 2]
        with np.errstate(invalid="ignore"):
            finite = np.all(np.isfinite(screen), axis=(1, 2)) & np.all(
                np.abs(screen[:, :, :2]) <= SCREEN_LIMIT, axis=(1, 2)
            )
        screen = screen[finite]
        kept_colors = colors[keep][finite]

        batch = SegmentBatch(
            start=np.ascontiguousarray(screen[:, 0]),
            end=np.ascontiguousarray(screen[:, 1]),
            start_color=np.ascontiguousarray(kept_colors[:, 0]),
            end_color=np.ascontiguousarray(kept_colors[:, 1]),
            thickness=thickness[keep][finite],
        )
        rasterize(
            self._strategy_provider(),
            batch,
            self._pixels,
            self._depth,
            self._width,
            self._height,
        )

        drawn = len(batch)
        culled = submitted - drawn
        if culled:
            logger.debug("Culled %d of %d segments behind the camera", culled, submitted)
        return RenderStats(submitted=submitted, drawn=drawn, culled=culled)

    def _segment_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        if self._arrays is None:
            lines = self._lines
            positions = np.array(
                [(line.start.position, line.end.position) for line in lines],
                dtype=np.float64,
            )
            colors = np.array(
                [(line.start.color, line.end.color) for line in lines],
                dtype=np.float64,
            )
            thickness = np.array([line.thickness for line in lines], dtype=np.float64)
            self._arrays = (positions, colors, thickness)
        return self._arrays
