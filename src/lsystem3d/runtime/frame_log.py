from __future__ import annotations

import logging
import time
from typing import Callable

from lsystem3d.rendering.renderer import RenderStats


class FrameTimingLog:
    """Summarize viewer frame timings once per interval.

    Every frame is logged at DEBUG. At most once per ``interval_seconds`` an
    INFO summary reports how many frames were rendered since the previous
    summary, their mean render time and the segment counts of the latest
    frame. An interval of zero summarizes every frame.
    """

    def __init__(
        self,
        logger: logging.Logger,
        interval_seconds: float,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logger
        self._interval = interval_seconds
        self._monotonic = monotonic
        self._window_start: float | None = None
        self._frames = 0
        self._total_ms = 0.0

    def record(self, stats: RenderStats, elapsed_ms: float) -> bool:
        """Account for one frame; returns ``True`` when a summary was logged."""

        now = self._monotonic()
        if self._window_start is None:
            self._window_start = now
        self._frames += 1
        self._total_ms += elapsed_ms
        self._logger.debug(
            "Rendered %d/%d segments in %.1f ms", stats.drawn, stats.submitted, elapsed_ms
        )
        if now - self._window_start < self._interval:
            return False

        self._logger.info(
            "%d frames at %.1f ms mean; last drew %d/%d segments, %d culled",
            self._frames,
            self._total_ms / self._frames,
            stats.drawn,
            stats.submitted,
            stats.culled,
        )
        self._window_start = now
        self._frames = 0
        self._total_ms = 0.0
        return True
