from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pygame
from PIL import Image

from lsystem3d.utilities.env import Configuration, FrameExportStrategy


def unpack_rgb(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Split ``0x00RRGGBB`` words into an ``(height, width, 3)`` uint8 array."""

    words = np.asarray(buffer, dtype=np.uint32).reshape(height, width)
    rgb = np.empty((height, width, 3), dtype=np.uint8)
    rgb[..., 0] = (words >> 16) & 0xFF
    rgb[..., 1] = (words >> 8) & 0xFF
    rgb[..., 2] = words & 0xFF
    return rgb


class FrameExporter:
    """Convert packed pixel buffers into PIL images using configurable strategies."""

    def __init__(
        self,
        strategy_provider: Callable[[], FrameExportStrategy] | None = None,
    ) -> None:
        self._strategy_provider = (
            strategy_provider or Configuration.frame_export_strategy
        )

    def export(self, buffer: np.ndarray, width: int, height: int) -> Image.Image:
        strategy = self._strategy_provider()
        if strategy == FrameExportStrategy.BUFFER:
            return self._export_buffer(buffer, width, height)
        return self._export_array(buffer, width, height)

    def _export_buffer(self, buffer: np.ndarray, width: int, height: int) -> Image.Image:
        # Little-endian 0x00RRGGBB words are laid out as B, G, R, X bytes.
        raw = np.asarray(buffer, dtype="<u4").tobytes()
        return Image.frombuffer("RGB", (width, height), raw, "raw", "BGRX", 0, 1)

    def _export_array(self, buffer: np.ndarray, width: int, height: int) -> Image.Image:
        return Image.fromarray(unpack_rgb(buffer, width, height))


def blit_buffer(surface: pygame.Surface, buffer: np.ndarray) -> None:
    """Copy a packed buffer of the surface's size onto ``surface``."""

    width, height = surface.get_size()
    rgb = unpack_rgb(buffer, width, height)
    # surfarray indexes (x, y); the buffer is row-major (y, x).
    pygame.surfarray.blit_array(surface, rgb.swapaxes(0, 1))
