import os

from lsystem3d.utilities.env.enums import FrameExportStrategy, RasterStrategy

DEFAULT_RASTER_STRATEGY = RasterStrategy.VECTORIZED
DEFAULT_FRAME_EXPORT_STRATEGY = FrameExportStrategy.ARRAY


class RenderingConfiguration:
    @classmethod
    def raster_strategy(cls) -> RasterStrategy:
        strategy = os.environ.get(
            "LSYSTEM_RASTER_STRATEGY", DEFAULT_RASTER_STRATEGY.value
        ).strip().lower()
        try:
            return RasterStrategy(strategy)
        except ValueError as exc:
            raise ValueError(
                "LSYSTEM_RASTER_STRATEGY must be 'vectorized' or 'loop'"
            ) from exc

    @classmethod
    def frame_export_strategy(cls) -> FrameExportStrategy:
        strategy = os.environ.get(
            "LSYSTEM_FRAME_EXPORT_STRATEGY", DEFAULT_FRAME_EXPORT_STRATEGY.value
        ).strip().lower()
        try:
            return FrameExportStrategy(strategy)
        except ValueError as exc:
            raise ValueError(
                "LSYSTEM_FRAME_EXPORT_STRATEGY must be 'array' or 'buffer'"
            ) from exc
