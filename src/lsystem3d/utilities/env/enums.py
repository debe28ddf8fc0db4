from enum import StrEnum


class RasterStrategy(StrEnum):
    VECTORIZED = "vectorized"
    LOOP = "loop"


class FrameExportStrategy(StrEnum):
    ARRAY = "array"
    BUFFER = "buffer"
