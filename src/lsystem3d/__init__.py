from enum import StrEnum


class ColorMode(StrEnum):
    DEPTH = "depth"
    PALETTE = "palette"
