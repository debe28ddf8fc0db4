"""Environment configuration helpers."""

from lsystem3d.utilities.env.config import Configuration as Configuration
from lsystem3d.utilities.env.enums import \
    FrameExportStrategy as FrameExportStrategy
from lsystem3d.utilities.env.enums import RasterStrategy as RasterStrategy
