import logging
import os
from pathlib import Path

from lsystem3d.utilities.env.parsing import _env_float

DEFAULT_LOG_DIRECTORY = Path("~/.lsystem3d/logs")
DEFAULT_FRAME_LOG_INTERVAL = 1.0


class DiagnosticsConfiguration:
    @classmethod
    def log_level(cls) -> int:
        """Level named by ``LOG_LEVEL``; unknown names fall back to INFO."""

        level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").strip().upper())
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def log_directory(cls) -> Path:
        configured = os.environ.get("LSYSTEM_LOG_DIR")
        return Path(configured or DEFAULT_LOG_DIRECTORY).expanduser()

    @classmethod
    def frame_log_interval(cls) -> float:
        return _env_float(
            "LSYSTEM_FRAME_LOG_INTERVAL",
            default=DEFAULT_FRAME_LOG_INTERVAL,
            minimum=0.0,
        )
