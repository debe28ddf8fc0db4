from lsystem3d.utilities.env.parsing import _env_flag, _env_int

DEFAULT_VIEWER_WIDTH = 800
DEFAULT_VIEWER_HEIGHT = 600
DEFAULT_VIEWER_FPS = 60


class ViewerConfiguration:
    @classmethod
    def viewer_width(cls) -> int:
        return _env_int("LSYSTEM_VIEWER_WIDTH", default=DEFAULT_VIEWER_WIDTH, minimum=1)

    @classmethod
    def viewer_height(cls) -> int:
        return _env_int(
            "LSYSTEM_VIEWER_HEIGHT", default=DEFAULT_VIEWER_HEIGHT, minimum=1
        )

    @classmethod
    def viewer_fps(cls) -> int:
        return _env_int("LSYSTEM_VIEWER_FPS", default=DEFAULT_VIEWER_FPS, minimum=1)

    @classmethod
    def viewer_fit_on_load(cls) -> bool:
        return _env_flag("LSYSTEM_VIEWER_FIT_ON_LOAD", default=True)
