from lsystem3d.utilities.env.parsing import _env_int

DEFAULT_MAX_EXPANDED_LENGTH = 5_000_000
DEFAULT_MAX_ITERATIONS = 16
DEFAULT_RENORMALIZE_INTERVAL = 100
MAX_RENORMALIZE_INTERVAL = 1000


class LSystemConfiguration:
    @classmethod
    def max_expanded_length(cls) -> int:
        return _env_int(
            "LSYSTEM_MAX_EXPANDED_LENGTH",
            default=DEFAULT_MAX_EXPANDED_LENGTH,
            minimum=1,
        )

    @classmethod
    def max_iterations(cls) -> int:
        return _env_int(
            "LSYSTEM_MAX_ITERATIONS", default=DEFAULT_MAX_ITERATIONS, minimum=0
        )

    @classmethod
    def renormalize_interval(cls) -> int:
        return _env_int(
            "LSYSTEM_RENORMALIZE_INTERVAL",
            default=DEFAULT_RENORMALIZE_INTERVAL,
            minimum=1,
            maximum=MAX_RENORMALIZE_INTERVAL,
        )
