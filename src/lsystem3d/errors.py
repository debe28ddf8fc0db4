class LSystemError(Exception):
    """Base class for errors raised by the generation and rendering pipeline."""


class RuleValidationError(LSystemError, ValueError):
    """A rule value is missing a field or carries a malformed one."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class ExpansionLimitError(LSystemError):
    """Rewriting would grow the expanded string beyond the configured cap."""

    def __init__(self, *, limit: int, iterations: int, length: int) -> None:
        super().__init__(
            f"expansion pass {iterations} would produce {length} symbols "
            f"(limit {limit})"
        )
        self.limit = limit
        self.iterations = iterations
        self.length = length


class BufferSizeError(LSystemError, ValueError):
    """A pixel buffer was requested with a zero or negative dimension."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            f"buffer dimensions must be positive, got {width}x{height}"
        )
        self.width = width
        self.height = height
