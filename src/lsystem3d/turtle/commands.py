from __future__ import annotations

from enum import StrEnum


class TurtleCommand(StrEnum):
    DRAW = "F"
    DRAW_ALT = "G"
    MOVE = "f"
    MOVE_ALT = "g"
    YAW_LEFT = "+"
    YAW_RIGHT = "-"
    PITCH_DOWN = "&"
    PITCH_UP = "^"
    ROLL_LEFT = "\\"
    ROLL_RIGHT = "/"
    TURN_AROUND = "|"
    PUSH = "["
    POP = "]"
    NEXT_COLOR = "#"
    WIDEN = "'"
    NARROW = "!"


_COMMANDS: dict[str, TurtleCommand] = {command.value: command for command in TurtleCommand}
# U+2212 MINUS SIGN is accepted as a yaw-right alias.
_COMMANDS["−"] = TurtleCommand.YAW_RIGHT


def parse_command(symbol: str) -> TurtleCommand | None:
    """Return the command for ``symbol``; structure-only symbols map to ``None``."""

    return _COMMANDS.get(symbol)
