from __future__ import annotations

from pathlib import Path

from reactivex.subject import BehaviorSubject

from lsystem3d.errors import RuleValidationError
from lsystem3d.lsystem.loader import load_rule
from lsystem3d.lsystem.presets import get_preset, preset_names
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.utilities.env import Configuration
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

ANGLE_STEP = 5.0
MIN_ANGLE = 5.0
MAX_ANGLE = 90.0
STEP_LENGTH_STEP = 0.1
MIN_STEP_LENGTH = 0.1
MAX_STEP_LENGTH = 3.0


def _nudge(value: float, delta: float, lower: float, upper: float) -> float:
    """Move ``value`` by ``delta``, stopping at the bound it moves towards.

    A value already past that bound stays where it is.
    """

    moved = value + delta
    if delta > 0:
        return max(min(moved, upper), value)
    return min(max(moved, lower), value)


class RuleSession:
    """The rule currently on screen and the ways the user can change it.

    Every accepted change is published on :attr:`rules`. A change that fails
    validation is logged and dropped; the previous rule stays current.
    """

    def __init__(self, rule: LSystemRule, path: Path | None = None) -> None:
        self._rule = rule
        self._path = path
        self._presets = preset_names()
        self.rules: BehaviorSubject[LSystemRule] = BehaviorSubject(rule)

    @property
    def rule(self) -> LSystemRule:
        return self._rule

    @property
    def path(self) -> Path | None:
        return self._path

    def _publish(self, rule: LSystemRule) -> None:
        self._rule = rule
        self.rules.on_next(rule)

    def reload(self) -> bool:
        """Re-read the rule file from disk; presets have nothing to reload."""

        if self._path is None:
            logger.info("'%s' is a built-in preset; nothing to reload", self._rule.name)
            return False
        try:
            rule = load_rule(self._path)
        except (OSError, ValueError) as error:
            logger.error("Could not reload %s: %s", self._path, error)
            return False
        self._publish(rule)
        return True

    def cycle_preset(self, offset: int = 1) -> LSystemRule:
        names = self._presets
        current = next(
            (name for name in names if get_preset(name).name == self._rule.name),
            None,
        )
        index = names.index(current) + offset if current is not None else 0
        rule = get_preset(names[index % len(names)])
        self._path = None
        self._publish(rule)
        return rule

    def adjust(
        self,
        *,
        angle: float = 0.0,
        step_length: float = 0.0,
        iterations: int = 0,
    ) -> bool:
        """Nudge parameters, clamped to the ranges the viewer allows."""

        rule = self._rule
        new_angle = _nudge(rule.angle, angle, MIN_ANGLE, MAX_ANGLE)
        new_step = _nudge(rule.step_length, step_length, MIN_STEP_LENGTH, MAX_STEP_LENGTH)
        new_iterations = int(
            _nudge(rule.iterations, iterations, 0, Configuration.max_iterations())
        )
        return self._apply(
            angle=new_angle if angle else None,
            step_length=new_step if step_length else None,
            iterations=new_iterations if iterations else None,
        )

    def toggle_coloring(self) -> bool:
        return self._apply(depth_based=not self._rule.depth_based)

    def _apply(self, **overrides: object) -> bool:
        try:
            rule = self._rule.with_overrides(**overrides)  # type: ignore[arg-type]
        except RuleValidationError as error:
            logger.error("Ignoring parameter change: %s", error)
            return False
        if rule == self._rule:
            return False
        self._publish(rule)
        return True
