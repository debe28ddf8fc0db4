"""Parallel rewriting of an axiom by context-free productions.

Each pass replaces every symbol (a single code point) by its production, or
copies it through when it has none. The final length grows roughly as
``b ** iterations`` where ``b`` is the number of symbols a production emits
per rewritten symbol. A typical branching plant such as
``F -> FF-[-F+F+F]+[+F-F-F]`` reaches ~8 * 10**5 symbols at iteration 6
and ~6 * 10**6 at iteration 7. Iteration 7 is where memory becomes a
concern: the string itself is small but interpretation produces one segment
per ``F`` (~2 * 10**6 segments, several hundred MiB as Python objects). Passes that would
exceed ``LSYSTEM_MAX_EXPANDED_LENGTH`` raise :class:`ExpansionLimitError`
before the oversized string is built.
"""

from __future__ import annotations

from collections.abc import Mapping

from lsystem3d.errors import ExpansionLimitError
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.utilities.env import Configuration
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)


def predicted_length(symbols: str, rules: Mapping[str, str]) -> int:
    """Length of ``rewrite_pass(symbols, rules)`` without building it."""

    growth = sum(
        symbols.count(symbol) * (len(replacement) - 1)
        for symbol, replacement in rules.items()
    )
    return len(symbols) + growth


def rewrite_pass(symbols: str, rules: Mapping[str, str]) -> str:
    if not rules:
        return symbols
    return symbols.translate(str.maketrans(dict(rules)))


class Rewriter:
    """Rewriting session for one rule.

    The session starts at the axiom and is advanced one pass at a time by
    :meth:`step`; it is discarded when the rule changes.
    """

    def __init__(self, rule: LSystemRule, *, max_length: int | None = None) -> None:
        self._rule = rule
        self._table = str.maketrans(dict(rule.rules)) if rule.rules else None
        self._max_length = (
            max_length if max_length is not None else Configuration.max_expanded_length()
        )
        self._current = rule.axiom
        self._iterations_applied = 0

    @property
    def rule(self) -> LSystemRule:
        return self._rule

    @property
    def current(self) -> str:
        return self._current

    @property
    def iterations_applied(self) -> int:
        return self._iterations_applied

    def reset(self) -> None:
        self._current = self._rule.axiom
        self._iterations_applied = 0

    def step(self) -> str:
        """Apply one rewrite pass and return the new string."""

        if self._table is None:
            self._iterations_applied += 1
            return self._current

        length = predicted_length(self._current, self._rule.rules)
        if length > self._max_length:
            raise ExpansionLimitError(
                limit=self._max_length,
                iterations=self._iterations_applied + 1,
                length=length,
            )
        self._current = self._current.translate(self._table)
        self._iterations_applied += 1
        logger.debug(
            "Rewrite pass %d of '%s' produced %d symbols",
            self._iterations_applied,
            self._rule.name,
            len(self._current),
        )
        return self._current

    def expand(self) -> str:
        """Advance until the rule's iteration count is reached."""

        while self._iterations_applied < self._rule.iterations:
            self.step()
        return self._current


def expand(rule: LSystemRule, *, max_length: int | None = None) -> str:
    """Return the axiom rewritten ``rule.iterations`` times."""

    return Rewriter(rule, max_length=max_length).expand()
