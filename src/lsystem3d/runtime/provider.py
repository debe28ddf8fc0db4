from __future__ import annotations

from abc import abstractmethod
from typing import Generic, TypeVar

import reactivex
from reactivex import operators as ops

from lsystem3d.errors import ExpansionLimitError
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.runtime.figure import Figure, build_figure
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ObservableProvider(Generic[T]):
    @abstractmethod
    def observable(self) -> reactivex.Observable[T]:
        raise NotImplementedError("")


class FigureProvider(ObservableProvider[Figure]):
    """Turn a stream of rule changes into a stream of built figures.

    Expansion and interpretation run only when the rule actually changes.
    A rule whose expansion exceeds the length cap produces no figure, so
    subscribers keep showing the last good one.
    """

    def __init__(
        self,
        rules: reactivex.Observable[LSystemRule],
        *,
        max_length: int | None = None,
    ) -> None:
        self._rules = rules
        self._max_length = max_length

    def _build(self, rule: LSystemRule) -> Figure | None:
        try:
            return build_figure(rule, max_length=self._max_length)
        except ExpansionLimitError as error:
            logger.error("Rejected rule '%s': %s", rule.name, error)
            return None

    def observable(self) -> reactivex.Observable[Figure]:
        return self._rules.pipe(
            ops.distinct_until_changed(),
            ops.map(self._build),
            ops.filter(lambda figure: figure is not None),
            ops.share(),
        )
