from __future__ import annotations

from pathlib import Path

import typer

from lsystem3d.lsystem.loader import resolve_rule
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)


def resolve_rule_or_exit(source: str) -> tuple[LSystemRule, Path | None]:
    """Resolve a preset name or rule file, exiting with status 1 on failure."""

    try:
        return resolve_rule(source)
    except OSError as error:
        logger.error("Could not read rule file '%s': %s", source, error)
        raise typer.Exit(code=1) from error
    except ValueError as error:
        logger.error("Invalid rule '%s': %s", source, error)
        raise typer.Exit(code=1) from error
