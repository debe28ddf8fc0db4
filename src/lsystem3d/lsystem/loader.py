from __future__ import annotations

import json
from pathlib import Path

from lsystem3d.lsystem.presets import PRESETS, get_preset
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)


def load_rule(path: Path) -> LSystemRule:
    """Read and validate a JSON rule file."""

    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    rule = LSystemRule.from_mapping(data)
    logger.info("Loaded rule '%s' from %s", rule.name, path)
    return rule


def resolve_rule(source: str) -> tuple[LSystemRule, Path | None]:
    """Resolve a preset name or a rule file path.

    Returns the rule and the file it came from (``None`` for presets) so the
    caller can reload it later.
    """

    if source in PRESETS:
        return get_preset(source), None
    path = Path(source).expanduser()
    return load_rule(path), path
