from typing import Annotated, Optional

import typer

from lsystem3d.cli.commands._rules import resolve_rule_or_exit
from lsystem3d.errors import LSystemError
from lsystem3d.lsystem.rewriter import expand
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)


def expand_command(
    source: Annotated[str, typer.Argument(help="Preset name or JSON rule file")],
    iterations: Annotated[
        Optional[int], typer.Option("--iterations", help="Override the iteration count")
    ] = None,
    show: bool = typer.Option(
        False, "--show", help="Print the expanded string, not just its length"
    ),
) -> None:
    rule, _ = resolve_rule_or_exit(source)
    try:
        if iterations is not None:
            rule = rule.with_overrides(iterations=iterations)
        symbols = expand(rule)
    except (LSystemError, ValueError) as error:
        logger.error("Expansion failed: %s", error)
        raise typer.Exit(code=1) from error

    typer.echo(f"{rule.name}: {len(symbols)} symbols after {rule.iterations} iterations")
    if show:
        typer.echo(symbols)
