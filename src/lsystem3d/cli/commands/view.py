from typing import Annotated

import typer

from lsystem3d.cli.commands._rules import resolve_rule_or_exit
from lsystem3d.runtime.container import build_viewer_container
from lsystem3d.runtime.viewer import Viewer

DEFAULT_SOURCE = "plant"


def view_command(
    source: Annotated[
        str, typer.Argument(help="Preset name or JSON rule file")
    ] = DEFAULT_SOURCE,
) -> None:
    rule, path = resolve_rule_or_exit(source)
    resolver = build_viewer_container(rule, path)
    resolver.resolve(Viewer).run()
