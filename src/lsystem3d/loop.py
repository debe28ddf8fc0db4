import os

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import typer

from lsystem3d.cli.commands.expand import expand_command
from lsystem3d.cli.commands.presets import presets_command
from lsystem3d.cli.commands.render import render_command
from lsystem3d.cli.commands.view import view_command

app = typer.Typer()

app.command(name="render")(render_command)
app.command(name="view")(view_command)
app.command(name="expand")(expand_command)
app.command(name="presets")(presets_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
