import typer

from lsystem3d.lsystem.presets import PRESETS, preset_names


def presets_command() -> None:
    for name in preset_names():
        preset = PRESETS[name]
        typer.echo(f"{name:<20} {preset['name']}: {preset.get('description', '')}")
