import math
from pathlib import Path
from typing import Annotated

import typer

from lsystem3d.cli.commands._rules import resolve_rule_or_exit
from lsystem3d.errors import LSystemError
from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.export import FrameExporter
from lsystem3d.rendering.renderer import LineRenderer
from lsystem3d.runtime.figure import build_figure, render_figure
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def render_command(
    source: Annotated[str, typer.Argument(help="Preset name or JSON rule file")],
    output: Annotated[Path, typer.Option("--output", "-o")] = Path("lsystem.png"),
    width: int = typer.Option(DEFAULT_WIDTH, "--width", min=1),
    height: int = typer.Option(DEFAULT_HEIGHT, "--height", min=1),
    yaw: float = typer.Option(0.0, "--yaw", help="Camera yaw in degrees"),
    pitch: float = typer.Option(-17.0, "--pitch", help="Camera pitch in degrees"),
    distance: float = typer.Option(10.0, "--distance"),
    fit: bool = typer.Option(
        True, "--fit/--no-fit", help="Frame the whole figure, ignoring --distance"
    ),
) -> None:
    rule, _ = resolve_rule_or_exit(source)
    try:
        figure = build_figure(rule)
        renderer = LineRenderer(width, height)
    except LSystemError as error:
        logger.error("Could not build '%s': %s", rule.name, error)
        raise typer.Exit(code=1) from error

    camera = OrbitCamera(
        width / height,
        yaw=math.radians(yaw),
        pitch=math.radians(pitch),
        distance=distance,
    )
    if fit and figure.bounds is not None:
        camera.fit_bounds(figure.bounds)

    stats = render_figure(renderer, figure, camera)
    image = FrameExporter().export(renderer.get_buffer(), width, height)
    image.save(output)
    logger.info(
        "Wrote %s (%d drawn, %d culled segments)", output, stats.drawn, stats.culled
    )
    typer.echo(str(output))
