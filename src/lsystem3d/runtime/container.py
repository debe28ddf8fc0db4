from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from lagom import Container, Singleton

from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.renderer import LineRenderer
from lsystem3d.runtime.provider import FigureProvider
from lsystem3d.runtime.session import RuleSession
from lsystem3d.runtime.viewer import Viewer
from lsystem3d.utilities.env import Configuration
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

RuntimeContainer = Container


def _bind(
    container: RuntimeContainer,
    overrides: Mapping[type[Any], object] | None,
    key: type[Any],
    value: object,
) -> None:
    if overrides and key in overrides:
        container[key] = overrides[key]
        logger.debug("Applied Lagom override for %s.", key)
        return
    container[key] = value
    logger.debug("Registered Lagom provider for %s.", key)


def _build_renderer(_: RuntimeContainer) -> LineRenderer:
    return LineRenderer(Configuration.viewer_width(), Configuration.viewer_height())


def _build_camera(resolver: RuntimeContainer) -> OrbitCamera:
    renderer = resolver[LineRenderer]
    return OrbitCamera(renderer.width / renderer.height)


def _build_figure_provider(resolver: RuntimeContainer) -> FigureProvider:
    return FigureProvider(resolver[RuleSession].rules)


def _build_viewer(resolver: RuntimeContainer) -> Viewer:
    return Viewer(
        renderer=resolver[LineRenderer],
        camera=resolver[OrbitCamera],
        session=resolver[RuleSession],
        provider=resolver[FigureProvider],
    )


def build_viewer_container(
    rule: LSystemRule,
    path: Path | None = None,
    overrides: Mapping[type[Any], object] | None = None,
) -> RuntimeContainer:
    """Wire a viewer for ``rule``; ``overrides`` replace individual services."""

    container = RuntimeContainer()
    _bind(container, overrides, RuleSession, RuleSession(rule, path))
    _bind(container, overrides, LineRenderer, Singleton(_build_renderer))
    _bind(container, overrides, OrbitCamera, Singleton(_build_camera))
    _bind(container, overrides, FigureProvider, Singleton(_build_figure_provider))
    _bind(container, overrides, Viewer, Singleton(_build_viewer))
    logger.debug(
        "Configured viewer container with overrides=%s.",
        set(overrides.keys()) if overrides else set(),
    )
    return container
