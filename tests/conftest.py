from collections.abc import Iterator

import pygame
import pytest
from hypothesis import HealthCheck, settings

from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.renderer import LineRenderer

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("default")


@pytest.fixture(autouse=True)
def dummy_sdl_video_driver(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    yield


@pytest.fixture()
def init_pygame() -> Iterator[None]:
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture()
def renderer() -> LineRenderer:
    return LineRenderer(64, 48)


@pytest.fixture()
def front_camera() -> OrbitCamera:
    """Camera on +X looking at the origin with no pitch."""

    return OrbitCamera(64 / 48, yaw=0.0, pitch=0.0, distance=10.0)
