from __future__ import annotations

import time

import pygame
from reactivex.abc import DisposableBase

from lsystem3d.rendering.camera import OrbitCamera
from lsystem3d.rendering.export import blit_buffer
from lsystem3d.rendering.renderer import LineRenderer, RenderStats
from lsystem3d.runtime.figure import Figure, render_figure
from lsystem3d.runtime.frame_log import FrameTimingLog
from lsystem3d.runtime.provider import FigureProvider
from lsystem3d.runtime.session import (ANGLE_STEP, STEP_LENGTH_STEP,
                                       RuleSession)
from lsystem3d.utilities.env import Configuration
from lsystem3d.utilities.logging import get_logger

logger = get_logger(__name__)

LEFT_MOUSE_BUTTON = 1


class Viewer:
    """Interactive window: feeds input to the camera and session, blits frames."""

    def __init__(
        self,
        renderer: LineRenderer,
        camera: OrbitCamera,
        session: RuleSession,
        provider: FigureProvider,
    ) -> None:
        self.renderer = renderer
        self.camera = camera
        self.session = session
        self._provider = provider
        self._figure: Figure | None = None
        self._subscription: DisposableBase | None = None
        self._fit_on_load = Configuration.viewer_fit_on_load()

    @property
    def figure(self) -> Figure | None:
        return self._figure

    def start(self) -> None:
        if self._subscription is None:
            self._subscription = self._provider.observable().subscribe(
                on_next=self._on_figure
            )

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None

    def _on_figure(self, figure: Figure) -> None:
        self._figure = figure
        if pygame.display.get_init():
            pygame.display.set_caption(f"L-System: {figure.rule.name}")
        if self._fit_on_load and figure.bounds is not None:
            self.camera.fit_bounds(figure.bounds)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply one input event; returns ``False`` when the viewer should close."""

        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_MOUSE_BUTTON:
            self.camera.start_rotate(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_MOUSE_BUTTON:
            self.camera.stop_rotate()
        elif event.type == pygame.MOUSEMOTION:
            self.camera.update_rotate(event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            # Wheel up moves the camera closer.
            self.camera.zoom(-event.y)
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            return self._handle_key(event.key)
        return True

    def _handle_key(self, key: int) -> bool:
        match key:
            case pygame.K_ESCAPE:
                return False
            case pygame.K_r:
                self.session.reload()
            case pygame.K_TAB:
                self.session.cycle_preset()
            case pygame.K_d:
                self.session.toggle_coloring()
            case pygame.K_LEFT:
                self.session.adjust(angle=-ANGLE_STEP)
            case pygame.K_RIGHT:
                self.session.adjust(angle=ANGLE_STEP)
            case pygame.K_UP:
                self.session.adjust(step_length=STEP_LENGTH_STEP)
            case pygame.K_DOWN:
                self.session.adjust(step_length=-STEP_LENGTH_STEP)
            case pygame.K_PAGEUP:
                self.session.adjust(iterations=1)
            case pygame.K_PAGEDOWN:
                self.session.adjust(iterations=-1)
        return True

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        self.renderer.resize(width, height)
        self.camera.set_aspect(width / height)

    def render_frame(self) -> RenderStats:
        return render_figure(self.renderer, self._figure, self.camera)

    def run(self) -> None:
        pygame.init()
        try:
            screen = pygame.display.set_mode(
                (self.renderer.width, self.renderer.height), pygame.RESIZABLE
            )
            clock = pygame.time.Clock()
            fps = Configuration.viewer_fps()
            self.start()
            timings = FrameTimingLog(logger, Configuration.frame_log_interval())
            running = True
            while running:
                for event in pygame.event.get():
                    running = self.handle_event(event) and running
                if screen.get_size() != (self.renderer.width, self.renderer.height):
                    screen = pygame.display.get_surface()
                    self.resize(*screen.get_size())

                started = time.perf_counter()
                stats = self.render_frame()
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                blit_buffer(screen, self.renderer.get_buffer())
                pygame.display.flip()

                timings.record(stats, elapsed_ms)
                clock.tick(fps)
        finally:
            self.stop()
            pygame.quit()
