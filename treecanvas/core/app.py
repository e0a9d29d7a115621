# treecanvas/core/app.py
"""
Window host and frame loop for the tree canvas.

Per frame, in this order:
  1) drain pygame events (chrome first, then the input router -> camera)
  2) camera.advance()
  3) camera.current_transform(), read once
  4) draw world content through that transform, then chrome on top
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import pygame

from treecanvas.core.camera import Camera
from treecanvas.core.viewport import ViewportConfig
from treecanvas.ui.controls import ControlBar
from treecanvas.ui.debug_overlay import FpsOverlay
from treecanvas.ui.input_handler import InputRouter
from treecanvas.ui.top_bar import TopBar
from treecanvas.utils import settings
from treecanvas.utils.camera_types import ViewTransform
from treecanvas.world.placeholder import BouncingMarker, PlaceholderGraph, generate_placeholder_nodes

log = logging.getLogger(__name__)


def create_window(width: int, height: int, title: str, flags: int = pygame.RESIZABLE) -> Tuple[pygame.Surface, pygame.time.Clock]:
    pygame.init()
    surface = pygame.display.set_mode((width, height), flags)
    pygame.display.set_caption(title)
    return surface, pygame.time.Clock()


def canvas_rect_for(width: int, height: int) -> pygame.Rect:
    """Canvas area below the top bar; collapses to zero height on tiny windows."""
    return pygame.Rect(0, settings.TOP_BAR_HEIGHT, width, max(0, height - settings.TOP_BAR_HEIGHT))


class TreeCanvasApp:
    """Owns the window, the camera and the chrome; runs the frame loop."""

    def __init__(
        self,
        width: int = settings.SCREEN_WIDTH,
        height: int = settings.SCREEN_HEIGHT,
        *,
        graph: Optional[PlaceholderGraph] = None,
        fps: int = settings.FPS,
    ) -> None:
        self.screen, self.clock = create_window(width, height, settings.WINDOW_TITLE)
        self.fps = int(fps)
        pygame.key.set_repeat(settings.KEY_REPEAT_DELAY_MS, settings.KEY_REPEAT_INTERVAL_MS)

        self.canvas_rect = canvas_rect_for(width, height)
        self.camera = Camera(self.canvas_rect.width, self.canvas_rect.height, ViewportConfig.from_settings())
        self.input_router = InputRouter(self.camera, self.canvas_rect)

        self.top_bar = TopBar(width)
        self._over_controls = False
        self.controls = ControlBar(self.canvas_rect, on_hover_change=self._on_controls_hover)
        self.fps_overlay = FpsOverlay()

        self.graph = graph if graph is not None else generate_placeholder_nodes()
        self._node_colors = [_hue_color(h) for h in self.graph.hues]
        self._edges = self.graph.edges()
        self.marker = BouncingMarker(_marker_bounds(self.canvas_rect))

        self.frame_count = 0
        self._running = False
        self._warned_non_finite = False
        log.info("Canvas ready: %dx%d window, %d placeholder nodes", width, height, len(self.graph))

    # ------------------------------------------------------------------ #
    # Window / chrome state
    # ------------------------------------------------------------------ #

    def resize(self, width: int, height: int) -> None:
        self.screen = pygame.display.get_surface() or self.screen
        self.canvas_rect = canvas_rect_for(width, height)
        self.top_bar.resize(width)
        self.controls.layout(self.canvas_rect)
        self.input_router.canvas_rect = pygame.Rect(self.canvas_rect)
        self.camera.resize(self.canvas_rect.width, self.canvas_rect.height)
        self.marker.set_bounds(_marker_bounds(self.canvas_rect))

    def _on_controls_hover(self, over: bool) -> None:
        self._over_controls = over

    def _update_chrome_hover(self, pos: Tuple[int, int]) -> None:
        self.controls.handle_mouse_move(pos)
        over = self._over_controls or self.top_bar.contains(pos)
        if over != self.input_router.pointer_over_ui:
            self.input_router.set_pointer_over_ui(over)

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def run_command(self, action: str) -> None:
        """Execute a chrome/keyboard command by name."""
        cam = self.camera
        nudge = settings.NUDGE_SPEED
        if action == "toggle_fps":
            self.controls.set_show_fps(self.fps_overlay.toggle())
        elif action == "zoom_in":
            cam.zoom_in_center()
        elif action == "zoom_out":
            cam.zoom_out_center()
        elif action == "zoom_in_step":
            cam.zoom_in()
        elif action == "zoom_out_step":
            cam.zoom_out()
        elif action == "reset_view":
            cam.reset()
        # Pan velocity moves content, so looking left pushes it right.
        elif action == "nudge_left":
            cam.nudge(nudge, 0.0)
        elif action == "nudge_right":
            cam.nudge(-nudge, 0.0)
        elif action == "nudge_up":
            cam.nudge(0.0, nudge)
        elif action == "nudge_down":
            cam.nudge(0.0, -nudge)
        elif action == "quit":
            self._running = False
        else:
            log.warning("Unknown command %r", action)

    # ------------------------------------------------------------------ #
    # Event handling
    # ------------------------------------------------------------------ #

    def handle_event(self, ev: pygame.event.Event) -> None:
        if ev.type == pygame.QUIT:
            self._running = False
            return

        if ev.type == pygame.VIDEORESIZE:
            self.resize(ev.w, ev.h)
            return

        if ev.type == pygame.KEYDOWN:
            action = self.input_router.key_action(ev)
            if action:
                self.run_command(action)
            return

        if ev.type == pygame.MOUSEMOTION:
            self._update_chrome_hover(ev.pos)

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == pygame.BUTTON_LEFT:
            action = self.controls.handle_mouse_down(ev.pos)
            if action:
                self.run_command(action)
                return

        self.input_router.handle_event(ev)

    # ------------------------------------------------------------------ #
    # Frame
    # ------------------------------------------------------------------ #

    def frame(self) -> ViewTransform:
        """Advance one frame and draw it. Returns the transform that was rendered."""
        self.fps_overlay.update()
        self.marker.update()
        self.camera.advance()
        transform = self.camera.current_transform()
        self.render(transform)
        self.frame_count += 1
        return transform

    def render(self, transform: ViewTransform) -> None:
        self.screen.fill(settings.BG_COLOR)
        area = self.canvas_rect.clip(self.screen.get_rect())
        if area.width > 0 and area.height > 0:
            canvas = self.screen.subsurface(area)
            self.draw_world(canvas, transform)
            self.fps_overlay.draw(canvas)
        self.controls.draw(self.screen)
        self.top_bar.draw(self.screen, self.camera.zoom_percentage())
        pygame.display.flip()

    def project(self, transform: ViewTransform, points: np.ndarray) -> np.ndarray:
        """World -> canvas for an (N, 2) array: uniform scale, then translate about the center."""
        offset = np.array((
            self.canvas_rect.width / 2 + transform.pan_x,
            self.canvas_rect.height / 2 + transform.pan_y,
        ))
        return points * transform.zoom + offset

    def draw_world(self, canvas: pygame.Surface, transform: ViewTransform) -> None:
        if not all(np.isfinite(transform)):
            if not self._warned_non_finite:
                log.warning("Non-finite view transform %s; world drawing skipped", transform)
                self._warned_non_finite = True
            return
        self._warned_non_finite = False

        zoom = transform.zoom
        node_r = max(1.0, settings.NODE_RADIUS * zoom)
        w, h = canvas.get_size()

        pts = self.project(transform, self.graph.positions)
        visible = (
            (pts[:, 0] >= -node_r) & (pts[:, 0] <= w + node_r)
            & (pts[:, 1] >= -node_r) & (pts[:, 1] <= h + node_r)
        )
        screen_pts = pts.tolist()

        for parent, child in self._edges.tolist():
            if visible[parent] or visible[child]:
                pygame.draw.line(canvas, settings.EDGE_COLOR, screen_pts[parent], screen_pts[child])

        for i in np.flatnonzero(visible).tolist():
            pygame.draw.circle(canvas, self._node_colors[i], screen_pts[i], node_r)
            if node_r >= 3:
                pygame.draw.circle(canvas, settings.NODE_OUTLINE_COLOR, screen_pts[i], node_r, width=1)

        mx, my = self.project(transform, np.array([[self.marker.position.x, self.marker.position.y]]))[0]
        pygame.draw.circle(canvas, self.marker.color(), (mx, my), max(1.0, self.marker.radius * zoom))

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #

    def run(self, max_frames: Optional[int] = None) -> int:
        """Main loop. `max_frames` bounds the run for smoke tests."""
        self._running = True
        while self._running:
            self.clock.tick(self.fps)
            for ev in pygame.event.get():
                self.handle_event(ev)
            if not self._running:
                break
            self.frame()
            if max_frames is not None and self.frame_count >= max_frames:
                break
        log.info("Frame loop stopped after %d frames", self.frame_count)
        return 0


def _marker_bounds(canvas_rect: pygame.Rect) -> Tuple[float, float, float, float]:
    half_w = canvas_rect.width / 2
    half_h = canvas_rect.height / 2
    return (-half_w, -half_h, half_w, half_h)


def _hue_color(hue: float) -> pygame.Color:
    c = pygame.Color(0, 0, 0)
    c.hsva = (float(hue) % 360.0, 70, 90, 100)
    return c
