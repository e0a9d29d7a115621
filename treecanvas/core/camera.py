# treecanvas/core/camera.py
"""
Viewport controller for the 2D canvas.

- Mouse-anchored wheel zoom, exact at the zoom limits
- Drag panning with a jitter dead zone
- Double-click and toolbar/keyboard zoom commands
- Exponential smoothing toward the target transform, with a settle snap
- Keyboard-driven momentum with friction and a hard stop

The camera holds a single `ViewportState` and replaces it on every command;
the maths lives in `treecanvas.core.viewport`.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from treecanvas.core import viewport
from treecanvas.core.viewport import DEFAULT_CONFIG, ViewportConfig, ViewportState
from treecanvas.utils.camera_types import ViewTransform

log = logging.getLogger(__name__)


class Camera:
    """Manages the canvas viewport, handling zoom & panning with smoothing."""

    __slots__ = ("config", "_state")

    def __init__(self, width: float, height: float, config: Optional[ViewportConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._state = viewport.initial_state(width, height)

    def __repr__(self) -> str:
        s = self._state
        return (
            f"Camera({s.width:g}x{s.height:g}, zoom={s.zoom:.3f}->{s.target_zoom:.3f}, "
            f"pan=({s.pan_x:.1f}, {s.pan_y:.1f})->({s.target_pan_x:.1f}, {s.target_pan_y:.1f}))"
        )

    # -------------------------
    # State access
    # -------------------------

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def width(self) -> float:
        return self._state.width

    @property
    def height(self) -> float:
        return self._state.height

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def is_dragging(self) -> bool:
        return self._state.is_dragging

    def current_transform(self) -> ViewTransform:
        """Snapshot of the rendered transform; no side effects."""
        return self._state.transform

    def zoom_percentage(self) -> int:
        return round(self._state.zoom * 100)

    # -------------------------
    # Commands
    # -------------------------

    def resize(self, width: float, height: float) -> None:
        """Update camera on canvas resize."""
        self._state = viewport.resize(self._state, width, height)
        log.debug("Viewport resized to %gx%g", width, height)

    def zoom_at_point(self, delta_y: float, x: float, y: float) -> None:
        """Wheel zoom keeping the world point under (x, y) fixed."""
        self._state = viewport.zoom_at_point(self._state, delta_y, x, y, self.config)

    def begin_drag(self, x: float, y: float) -> None:
        self._state = viewport.begin_drag(self._state, x, y)

    def update_drag(self, x: float, y: float) -> None:
        self._state = viewport.update_drag(self._state, x, y, self.config)

    def end_drag(self) -> None:
        self._state = viewport.end_drag(self._state)

    def double_click_zoom(self, x: float, y: float) -> None:
        self._state = viewport.double_click_zoom(self._state, x, y, self.config)
        log.debug("Double-click zoom at (%g, %g) -> %.3f", x, y, self._state.target_zoom)

    def zoom_step(self, direction: int, around_center: bool = False) -> None:
        self._state = viewport.zoom_step(self._state, direction, around_center, self.config)
        log.debug("Zoom step %+d (centered=%s) -> %.3f", direction, around_center, self._state.target_zoom)

    def zoom_in(self) -> None:
        self.zoom_step(+1)

    def zoom_out(self) -> None:
        self.zoom_step(-1)

    def zoom_in_center(self) -> None:
        self.zoom_step(+1, around_center=True)

    def zoom_out_center(self) -> None:
        self.zoom_step(-1, around_center=True)

    def reset(self) -> None:
        self._state = viewport.reset(self._state)
        log.debug("View reset requested")

    def nudge(self, dx: float, dy: float) -> None:
        """Impart pan momentum, e.g. from the arrow keys."""
        self._state = viewport.nudge(self._state, dx, dy)

    # -------------------------
    # Frame update
    # -------------------------

    def advance(self) -> None:
        """Call once per rendered frame, before reading the transform."""
        self._state = viewport.advance(self._state, self.config)

    # -------------------------
    # Coordinate transforms
    # -------------------------

    def screen_to_world(self, x: float, y: float) -> Tuple[float, float]:
        """Convert canvas coordinates to world coordinates (rendered transform)."""
        return viewport.screen_to_world(self._state, x, y)

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        """Convert world coordinates to canvas coordinates (rendered transform)."""
        return viewport.world_to_screen(self._state, x, y)

    # -------------------------
    # InputSink
    # -------------------------

    def on_wheel(self, delta_y: float, x: float, y: float) -> None:
        self.zoom_at_point(delta_y, x, y)

    def on_drag_start(self, x: float, y: float) -> None:
        self.begin_drag(x, y)

    def on_drag_move(self, x: float, y: float) -> None:
        self.update_drag(x, y)

    def on_drag_end(self) -> None:
        self.end_drag()

    def on_double_click(self, x: float, y: float) -> None:
        self.double_click_zoom(x, y)
