# treecanvas/core/viewport.py
"""
Viewport state and its transitions.

`ViewportState` is an immutable value. Every operation here is a pure function
that takes the current state (plus inputs) and returns the next state, so the
whole camera can be exercised without a window.

Transform convention (all coordinates in canvas pixels):

    screen = world * zoom + center + pan
    world  = (screen - center - pan) / zoom

Input mutates the *target* fields; `advance()` blends the rendered fields
toward them once per frame and integrates momentum.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from treecanvas.utils import settings
from treecanvas.utils.camera_types import ViewTransform


@dataclass(frozen=True)
class ViewportConfig:
    """Camera tuning, fixed for the lifetime of a camera."""

    min_zoom: float = settings.CAMERA_MIN_ZOOM
    max_zoom: float = settings.CAMERA_MAX_ZOOM
    zoom_speed: float = settings.CAMERA_ZOOM_SPEED
    pan_speed: float = settings.CAMERA_PAN_SPEED
    friction: float = settings.CAMERA_FRICTION
    smoothing_factor: float = settings.CAMERA_SMOOTHING
    drag_dead_zone: float = settings.CAMERA_DRAG_DEAD_ZONE
    velocity_epsilon: float = settings.CAMERA_VELOCITY_EPSILON
    double_click_factor: float = settings.CAMERA_DOUBLE_CLICK_FACTOR
    center_step_factor: float = settings.CAMERA_CENTER_STEP_FACTOR
    step_factor: float = settings.CAMERA_STEP_FACTOR
    zoom_settle_epsilon: float = settings.CAMERA_ZOOM_SETTLE_EPSILON
    pan_settle_epsilon: float = settings.CAMERA_PAN_SETTLE_EPSILON

    def __post_init__(self) -> None:
        if not self.min_zoom > 0.0:
            raise ValueError(f"min_zoom must be > 0, got {self.min_zoom!r}")
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) exceeds max_zoom ({self.max_zoom})")
        if not 0.0 <= self.friction < 1.0:
            raise ValueError(f"friction must be in [0, 1), got {self.friction!r}")
        if not 0.0 < self.smoothing_factor <= 1.0:
            raise ValueError(f"smoothing_factor must be in (0, 1], got {self.smoothing_factor!r}")

    @classmethod
    def from_settings(cls) -> "ViewportConfig":
        """Read the current `settings` values (picks up runtime overrides)."""
        return cls(
            min_zoom=settings.CAMERA_MIN_ZOOM,
            max_zoom=settings.CAMERA_MAX_ZOOM,
            zoom_speed=settings.CAMERA_ZOOM_SPEED,
            pan_speed=settings.CAMERA_PAN_SPEED,
            friction=settings.CAMERA_FRICTION,
            smoothing_factor=settings.CAMERA_SMOOTHING,
            drag_dead_zone=settings.CAMERA_DRAG_DEAD_ZONE,
            velocity_epsilon=settings.CAMERA_VELOCITY_EPSILON,
            double_click_factor=settings.CAMERA_DOUBLE_CLICK_FACTOR,
            center_step_factor=settings.CAMERA_CENTER_STEP_FACTOR,
            step_factor=settings.CAMERA_STEP_FACTOR,
            zoom_settle_epsilon=settings.CAMERA_ZOOM_SETTLE_EPSILON,
            pan_settle_epsilon=settings.CAMERA_PAN_SETTLE_EPSILON,
        )

    def clamp_zoom(self, value: float) -> float:
        return min(max(value, self.min_zoom), self.max_zoom)


DEFAULT_CONFIG = ViewportConfig()


@dataclass(frozen=True)
class ViewportState:
    width: float
    height: float
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    target_zoom: float = 1.0
    target_pan_x: float = 0.0
    target_pan_y: float = 0.0
    is_dragging: bool = False
    last_pointer_x: float = 0.0
    last_pointer_y: float = 0.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.width * 0.5, self.height * 0.5

    @property
    def transform(self) -> ViewTransform:
        return ViewTransform(self.zoom, self.pan_x, self.pan_y)

    @property
    def at_rest(self) -> bool:
        """True once the rendered transform has reached its target and momentum is spent."""
        return (
            self.zoom == self.target_zoom
            and self.pan_x == self.target_pan_x
            and self.pan_y == self.target_pan_y
            and self.velocity_x == 0.0
            and self.velocity_y == 0.0
        )


def initial_state(width: float, height: float) -> ViewportState:
    """Identity transform on a `width` x `height` canvas."""
    for name, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"viewport {name} must be a finite, non-negative number, got {value!r}")
    return ViewportState(width=float(width), height=float(height))


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _zoom_toward(state: ViewportState, new_zoom: float, x: float, y: float) -> ViewportState:
    """
    Set target zoom while keeping the world point under (x, y) fixed.

    Uses the ratio actually applied, so the anchor holds even when the clamp
    cut the requested zoom short.
    """
    ratio = new_zoom / state.target_zoom
    cx, cy = state.center
    off_x = x - cx
    off_y = y - cy
    return replace(
        state,
        target_zoom=new_zoom,
        target_pan_x=state.target_pan_x * ratio - off_x * (ratio - 1.0),
        target_pan_y=state.target_pan_y * ratio - off_y * (ratio - 1.0),
    )


def _settle(current: float, target: float, factor: float, epsilon: float) -> float:
    """One low-pass step toward `target`; snaps once within `epsilon`."""
    nxt = current + (target - current) * factor
    if abs(target - nxt) <= epsilon:
        return target
    return nxt


# ---------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------

def resize(state: ViewportState, width: float, height: float) -> ViewportState:
    """Store new canvas dimensions. Pan is center-relative, so the transform stays valid."""
    return replace(state, width=float(width), height=float(height))


def zoom_at_point(
    state: ViewportState, delta_y: float, x: float, y: float, config: ViewportConfig = DEFAULT_CONFIG
) -> ViewportState:
    """
    Wheel zoom anchored at the pointer.

    `delta_y` uses the browser wheel convention: negative scrolls up and zooms in.
    """
    new_zoom = config.clamp_zoom(state.target_zoom * (1.0 - delta_y * config.zoom_speed))
    return _zoom_toward(state, new_zoom, x, y)


def begin_drag(state: ViewportState, x: float, y: float) -> ViewportState:
    return replace(
        state,
        is_dragging=True,
        last_pointer_x=x,
        last_pointer_y=y,
        velocity_x=0.0,
        velocity_y=0.0,
    )


def update_drag(
    state: ViewportState, x: float, y: float, config: ViewportConfig = DEFAULT_CONFIG
) -> ViewportState:
    """
    Pan by the pointer delta since the last update.

    Deltas under the dead zone on both axes are dropped, but the stored pointer
    always advances so small moves never accumulate into a jump.
    """
    if not state.is_dragging:
        return state

    dx = x - state.last_pointer_x
    dy = y - state.last_pointer_y
    if abs(dx) >= config.drag_dead_zone or abs(dy) >= config.drag_dead_zone:
        return replace(
            state,
            target_pan_x=state.target_pan_x + dx * config.pan_speed,
            target_pan_y=state.target_pan_y + dy * config.pan_speed,
            velocity_x=dx,
            velocity_y=dy,
            last_pointer_x=x,
            last_pointer_y=y,
        )
    return replace(state, last_pointer_x=x, last_pointer_y=y)


def end_drag(state: ViewportState) -> ViewportState:
    # Release never carries momentum.
    return replace(state, is_dragging=False, velocity_x=0.0, velocity_y=0.0)


def double_click_zoom(
    state: ViewportState, x: float, y: float, config: ViewportConfig = DEFAULT_CONFIG
) -> ViewportState:
    new_zoom = config.clamp_zoom(state.target_zoom * config.double_click_factor)
    return _zoom_toward(state, new_zoom, x, y)


def zoom_step(
    state: ViewportState, direction: int, around_center: bool, config: ViewportConfig = DEFAULT_CONFIG
) -> ViewportState:
    """
    Discrete zoom command: in for direction > 0, out for direction < 0.

    Centered commands use the larger factor and keep the world point at the
    canvas center in place; plain steps leave the target pan untouched.
    """
    if direction == 0:
        return state
    factor = config.center_step_factor if around_center else config.step_factor
    if direction > 0:
        new_zoom = config.clamp_zoom(state.target_zoom * factor)
    else:
        new_zoom = config.clamp_zoom(state.target_zoom / factor)

    if not around_center:
        return replace(state, target_zoom=new_zoom)

    world_cx = -state.target_pan_x / state.target_zoom
    world_cy = -state.target_pan_y / state.target_zoom
    return replace(
        state,
        target_zoom=new_zoom,
        target_pan_x=-world_cx * new_zoom,
        target_pan_y=-world_cy * new_zoom,
    )


def reset(state: ViewportState) -> ViewportState:
    """Target the identity transform; the visible transform animates there."""
    return replace(state, target_zoom=1.0, target_pan_x=0.0, target_pan_y=0.0)


def nudge(state: ViewportState, dx: float, dy: float) -> ViewportState:
    """Keyboard pan impulse: replaces the velocity on each non-zero axis."""
    if state.is_dragging:
        return state
    return replace(
        state,
        velocity_x=dx if dx else state.velocity_x,
        velocity_y=dy if dy else state.velocity_y,
    )


def advance(state: ViewportState, config: ViewportConfig = DEFAULT_CONFIG) -> ViewportState:
    """
    One frame step.

    The smoothing factor is applied per call, so visual speed follows the frame
    rate. Momentum feeds the target pan so it goes through the same low-pass as
    dragging does.
    """
    k = config.smoothing_factor
    zoom = _settle(state.zoom, state.target_zoom, k, config.zoom_settle_epsilon)
    pan_x = _settle(state.pan_x, state.target_pan_x, k, config.pan_settle_epsilon)
    pan_y = _settle(state.pan_y, state.target_pan_y, k, config.pan_settle_epsilon)

    target_pan_x = state.target_pan_x
    target_pan_y = state.target_pan_y
    vx = state.velocity_x
    vy = state.velocity_y
    if not state.is_dragging:
        eps = config.velocity_epsilon
        if abs(vx) > eps or abs(vy) > eps:
            target_pan_x += vx
            target_pan_y += vy
            vx *= config.friction
            vy *= config.friction
        else:
            vx = 0.0
            vy = 0.0

    return replace(
        state,
        zoom=zoom,
        pan_x=pan_x,
        pan_y=pan_y,
        target_pan_x=target_pan_x,
        target_pan_y=target_pan_y,
        velocity_x=vx,
        velocity_y=vy,
    )


# ---------------------------------------------------------------------
# Coordinate transforms (rendered transform, not the target)
# ---------------------------------------------------------------------

def screen_to_world(state: ViewportState, x: float, y: float) -> Tuple[float, float]:
    cx, cy = state.center
    return (x - cx - state.pan_x) / state.zoom, (y - cy - state.pan_y) / state.zoom


def world_to_screen(state: ViewportState, x: float, y: float) -> Tuple[float, float]:
    cx, cy = state.center
    return x * state.zoom + cx + state.pan_x, y * state.zoom + cy + state.pan_y
