"""
Lightweight viewport type hints.

- `InputSink` is the narrow interface the input router talks to; the camera
  satisfies it without knowing anything about pygame events.
- `CameraLike` is what the host needs each frame.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol, Tuple, runtime_checkable


class ViewTransform(NamedTuple):
    """Read-only snapshot of the rendered world-to-screen transform."""

    zoom: float
    pan_x: float
    pan_y: float


@runtime_checkable
class InputSink(Protocol):
    """Receiver for canvas pointer input, in canvas-relative pixels."""

    def on_wheel(self, delta_y: float, x: float, y: float) -> None: ...
    def on_drag_start(self, x: float, y: float) -> None: ...
    def on_drag_move(self, x: float, y: float) -> None: ...
    def on_drag_end(self) -> None: ...
    def on_double_click(self, x: float, y: float) -> None: ...


class CameraLike(InputSink, Protocol):
    """
    Minimal requirements for objects the host drives as a camera.
    """

    width: float
    height: float

    def resize(self, width: float, height: float) -> None: ...
    def advance(self) -> None: ...
    def current_transform(self) -> ViewTransform: ...
    def screen_to_world(self, x: float, y: float) -> Tuple[float, float]: ...
    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]: ...


__all__ = [
    "CameraLike",
    "InputSink",
    "ViewTransform",
]
