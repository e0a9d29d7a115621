# treecanvas/ui/input_handler.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

import pygame

from treecanvas.utils import settings
from treecanvas.utils.camera_types import InputSink

log = logging.getLogger(__name__)

__all__ = ["InputRouter", "build_key_actions"]


def build_key_actions(bindings: Dict[str, Iterable[str]]) -> Dict[int, str]:
    """Resolve {action: [key names]} into {pygame keycode: action}."""
    out: Dict[int, str] = {}
    for action, names in bindings.items():
        for name in names:
            try:
                out[pygame.key.key_code(name)] = action
            except ValueError:
                log.warning("Unrecognized key '%s' for action '%s'", name, action)
    return out


class InputRouter:
    """
    Translates pygame events into `InputSink` calls and keyboard commands.

    - Window coordinates are shifted into canvas space (`canvas_rect`).
    - While `pointer_over_ui` is set, wheel / press / motion / double-click are
      not forwarded. Release always is, so a drag can never get stuck.
    - pygame has no double-click event; two primary presses within
      DOUBLE_CLICK_MS and DOUBLE_CLICK_SLOP_PX count as one.
    """

    def __init__(
        self,
        sink: InputSink,
        canvas_rect: pygame.Rect,
        *,
        key_bindings: Optional[Dict[str, Iterable[str]]] = None,
        double_click_ms: int = settings.DOUBLE_CLICK_MS,
        double_click_slop: float = settings.DOUBLE_CLICK_SLOP_PX,
        wheel_delta: float = settings.WHEEL_DELTA_PER_NOTCH,
    ) -> None:
        self.sink = sink
        self.canvas_rect = pygame.Rect(canvas_rect)
        self.pointer_over_ui = False
        self.double_click_ms = int(double_click_ms)
        self.double_click_slop = float(double_click_slop)
        self.wheel_delta = float(wheel_delta)
        self._key_actions = build_key_actions(key_bindings if key_bindings is not None else settings.KEY_BINDINGS)
        self._last_press_ms: Optional[int] = None
        self._last_press_pos: Optional[Tuple[int, int]] = None

    # ---- chrome hover ------------------------------------------------------

    def set_pointer_over_ui(self, over: bool) -> None:
        """Hover enter/leave hook for UI chrome."""
        self.pointer_over_ui = bool(over)

    # ---- events ------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Forward pointer events to the sink. Returns True if the event was consumed."""
        if event.type == pygame.MOUSEBUTTONUP and event.button == pygame.BUTTON_LEFT:
            self.sink.on_drag_end()
            return True

        if event.type == pygame.MOUSEWHEEL:
            pos = getattr(event, "pos", None) or pygame.mouse.get_pos()
            if not self._accepts(pos) or not event.y:
                return False
            x, y = self._to_canvas(pos)
            self.sink.on_wheel(-event.y * self.wheel_delta, x, y)
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == pygame.BUTTON_LEFT:
            if not self._accepts(event.pos):
                return False
            x, y = self._to_canvas(event.pos)
            self.sink.on_drag_start(x, y)
            if self._is_double_click(event.pos):
                self.sink.on_double_click(x, y)
            return True

        if event.type == pygame.MOUSEMOTION:
            if self.pointer_over_ui:
                return False
            x, y = self._to_canvas(event.pos)
            self.sink.on_drag_move(x, y)
            return False

        return False

    def key_action(self, event: pygame.event.Event) -> Optional[str]:
        """Map a KEYDOWN event to a command name, or None."""
        if event.type != pygame.KEYDOWN:
            return None
        return self._key_actions.get(event.key)

    # ---- internals ---------------------------------------------------------

    def _accepts(self, pos: Tuple[int, int]) -> bool:
        return not self.pointer_over_ui and self.canvas_rect.collidepoint(pos)

    def _to_canvas(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        return float(pos[0] - self.canvas_rect.x), float(pos[1] - self.canvas_rect.y)

    def _is_double_click(self, pos: Tuple[int, int]) -> bool:
        now = pygame.time.get_ticks()
        last_ms, last_pos = self._last_press_ms, self._last_press_pos
        if (
            last_ms is not None
            and last_pos is not None
            and now - last_ms <= self.double_click_ms
            and abs(pos[0] - last_pos[0]) <= self.double_click_slop
            and abs(pos[1] - last_pos[1]) <= self.double_click_slop
        ):
            # A third quick press starts a new pair.
            self._last_press_ms = None
            self._last_press_pos = None
            return True
        self._last_press_ms = now
        self._last_press_pos = (pos[0], pos[1])
        return False
