# treecanvas/ui/controls.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import pygame

from treecanvas.utils import settings


@dataclass
class ControlButton:
    action: str
    label: str
    rect: pygame.Rect


class ControlBar:
    """
    Row of view buttons anchored to the canvas top-right.

    Reports hover enter/leave through `on_hover_change` so pointer input over
    the buttons is kept away from the camera.
    """

    def __init__(
        self,
        canvas_rect: pygame.Rect,
        *,
        on_hover_change: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self.font = pygame.font.SysFont("Arial", settings.CONTROL_FONT_SIZE)
        self.on_hover_change = on_hover_change
        self.show_fps = False
        self.hovered: Optional[ControlButton] = None
        self.buttons: List[ControlButton] = [
            ControlButton("toggle_fps", self._fps_label(), pygame.Rect(0, 0, 0, 0)),
            ControlButton("zoom_in", "+", pygame.Rect(0, 0, 0, 0)),
            ControlButton("zoom_out", "-", pygame.Rect(0, 0, 0, 0)),
            ControlButton("reset_view", "Reset", pygame.Rect(0, 0, 0, 0)),
        ]
        self.layout(canvas_rect)

    def _fps_label(self) -> str:
        return f"FPS {'ON' if self.show_fps else 'OFF'}"

    def set_show_fps(self, value: bool) -> None:
        self.show_fps = bool(value)
        self.buttons[0].label = self._fps_label()

    def layout(self, canvas_rect: pygame.Rect) -> None:
        """Position buttons right-to-left from the canvas top-right corner."""
        x = canvas_rect.right - settings.CONTROL_MARGIN
        y = canvas_rect.top + settings.CONTROL_MARGIN
        for button in reversed(self.buttons):
            labels = ("FPS ON", "FPS OFF") if button.action == "toggle_fps" else (button.label,)
            widest = max(self.font.size(label)[0] for label in labels)
            w = max(settings.CONTROL_BUTTON_MIN_WIDTH, widest + settings.CONTROL_BUTTON_PADDING * 2)
            x -= w
            button.rect = pygame.Rect(x, y, w, settings.CONTROL_BUTTON_HEIGHT)
            x -= settings.CONTROL_BUTTON_SPACING

    def hit_test(self, pos: Tuple[int, int]) -> Optional[ControlButton]:
        for button in self.buttons:
            if button.rect.collidepoint(pos):
                return button
        return None

    def handle_mouse_move(self, pos: Tuple[int, int]) -> None:
        hovered = self.hit_test(pos)
        was_over = self.hovered is not None
        self.hovered = hovered
        if self.on_hover_change is not None and was_over != (hovered is not None):
            self.on_hover_change(hovered is not None)

    def handle_mouse_down(self, pos: Tuple[int, int]) -> Optional[str]:
        """Returns the clicked button's action or None."""
        button = self.hit_test(pos)
        return button.action if button else None

    def draw(self, surface: pygame.Surface) -> None:
        for button in self.buttons:
            bg = settings.CONTROL_HOVER_BG_COLOR if button is self.hovered else settings.CONTROL_BG_COLOR
            pygame.draw.rect(surface, bg, button.rect, border_radius=6)
            pygame.draw.rect(surface, settings.CONTROL_BORDER_COLOR, button.rect, width=1, border_radius=6)
            text = self.font.render(button.label, True, settings.CONTROL_TEXT_COLOR)
            surface.blit(text, text.get_rect(center=button.rect.center))
