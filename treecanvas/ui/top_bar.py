from __future__ import annotations

from typing import Tuple

import pygame

from treecanvas.utils import settings


class TopBar:
    """Fixed header: title on the left, zoom readout on the right."""

    def __init__(self, width: int, *, title: str = settings.WINDOW_TITLE) -> None:
        self.title = title
        self.rect = pygame.Rect(0, 0, width, settings.TOP_BAR_HEIGHT)
        self.title_font = pygame.font.SysFont("Arial", settings.TOP_BAR_TITLE_FONT_SIZE, bold=True)
        self.info_font = pygame.font.SysFont("Arial", settings.TOP_BAR_INFO_FONT_SIZE)

    def resize(self, width: int) -> None:
        self.rect.width = width

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def draw(self, surface: pygame.Surface, zoom_percentage: int) -> None:
        pygame.draw.rect(surface, settings.TOP_BAR_BG_COLOR, self.rect)
        pygame.draw.line(
            surface, settings.TOP_BAR_BORDER_COLOR,
            (self.rect.left, self.rect.bottom - 1), (self.rect.right, self.rect.bottom - 1),
        )

        title = self.title_font.render(self.title, True, settings.TOP_BAR_TITLE_COLOR)
        surface.blit(title, (16, (self.rect.height - title.get_height()) // 2))

        info = self.info_font.render(f"Zoom: {zoom_percentage}%", True, settings.TOP_BAR_MUTED_COLOR)
        surface.blit(info, (self.rect.right - info.get_width() - 16, (self.rect.height - info.get_height()) // 2))
