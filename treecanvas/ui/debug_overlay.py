# treecanvas/ui/debug_overlay.py
from __future__ import annotations

import time
from collections import deque
from typing import Deque, Optional, Tuple

import psutil
import pygame

from treecanvas.utils import settings


class FpsOverlay:
    """
    Opt-in frame statistics drawn over the canvas:
      - FPS (smoothed over the last N frames)
      - dt (ms)
      - process memory
    Toggle with `enabled`.
    """

    def __init__(self, *, font_name: str = "Consolas", font_size: int = settings.FPS_OVERLAY_FONT_SIZE,
                 samples: int = settings.FPS_OVERLAY_SAMPLES) -> None:
        self.enabled: bool = False
        self._font = pygame.font.SysFont(font_name, font_size)
        self._samples: Deque[float] = deque(maxlen=max(1, samples))
        self._last = time.perf_counter()
        self._process = psutil.Process()

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def update(self) -> None:
        now = time.perf_counter()
        self._samples.append(now - self._last)
        self._last = now

    def fps(self) -> float:
        if not self._samples:
            return 0.0
        avg = sum(self._samples) / len(self._samples)
        return 1.0 / avg if avg > 0 else 0.0

    def _proc_mem(self) -> Optional[str]:
        try:
            rss = self._process.memory_info().rss / (1024 * 1024)
        except psutil.Error:
            return None
        return f"{rss:.1f} MiB"

    def text(self) -> str:
        dt_ms = (self._samples[-1] * 1000.0) if self._samples else 0.0
        parts = [f"FPS: {self.fps():5.1f}", f"dt: {dt_ms:4.1f} ms"]
        mem = self._proc_mem()
        if mem:
            parts.append(f"mem: {mem}")
        return " | ".join(parts)

    def draw(self, surface: pygame.Surface, *, pos: Tuple[int, int] = settings.FPS_OVERLAY_POS) -> None:
        if not self.enabled:
            return
        txt = self._font.render(self.text(), True, (255, 255, 255))
        bg = pygame.Surface((txt.get_width() + 8, txt.get_height() + 6), pygame.SRCALPHA)
        bg.fill((0, 0, 0, 140))
        surface.blit(bg, pos)
        surface.blit(txt, (pos[0] + 4, pos[1] + 3))
