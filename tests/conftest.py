# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable (so `import treecanvas...` works without an install)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup; must happen before pygame opens a display
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    import pygame
    pygame.init()
    # a tiny hidden surface so font and surface paths succeed
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture
def camera():
    from treecanvas.core.camera import Camera
    return Camera(800, 600)
