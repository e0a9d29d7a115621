# treecanvas/core/safe_main.py
from __future__ import annotations

import argparse
import logging
import os
import time
import traceback
from pathlib import Path
from typing import Optional, Sequence

from treecanvas.utils import settings
from treecanvas.utils.logging_setup import configure_logging, get_logger


def configure_environment(headless: Optional[bool] = None) -> None:
    """Robust SDL/Pygame defaults for Linux/CI/headless. Must run before pygame opens a display."""
    ci = os.getenv("CI", "").lower() == "true"
    no_display = not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY") or os.name == "nt")
    if headless is None:
        headless = ci or no_display
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    os.environ.setdefault("SDL_HINT_RENDER_SCALE_QUALITY", "1")
    if headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="treecanvas", description="Pannable, zoomable tree canvas.")
    p.add_argument("--width", type=int, default=settings.SCREEN_WIDTH, help="window width in pixels")
    p.add_argument("--height", type=int, default=settings.SCREEN_HEIGHT, help="window height in pixels")
    p.add_argument("--nodes", type=int, default=settings.PLACEHOLDER_NODE_COUNT, help="placeholder node count")
    p.add_argument("--seed", type=int, default=settings.PLACEHOLDER_SEED, help="placeholder layout seed")
    p.add_argument("--frames", type=int, default=None, help="exit after N frames (smoke runs)")
    p.add_argument("--headless", action="store_true", help="use SDL dummy video/audio drivers")
    p.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    p.add_argument("--no-log-file", action="store_true", help="log to stderr only")
    return p


def _write_crash_report(log_dir: Path) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    path = log_dir / f"crash_{stamp}.txt"
    path.write_text("Unexpected crash.\n\n" + traceback.format_exc(), encoding="utf-8")
    return path


def run_app(args: argparse.Namespace) -> int:
    """
    Safe entrypoint runner:
      - Configures env for Linux/headless.
      - Initializes logging.
      - Catches exceptions and writes a crash log.
    """
    configure_environment(True if args.headless else None)
    configure_logging(getattr(logging, args.log_level), log_to_file=not args.no_log_file)
    log = get_logger("safe_main")

    if args.width <= 0 or args.height <= 0:
        log.error("Window size must be positive, got %dx%d", args.width, args.height)
        return 2

    try:
        import pygame
        from treecanvas.core.app import TreeCanvasApp
        from treecanvas.world.placeholder import generate_placeholder_nodes
    except ImportError as e:
        log.exception("Failed to import the canvas: %s", e)
        return 2

    try:
        graph = generate_placeholder_nodes(args.nodes, args.seed)
        app = TreeCanvasApp(args.width, args.height, graph=graph)
        return app.run(max_frames=args.frames)
    except Exception as e:
        log.exception("Unhandled exception in frame loop: %s", e)
        path = _write_crash_report(Path("logs"))
        log.error("Crash report written to %s", path)
        return 1
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_app(build_parser().parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
