# tests/test_imports.py
"""
Smoke test: ensure every Python module under `treecanvas/` imports successfully.

Implementation notes:
- We discover .py files with pathlib, then convert file paths to `treecanvas.*` module names.
- `treecanvas.__main__` is skipped: importing it would start the app.
- We run pygame in headless mode to avoid display/audio requirements in CI.
"""

from __future__ import annotations

import importlib
import os
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
PKG = ROOT / "treecanvas"
SKIP = {"treecanvas.__main__"}


def _discover_modules() -> list[str]:
    """Fully-qualified names like 'treecanvas.ui.controls', package first."""
    modules: set[str] = set()
    for py in PKG.rglob("*.py"):
        if "__pycache__" in py.parts:
            continue
        parts = list(py.relative_to(ROOT).with_suffix("").parts)
        if parts[-1] == "__init__":
            parts = parts[:-1]
        modules.add(".".join(parts))
    return ["treecanvas", *sorted(modules - SKIP - {"treecanvas"})]


def test_import_all_modules_headless() -> None:
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

    failures: list[tuple[str, Exception]] = []
    for mod_name in _discover_modules():
        try:
            importlib.import_module(mod_name)
        except Exception as e:  # we want full visibility on any import failure
            failures.append((mod_name, e))

    if failures:
        msgs = "\n".join(f"{m}: {type(e).__name__}({e})" for m, e in failures)
        raise AssertionError(f"Import failures:\n{msgs}")


def test_package_exports() -> None:
    import treecanvas
    from treecanvas.core import Camera, ViewportConfig, ViewportState

    assert treecanvas.__version__
    assert Camera.__module__ == "treecanvas.core.camera"
    assert ViewportConfig.__module__ == ViewportState.__module__ == "treecanvas.core.viewport"
