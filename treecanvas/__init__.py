# treecanvas/__init__.py
"""
Top-level package for the tree canvas.

Subpackages: `core` (viewport maths, camera, host loop), `ui` (chrome and
input routing), `utils` (settings, logging, shared types), `world`
(placeholder content).
"""
__all__ = ["core", "ui", "utils", "world"]
__version__ = "0.1.0"
