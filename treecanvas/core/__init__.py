# treecanvas/core/__init__.py
from treecanvas.core.camera import Camera
from treecanvas.core.viewport import ViewportConfig, ViewportState

__all__ = ["Camera", "ViewportConfig", "ViewportState"]
