# treecanvas/utils/__init__.py
"""Utilities package marker."""
__all__ = []
