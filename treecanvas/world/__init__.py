# treecanvas/world/__init__.py
