# treecanvas/ui/__init__.py
