# main.py
"""
Main entry point for the tree canvas.
"""
from treecanvas.core.safe_main import main

if __name__ == '__main__':
    raise SystemExit(main())
