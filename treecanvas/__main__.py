from treecanvas.core.safe_main import main

raise SystemExit(main())
