from cmdtree.cli import main

raise SystemExit(main())
