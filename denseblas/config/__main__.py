from denseblas.config.probe import main

raise SystemExit(main())
