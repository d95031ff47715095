from bigint.cli import main

raise SystemExit(main())
