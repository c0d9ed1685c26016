from ecgen.compiler.cli import main

raise SystemExit(main())
