from bootshell import cli

raise SystemExit(cli.main())
