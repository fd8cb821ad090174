"""Allow ``python -m src``."""

from src.cli.main import main

raise SystemExit(main())
