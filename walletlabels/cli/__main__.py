"""Allow ``python -m walletlabels.cli``."""

from .main import main

raise SystemExit(main())
