"""Allow ``python -m src.cli`` as a shortcut for ``python -m src.cli.festivals``."""

import sys

from src.cli.festivals import main

sys.exit(main())
