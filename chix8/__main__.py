"""Entry point for ``python -m chix8``."""

import sys

from chix8.cli import main

sys.exit(main())
