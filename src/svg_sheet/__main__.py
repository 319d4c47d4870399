"""Allow running the builder with ``python -m svg_sheet``."""

import sys

from svg_sheet.cli import main

sys.exit(main())
