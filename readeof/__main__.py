"""Allow ``python -m readeof``."""

import sys

from .cli import main

sys.exit(main())
