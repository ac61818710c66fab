"""Allow ``python -m tokenguard``."""

import sys

from .main import main

sys.exit(main())
