"""Allow running servicify with ``python -m servicify``."""

import sys

from .main import main

sys.exit(main())
