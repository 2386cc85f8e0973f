"""Allow ``python -m carfuel``."""

import sys

from carfuel.cli import main

sys.exit(main())
