"""Allow ``python -m expblur``."""

import sys

from .cli import main

sys.exit(main())
