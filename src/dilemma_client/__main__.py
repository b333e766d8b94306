"""Entry point for ``python -m dilemma_client``."""

import sys

from .cli import main

sys.exit(main())
