"""Allow ``python -m lightai``."""
import sys

from .cli import main

sys.exit(main())
