"""Allow `python -m numberones`."""

import sys

from numberones.cli import main

sys.exit(main())
