"""Allow ``python -m fingerscan``."""

from __future__ import annotations

import sys

from fingerscan.cli.main import main

sys.exit(main())
