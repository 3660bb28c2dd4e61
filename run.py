"""Project root entry point for launching the HTTP transport or a one-off check."""

from __future__ import annotations

import sys

from transcheck.cli import main


if __name__ == "__main__":
    sys.exit(main())
