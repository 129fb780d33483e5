#!/usr/bin/env python3
"""
Upstream pins - check pinned build dependencies for new releases.

Usage:
    check_updates.py              # List pins with a newer upstream version
    check_updates.py --update     # Also update CHANGELOG.md and the Makefile pins
"""

import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from upstream_pins.cli import main  # noqa: E402

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
