"""
Module entry point.

This allows the sync to be run as:
python -m inventory_sync
"""

import sys

from inventory_sync.main import main

if __name__ == "__main__":
    sys.exit(main())
