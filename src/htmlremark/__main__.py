#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Run the converter with ``python -m htmlremark``; arguments are those of the ``htmlremark`` command."""

import sys

from htmlremark.cli import main

if __name__ == "__main__":
    sys.exit(main())
