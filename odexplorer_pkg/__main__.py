"""Main entry point for running odexplorer_pkg as a module.

This allows running the explorer with:
    python -m odexplorer_pkg
    python -m odexplorer_pkg "(y^2 + xy)/x^2" --trajectory 1 1

This is equivalent to running:
    python odexplorer.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
