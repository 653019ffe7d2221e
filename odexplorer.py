#!/usr/bin/env python3
"""
ODE Explorer - homogeneous first-order equations

Main entry point for the explorer. This file is a thin wrapper that
delegates all functionality to the odexplorer_pkg package.

Usage:
    python odexplorer.py                                  # Check the example equation
    python odexplorer.py "(y^2 + xy)/x^2" --trajectory 1 1
    python odexplorer.py --help                           # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for the ODE explorer.

    Delegates to the odexplorer_pkg.cli module, which handles argument
    parsing, classification, integration and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from odexplorer_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import odexplorer_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
