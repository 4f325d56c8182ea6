"""
Entry point for running readmes as a module.

Usage:
    python -m readmes [root] [options]
"""

import sys

from readmes.cli import main

if __name__ == "__main__":
    sys.exit(main())
