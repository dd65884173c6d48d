"""
Entry point for running hardsub as a module: python -m hardsub

This allows the package to be executed directly:
    python -m hardsub -path episode.mkv
    python -m hardsub --help
"""

import sys

from hardsub.cli import main

if __name__ == "__main__":
    sys.exit(main())
