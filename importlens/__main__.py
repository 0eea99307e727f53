"""Entry point for running importlens as a module."""

import sys

from importlens.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
