"""CLI entry point for textfold."""

from __future__ import annotations

import sys

from textfold.cli import main

if __name__ == "__main__":
    sys.exit(main())
