"""
Entry point for running odtquill as a module.

Usage:
    python -m odtquill import document.json --output document.html
    python -m odtquill export document.html --output document.odt
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
