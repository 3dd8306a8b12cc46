#!/usr/bin/env python3
"""
Regenerate library.json from overlays and templates.
Run from the project root: python -m scripts.build_catalog [path] [--buy-url URL]
"""
import os
import sys

# project root on PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from promptfoundry.catalog.cli import build_main


if __name__ == "__main__":
    sys.exit(build_main())
