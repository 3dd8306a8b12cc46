#!/usr/bin/env python3
"""
Normalize library.json in place (schema defaults, dedupe, sort).
Run from the project root: python -m scripts.validate_catalog [path]
Exit code 1 when the file cannot be parsed.
"""
import os
import sys

# project root on PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from promptfoundry.catalog.cli import validate_main


if __name__ == "__main__":
    sys.exit(validate_main())
