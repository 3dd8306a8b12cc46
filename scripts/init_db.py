#!/usr/bin/env python3
"""
Create the customers / licenses tables in DATABASE_URL if they are missing.
Run from the project root: python -m scripts.init_db
"""
import os
import sys

# project root on PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from promptfoundry.db.session import engine, init_db


def main():
    init_db()
    print(f"Tables ready on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
