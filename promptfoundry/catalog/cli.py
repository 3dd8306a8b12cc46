"""
Command-line entry points for the offline catalog tools.
Neither needs the service environment (Stripe, database); only a file path.
"""
import argparse
import logging
from pathlib import Path

from promptfoundry.catalog.builder import run_build
from promptfoundry.catalog.data import DEFAULT_BUY_URL
from promptfoundry.catalog.validator import CatalogFormatError, run_validate
from promptfoundry.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate library.json from overlays and templates.")
    parser.add_argument("path", nargs="?", default="library.json", help="snapshot to merge with and rewrite")
    parser.add_argument("--buy-url", default=DEFAULT_BUY_URL, help="purchase link stored on every item")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        run_build(Path(args.path), buy_url=args.buy_url)
    except CatalogFormatError as e:
        logger.error("catalog_build_failed", extra={"path": args.path, "error": str(e)})
        return 1
    return 0


def validate_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Normalize, dedupe and sort library.json in place.")
    parser.add_argument("path", nargs="?", default="library.json")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        run_validate(Path(args.path))
    except CatalogFormatError as e:
        logger.error("catalog_validation_failed", extra={"path": args.path, "error": str(e)})
        return 1
    return 0

