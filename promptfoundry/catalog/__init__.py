"""
Offline catalog tooling: generates and normalizes the library.json the gate paywalls.
"""
from promptfoundry.catalog.builder import build_catalog, run_build
from promptfoundry.catalog.models import CatalogItem
from promptfoundry.catalog.validator import CatalogFormatError, ValidationReport, run_validate, validate_items

__all__ = [
    "CatalogFormatError",
    "CatalogItem",
    "ValidationReport",
    "build_catalog",
    "run_build",
    "run_validate",
    "validate_items",
]
