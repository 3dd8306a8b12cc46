"""
Catalog validator: normalize library.json in place.

Every record is coerced to the CatalogItem field set (defaults for missing or
mistyped fields); records without title or prompt are dropped, duplicates by
case-insensitive (title, prompt) collapse onto the first one, and the result
is sorted by (category, title). Only unparsable input is fatal.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from promptfoundry.catalog.models import CatalogItem, identity_key
from promptfoundry.catalog.templating import uid

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Uncategorized"


class CatalogFormatError(Exception):
    """The snapshot is not a JSON array."""


@dataclass
class ValidationReport:
    total: int = 0
    kept: int = 0
    dropped_invalid: int = 0
    dropped_duplicates: int = 0


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _number(value: Any) -> int | float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
        if math.isfinite(value) and value.is_integer():
            return int(value)
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    return 0


def _tags(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    tags = []
    for tag in value:
        if isinstance(tag, bool) or not isinstance(tag, (str, int, float)):
            continue
        tag = str(tag).strip()
        if tag:
            tags.append(tag)
    return tags


def coerce_record(raw: Any) -> dict[str, Any] | None:
    """CatalogItem record from a loose dict; None when title or prompt is missing."""
    if not isinstance(raw, dict):
        return None
    title = _text(raw.get("title"))
    prompt = _text(raw.get("prompt"))
    if not title or not prompt:
        return None
    return CatalogItem(
        id=_text(raw.get("id")) or uid(title + prompt),
        category=_text(raw.get("category")) or DEFAULT_CATEGORY,
        title=title,
        tags=_tags(raw.get("tags")),
        rating=_number(raw.get("rating")),
        price=_number(raw.get("price")),
        buy_url=_text(raw.get("buyUrl")),
        prompt=prompt,
    ).to_record()


def validate_items(records: list[Any]) -> tuple[list[dict[str, Any]], ValidationReport]:
    report = ValidationReport(total=len(records))
    seen: set[tuple[str, str]] = set()
    kept = []
    for raw in records:
        item = coerce_record(raw)
        if item is None:
            report.dropped_invalid += 1
            continue
        key = identity_key(item["title"], item["prompt"])
        if key in seen:
            report.dropped_duplicates += 1
            continue
        seen.add(key)
        kept.append(item)
    kept.sort(key=lambda it: (it["category"].casefold(), it["title"].casefold(), it["category"], it["title"]))
    report.kept = len(kept)
    return kept, report


def dump_snapshot(items: list[dict[str, Any]]) -> str:
    return json.dumps(items, indent=2, ensure_ascii=False) + "\n"


def read_records(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CatalogFormatError(f"{path}: cannot parse ({e})") from e
    if not isinstance(data, list):
        raise CatalogFormatError(f"{path}: expected a JSON array")
    return data


def run_validate(path: Path) -> ValidationReport:
    items, report = validate_items(read_records(path))
    path.write_text(dump_snapshot(items), encoding="utf-8")
    logger.info(
        "catalog_validated",
        extra={
            "path": str(path),
            "count": report.total,
            "kept": report.kept,
            "dropped_invalid": report.dropped_invalid,
            "dropped_duplicates": report.dropped_duplicates,
        },
    )
    return report
