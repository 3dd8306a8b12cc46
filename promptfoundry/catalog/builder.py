"""
Catalog builder: overlays × templates × channels -> library.json.

Deterministic and offline. Output is merged with the previous snapshot
(fresh items win), deduplicated by case-insensitive (title, prompt) and
sorted, so a second run over unchanged inputs rewrites the same bytes.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from promptfoundry.catalog.data import CTA_LINK, DEFAULT_BUY_URL, MANUAL_FIELDS, OVERLAYS, STARTER, TEMPLATES
from promptfoundry.catalog.models import CatalogItem, identity_key
from promptfoundry.catalog.templating import (
    apply_placeholders,
    goal_to_category,
    outcome_card,
    price_for_goal,
    uid,
)
from promptfoundry.catalog.validator import CatalogFormatError, dump_snapshot

logger = logging.getLogger(__name__)

DEFAULT_RATING = 5


def seed_items(buy_url: str = DEFAULT_BUY_URL) -> list[dict[str, Any]]:
    return [
        CatalogItem(
            id=uid(x["title"] + x["category"]),
            category=x["category"],
            title=x["title"],
            tags=list(x["tags"]),
            rating=DEFAULT_RATING,
            price=x["price"],
            buy_url=buy_url,
            prompt=x["prompt"],
        ).to_record()
        for x in STARTER
    ]


def template_vars(overlay: dict[str, Any], goal: str, channel: str) -> dict[str, Any]:
    variables: dict[str, Any] = dict(overlay)
    variables["channel"] = channel
    variables["cta_link"] = CTA_LINK
    variables["word_limit"] = 110 if goal == "leadgen" else 120
    for name in MANUAL_FIELDS:
        variables[name] = "{{" + name + "}}"
    return variables


def generate_items(buy_url: str = DEFAULT_BUY_URL) -> list[dict[str, Any]]:
    generated = []
    for overlay in OVERLAYS:
        for tpl in TEMPLATES:
            goal = tpl["goal"]
            for channel in tpl.get("channels") or ["email"]:
                variables = template_vars(overlay, goal, channel)
                body = apply_placeholders(tpl["template"], variables) + outcome_card(variables, goal)
                title = f"{tpl['title']} — {overlay['key']} — {channel.upper()}"
                generated.append(
                    CatalogItem(
                        id=uid(title + body),
                        category=goal_to_category(goal),
                        title=title,
                        tags=["Generated", overlay["key"], goal],
                        rating=DEFAULT_RATING,
                        price=price_for_goal(goal),
                        buy_url=buy_url,
                        prompt=body,
                    ).to_record()
                )
    return generated


def merge_items(*batches: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Concatenate batches keeping the first record per identity."""
    seen: set[tuple[str, str]] = set()
    merged = []
    for batch in batches:
        for item in batch:
            key = identity_key(item.get("title"), item.get("prompt"))
            if key in seen:
                continue
            seen.add(key)
            merged.append(item)
    return merged


def _rating(item: dict[str, Any]) -> float:
    value = item.get("rating")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def sort_items(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Rating descending, then title."""
    return sorted(
        items,
        key=lambda it: (-_rating(it), str(it.get("title") or "").casefold(), str(it.get("title") or "")),
    )


def build_catalog(previous: list[dict[str, Any]] | None = None, buy_url: str = DEFAULT_BUY_URL) -> list[dict[str, Any]]:
    merged = merge_items(seed_items(buy_url), generate_items(buy_url), previous or [])
    return sort_items(merged)


def load_snapshot(path: Path) -> list[dict[str, Any]]:
    """Previous snapshot, or [] when there is none yet."""
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CatalogFormatError(f"{path}: cannot parse ({e})") from e
    if not isinstance(data, list):
        raise CatalogFormatError(f"{path}: expected a JSON array")
    return [item for item in data if isinstance(item, dict)]


def run_build(path: Path, buy_url: str = DEFAULT_BUY_URL) -> list[dict[str, Any]]:
    items = build_catalog(load_snapshot(path), buy_url=buy_url)
    path.write_text(dump_snapshot(items), encoding="utf-8")
    logger.info("catalog_built", extra={"path": str(path), "count": len(items)})
    return items
