"""Tests for the catalog builder: generation, merge with previous snapshot, determinism."""
import json

import pytest

from promptfoundry.catalog.builder import build_catalog, generate_items, load_snapshot, run_build, seed_items
from promptfoundry.catalog.cli import build_main
from promptfoundry.catalog.templating import apply_placeholders, goal_to_category, price_for_goal, uid
from promptfoundry.catalog.validator import CatalogFormatError


def _by_title(items, title):
    return next(it for it in items if it["title"] == title)


class TestTemplating:
    def test_placeholder_whitespace_trimmed(self):
        assert apply_placeholders("Hi {{ name }}!", {"name": "Ada"}) == "Hi Ada!"

    def test_unknown_placeholder_kept(self):
        assert apply_placeholders("Pay {{ pay_url }}", {}) == "Pay {{pay_url}}"

    def test_uid_is_stable(self):
        assert uid("abc") == "900150983c"
        assert len(uid("anything")) == 10

    def test_goal_mapping(self):
        assert goal_to_category("chargebacks") == "Chargebacks"
        assert goal_to_category("landing") == "Landing"
        assert price_for_goal("chargebacks") == 99
        assert price_for_goal("pricing") == 59


class TestGenerate:
    def test_counts(self):
        assert len(generate_items()) == 35
        assert len(seed_items()) == 4
        assert len(build_catalog()) == 39

    def test_generated_item_shape(self):
        item = _by_title(generate_items(), "Local Services — 75-Word Lead Gen — Home Services — DM")
        assert item["category"] == "LeadGen"
        assert item["tags"] == ["Generated", "Home Services", "leadgen"]
        assert item["rating"] == 5
        assert item["price"] == 49
        assert item["buyUrl"].startswith("https://buy.stripe.com/")
        assert "Write a dm outreach" in item["prompt"]
        assert "Naples, FL" in item["prompt"]
        assert "Keep under 110 words." in item["prompt"]
        assert "OUTCOME CARD" in item["prompt"]
        assert item["id"] == uid(item["title"] + item["prompt"])

    def test_manual_fields_stay_placeholders(self):
        prompts = "\n".join(it["prompt"] for it in generate_items())
        assert "{{sent_date}}" in prompts
        assert "{{pay_url}}" in prompts

    def test_buy_url_override(self):
        items = build_catalog(buy_url="https://buy.example.com/x")
        assert {it["buyUrl"] for it in items} == {"https://buy.example.com/x"}

    def test_sorted_by_rating_then_title(self):
        previous = [{"id": "x", "category": "Ops", "title": "AAA low rated", "tags": [], "rating": 1,
                     "price": 0, "buyUrl": "", "prompt": "p"}]
        items = build_catalog(previous)
        assert items[-1]["title"] == "AAA low rated"
        top = [it["title"] for it in items if it["rating"] == 5]
        assert top == sorted(top, key=lambda t: (t.casefold(), t))


class TestMerge:
    def test_previous_items_preserved(self):
        hand_written = {"id": "h1", "category": "Ops", "title": "Hand written", "tags": ["x"],
                        "rating": 4.5, "price": 10, "buyUrl": "", "prompt": "Do the thing."}
        items = build_catalog([hand_written])
        assert len(items) == 40
        assert _by_title(items, "Hand written") == hand_written

    def test_case_different_duplicate_collapses_to_generated(self):
        fresh = generate_items()[0]
        stale = dict(fresh, title=fresh["title"].upper(), prompt=fresh["prompt"].lower(), price=1)
        items = build_catalog([stale])
        assert len(items) == 39
        assert fresh in items
        assert stale not in items


class TestRunBuild:
    def test_fixed_point(self, tmp_path):
        path = tmp_path / "library.json"
        run_build(path)
        first = path.read_bytes()
        run_build(path)
        assert path.read_bytes() == first
        assert len(json.loads(first)) == 39

    def test_missing_snapshot_is_empty(self, tmp_path):
        assert load_snapshot(tmp_path / "nope.json") == []

    def test_bad_snapshot_raises(self, tmp_path):
        path = tmp_path / "library.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogFormatError):
            run_build(path)

    def test_cli(self, tmp_path):
        path = tmp_path / "library.json"
        assert build_main([str(path), "--buy-url", "https://buy.example.com/y"]) == 0
        items = json.loads(path.read_text(encoding="utf-8"))
        assert items[0]["buyUrl"] == "https://buy.example.com/y"

    def test_unreadable_snapshot_raises(self, tmp_path):
        path = tmp_path / "library.json"
        path.mkdir()
        with pytest.raises(CatalogFormatError):
            load_snapshot(path)
        assert build_main([str(path)]) == 1

    def test_cli_bad_snapshot(self, tmp_path):
        path = tmp_path / "library.json"
        path.write_text('{"not": "a list"}', encoding="utf-8")
        assert build_main([str(path)]) == 1
