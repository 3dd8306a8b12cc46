"""
Placeholder substitution, content ids and the outcome card trailer.
"""
from __future__ import annotations

import hashlib
import re
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"\{\{(.*?)\}\}")

# Vars that are never listed on the outcome card.
HIDDEN_VARS = frozenset({"brand_voice"})

_CATEGORY_BY_GOAL = {
    "leadgen": "LeadGen",
    "invoice": "ClientReach",
    "chargebacks": "Chargebacks",
    "pricing": "Ops",
}

_PRICE_BY_GOAL = {
    "chargebacks": 99,
    "invoice": 49,
    "leadgen": 49,
}


def uid(value: str) -> str:
    """Stable content id: first 10 hex chars of md5."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()[:10]


def apply_placeholders(template: str, variables: Mapping[str, Any]) -> str:
    """Replace {{ name }} with variables[name]; unknown names stay as {{name}}."""

    def _sub(match: re.Match) -> str:
        name = match.group(1).strip()
        value = variables.get(name)
        return "{{" + name + "}}" if value is None else str(value)

    return PLACEHOLDER_RE.sub(_sub, template)


def goal_to_category(goal: str) -> str:
    return _CATEGORY_BY_GOAL.get(goal, "Landing")


def price_for_goal(goal: str) -> int:
    return _PRICE_BY_GOAL.get(goal, 59)


def outcome_card(variables: Mapping[str, Any], goal: str) -> str:
    if goal == "leadgen":
        label = "Leads/Appointments"
        attach = "Attach: proof/case + calendar link"
        send_to = f"Send to: prospects in {variables.get('city')}"
        expected = "Expected: reply or booking"
    elif goal == "invoice":
        label = "Invoice Collections"
        attach = "Attach: invoice PDF, payment link, prior thread"
        send_to = "Send to: accounting/contact"
        expected = "Expected: payment or call confirm"
    elif goal == "chargebacks":
        label = "Win Chargebacks"
        attach = "Attach: receipts, IP/device, AVS/CVV, 3-DS, delivery, comms"
        send_to = "Send to: processor/issuer"
        expected = "Expected: reversal"
    elif goal == "pricing":
        label = "Pricing/Margins"
        attach = "Attach: price CSV, cost basis"
        send_to = "Send to: stakeholder"
        expected = "Expected: approved copy/actions"
    else:
        label = "Landing Page Copy"
        attach = "Attach: relevant artifact(s)"
        send_to = "Send to: stakeholder"
        expected = "Expected: approved copy/actions"

    fill = " ".join("{{" + name + "}}" for name in variables if name not in HIDDEN_VARS)
    return (
        "\n\n---\n"
        "OUTCOME CARD\n"
        f"Use when: {label}\n"
        f"Fill: {fill}\n"
        f"{attach}\n"
        f"{send_to}\n"
        f"{expected}"
    )
