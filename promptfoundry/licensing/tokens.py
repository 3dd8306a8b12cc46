"""
License tokens: opaque bearer strings, pasted by hand, checked only against the store.
Format: XXXXXXXXXXXX-XXXXXXXX (upper-case hex).
"""
from __future__ import annotations

import secrets
from uuid import uuid4


def generate_license_token() -> str:
    head = uuid4().hex[:12].upper()
    tail = secrets.token_hex(4).upper()
    return f"{head}-{tail}"


def normalize_token(raw: str | None) -> str:
    """Trim whitespace around a pasted token. Case is kept: lookups are exact."""
    return (raw or "").strip()

