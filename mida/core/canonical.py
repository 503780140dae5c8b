"""Canonical plain form of validated items.

The plain form is used for display, serialization and tests; validation never
reads it back.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from .item import Item


def _plain_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_plain_value(v) for v in value]
    if isinstance(value, Item):
        return to_plain(value)
    return value


def to_plain(item: Item) -> Dict[str, Any]:
    """Expand an Item into nested dicts/lists/strings.

    Shape: {"vocabulary", "type", "id", "properties": {name: [value, ...]}}
    """

    return {
        "vocabulary": item.vocabulary,
        "type": item.type,
        "id": item.id,
        "properties": {name: _plain_value(values) for name, values in item.properties.items()},
    }


def canonical_json(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def to_display_string(item: Item) -> str:
    """Deterministic string rendering (canonical JSON, sorted keys)."""
    return canonical_json(to_plain(item))


def item_digest(item: Item) -> str:
    """SHA-256 of the canonical JSON; equal items share a digest."""
    return hashlib.sha256(to_display_string(item).encode("utf-8")).hexdigest()
