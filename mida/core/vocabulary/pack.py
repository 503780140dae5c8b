from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..datatypes import get_datatype
from ..errors import VocabularyConfigurationError
from .registry import VocabularyRegistry
from .schema import ANY, Cardinality, PropertySpec, TypeTag, Vocabulary, define_vocabulary


def _parse_type(name: Any, where: str) -> TypeTag:
    if not isinstance(name, str) or not name:
        raise VocabularyConfigurationError(f"{where}: type names must be non-empty strings")
    if name.lower() == "any":
        return ANY
    datatype = get_datatype(name)
    if datatype is not None:
        return datatype
    return name


def _parse_spec(raw: Any, where: str) -> PropertySpec:
    if not isinstance(raw, Mapping):
        raise VocabularyConfigurationError(f"{where}: property spec must be an object")
    num_raw = str(raw.get("num", "many")).strip().lower()
    try:
        num = Cardinality(num_raw)
    except ValueError:
        raise VocabularyConfigurationError(f"{where}: invalid num: {num_raw}") from None
    types_raw = raw.get("types", ["Text"])
    if not isinstance(types_raw, list) or not types_raw:
        raise VocabularyConfigurationError(f"{where}: types must be a non-empty list")
    return PropertySpec(num=num, types=tuple(_parse_type(t, where) for t in types_raw))


def parse_vocabulary_pack(data: Any, *, registry: Optional[VocabularyRegistry] = None) -> List[Vocabulary]:
    """Build vocabularies from a decoded vocabulary pack.

    Supported schema (JSON)

    {"vocabularies": [
      {"id": "http://example.com/Book",
       "itemtype": "http://example\\.com/(Book|Novel)",
       "includes": ["http://example.com/Thing"],
       "properties": {"title": {"num": "one", "types": ["Text"]}},
       "fallback": {"num": "many", "types": ["any"]}}
    ]}

    `includes` may name vocabularies defined earlier in the same pack or
    already present in `registry`.

    Security notes:
    - Treat vocabulary packs as trusted configuration.
    - itemtype patterns are compiled as-is; do not load packs from untrusted sources.

    """

    if not isinstance(data, Mapping):
        raise VocabularyConfigurationError("vocabulary pack must be an object")
    entries = data.get("vocabularies")
    if not isinstance(entries, list):
        raise VocabularyConfigurationError("vocabulary pack missing vocabularies list")

    defined: Dict[str, Vocabulary] = {}
    out: List[Vocabulary] = []
    for i, entry in enumerate(entries):
        where = f"vocabularies[{i}]"
        if not isinstance(entry, Mapping):
            raise VocabularyConfigurationError(f"{where}: entry must be an object")
        vid = entry.get("id")
        if not isinstance(vid, str) or not vid:
            raise VocabularyConfigurationError(f"{where}: id must be a non-empty string")
        if vid in defined:
            raise VocabularyConfigurationError(f"{where}: duplicate id {vid}")

        itemtype = entry.get("itemtype")
        if itemtype is not None:
            if not isinstance(itemtype, str):
                raise VocabularyConfigurationError(f"{where}: itemtype must be a string")
            try:
                itemtype = re.compile(itemtype)
            except re.error as e:
                raise VocabularyConfigurationError(f"{where}: invalid itemtype pattern: {e}") from e

        parents: List[Vocabulary] = []
        for parent_id in entry.get("includes") or []:
            parent = defined.get(parent_id)
            if parent is None and registry is not None:
                parent = registry.try_get(parent_id)
            if parent is None:
                raise VocabularyConfigurationError(f"{where}: unknown included vocabulary {parent_id}")
            parents.append(parent)

        props_raw = entry.get("properties") or {}
        if not isinstance(props_raw, Mapping):
            raise VocabularyConfigurationError(f"{where}: properties must be an object")
        properties = {
            str(name): _parse_spec(spec, f"{where}.properties.{name}") for name, spec in props_raw.items()
        }

        fallback_raw = entry.get("fallback")
        fallback = _parse_spec(fallback_raw, f"{where}.fallback") if fallback_raw is not None else None

        vocabulary = define_vocabulary(
            vid,
            itemtype=itemtype,
            properties=properties,
            fallback=fallback,
            includes=parents,
        )
        defined[vid] = vocabulary
        out.append(vocabulary)
    return out


def load_vocabulary_pack(path: str, *, registry: Optional[VocabularyRegistry] = None) -> List[Vocabulary]:
    """Load vocabularies from a JSON vocabulary pack file."""

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise VocabularyConfigurationError(f"{p.name}: invalid JSON: {e}") from e
    return parse_vocabulary_pack(data, registry=registry)
