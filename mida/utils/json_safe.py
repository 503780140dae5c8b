from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

from mida.core.canonical import to_plain
from mida.core.item import Item
from mida.core.itemscope import Itemscope
from mida.core.vocabulary import Vocabulary


def to_jsonable(obj: Any) -> Any:
    """
    Convert mida and common Python objects to JSON-serializable equivalents.

    Security considerations:
    - does NOT execute or import anything dynamically.

    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, Item):
        return to_plain(obj)
    if isinstance(obj, Itemscope):
        return obj.to_mapping()
    if isinstance(obj, Vocabulary):
        return obj.describe()

    # datetime/date -> ISO 8601
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, Path):
        return str(obj)

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    # iterables (including set/frozenset/tuple/list)
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)
