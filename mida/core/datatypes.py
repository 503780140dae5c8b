"""Datatype recognizers and extractors.

A datatype is a pure (recognizer, extractor) pair: the recognizer decides
whether a raw text value has the datatype's shape, the extractor turns that
text into a semantic Python value. Neither has side effects.

Security notes:
- Inputs are attacker-controlled strings from untrusted documents.
- `is_valid` never raises: a recognizer that raises TypeError or ValueError
  counts as a rejection. Extractors raise ValueError on invalid text.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_BOOLEAN_WORDS = {"true": True, "false": False}


@dataclass(frozen=True, slots=True)
class DataType:
    """A named semantic datatype.

    Identity is the name: two DataType objects with the same name are the
    same tag.
    """

    name: str
    recognizer: Callable[[str], bool] = field(compare=False, repr=False)
    extractor: Callable[[str], Any] = field(compare=False, repr=False)
    formatter: Callable[[Any], str] = field(default=str, compare=False, repr=False)

    def is_valid(self, text: str) -> bool:
        if not isinstance(text, str):
            return False
        try:
            return bool(self.recognizer(text))
        except (TypeError, ValueError):
            return False

    def extract(self, text: str) -> Any:
        if not self.is_valid(text):
            raise ValueError(f"{text!r} is not a valid {self.name}")
        return self.extractor(text)

    def canonical(self, text: str) -> str:
        """Extract and render the value in its canonical string form."""
        return self.formatter(self.extract(text))


def _is_integer(text: str) -> bool:
    s = text.strip()
    if _INTEGER_RE.fullmatch(s) is None:
        return False
    # int() refuses digit strings past sys.get_int_max_str_digits()
    int(s)
    return True


def _is_number(text: str) -> bool:
    s = text.strip()
    if _NUMBER_RE.fullmatch(s) is None:
        return False
    return math.isfinite(float(s))


def _extract_boolean(text: str) -> bool:
    return _BOOLEAN_WORDS[text.strip().lower()]


def _parse_iso8601(text: str) -> date:
    s = text.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    if "T" not in s and " " not in s and len(s) <= 10:
        return date.fromisoformat(s)
    return datetime.fromisoformat(s)


def _is_iso8601(text: str) -> bool:
    _parse_iso8601(text)
    return True


def _is_url(text: str) -> bool:
    s = text.strip()
    if not s or any(c.isspace() for c in s):
        return False
    parts = urlsplit(s)
    return bool(parts.scheme) and bool(parts.netloc)


def _extract_url(text: str) -> str:
    parts = urlsplit(text.strip())
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, parts.fragment)
    )


Text = DataType("Text", recognizer=lambda text: True, extractor=lambda text: text)
Number = DataType("Number", recognizer=_is_number, extractor=lambda text: float(text.strip()), formatter=repr)
Float = DataType("Float", recognizer=_is_number, extractor=lambda text: float(text.strip()), formatter=repr)
Integer = DataType("Integer", recognizer=_is_integer, extractor=lambda text: int(text.strip()))
Boolean = DataType(
    "Boolean",
    recognizer=lambda text: text.strip().lower() in _BOOLEAN_WORDS,
    extractor=_extract_boolean,
    formatter=lambda value: "true" if value else "false",
)
ISO8601Date = DataType(
    "ISO8601Date",
    recognizer=_is_iso8601,
    extractor=_parse_iso8601,
    formatter=lambda value: value.isoformat(),
)
URL = DataType("URL", recognizer=_is_url, extractor=_extract_url)


DATATYPES: Mapping[str, DataType] = {
    dt.name: dt for dt in (Text, Number, Float, Integer, Boolean, ISO8601Date, URL)
}


def get_datatype(name: str) -> Optional[DataType]:
    """Look up a built-in datatype by name (case-sensitive)."""
    return DATATYPES.get(name)


def is_valid(tag: DataType, text: str) -> bool:
    """Return whether `text` has the shape of datatype `tag`."""
    return tag.is_valid(text)


def extract(tag: DataType, text: str) -> Any:
    """Extract the semantic value of `text` as datatype `tag`.

    Callers must have checked `is_valid` first; invalid text raises ValueError.
    """
    return tag.extract(text)
