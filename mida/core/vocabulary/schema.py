from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..datatypes import DataType, Text


class Cardinality(str, Enum):
    """How many values a property may carry."""

    ONE = "one"
    MANY = "many"


class _AnyType:
    """Wildcard type tag: accepts any text or item."""

    _instance: Optional["_AnyType"] = None

    def __new__(cls) -> "_AnyType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"

    def __reduce__(self):
        return (_AnyType, ())


ANY = _AnyType()

# DataType -> datatype check; str -> vocabulary id; ANY -> wildcard
TypeTag = Union[DataType, str, _AnyType]


@dataclass(frozen=True, slots=True)
class PropertySpec:
    """Cardinality plus accepted types for one property.

    `types` is ordered: the first datatype whose recognizer accepts a text
    value wins.
    """

    num: Cardinality
    types: Tuple[TypeTag, ...]

    def accepts_count(self, count: int) -> bool:
        return self.num is Cardinality.MANY or (self.num is Cardinality.ONE and count == 1)

    def describe(self) -> Dict[str, Any]:
        return {"num": self.num.value, "types": [describe_type(t) for t in self.types]}


def describe_type(tag: TypeTag) -> str:
    if tag is ANY:
        return "any"
    if isinstance(tag, DataType):
        return tag.name
    return str(tag)


def has_one(*types: TypeTag) -> PropertySpec:
    """Spec for a property that must carry exactly one value (default type: Text)."""
    return PropertySpec(num=Cardinality.ONE, types=tuple(types) or (Text,))


def has_many(*types: TypeTag) -> PropertySpec:
    """Spec for a property that may carry any number of values (default type: Text)."""
    return PropertySpec(num=Cardinality.MANY, types=tuple(types) or (Text,))


@dataclass(frozen=True)
class Vocabulary:
    """Property schema for a family of item types.

    Property lookup is two-tier: an explicitly declared spec wins, otherwise
    the `fallback` spec (if any) applies. The fallback never shares a
    namespace with real property names.
    """

    vocabulary_id: str
    itemtype: re.Pattern[str]
    properties: Mapping[str, PropertySpec] = field(default_factory=dict)
    fallback: Optional[PropertySpec] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def matches(self, item_type: Optional[str]) -> bool:
        if item_type is None:
            return False
        return self.itemtype.fullmatch(item_type) is not None

    def spec_for(self, name: str) -> Optional[PropertySpec]:
        """Return the explicit spec for `name`, else the fallback, else None."""
        spec = self.properties.get(name)
        if spec is not None:
            return spec
        return self.fallback

    def describe(self) -> Dict[str, Any]:
        return {
            "vocabulary_id": self.vocabulary_id,
            "itemtype": self.itemtype.pattern,
            "properties": {name: spec.describe() for name, spec in sorted(self.properties.items())},
            "fallback": self.fallback.describe() if self.fallback is not None else None,
        }


def define_vocabulary(
    vocabulary_id: str,
    *,
    itemtype: Union[str, re.Pattern[str], None] = None,
    properties: Optional[Mapping[str, PropertySpec]] = None,
    fallback: Optional[PropertySpec] = None,
    includes: Iterable[Vocabulary] = (),
) -> Vocabulary:
    """Build a Vocabulary.

    - itemtype: regex that must fully match an item's type; defaults to the
      literal vocabulary_id
    - includes: vocabularies whose property specs (and fallback) are inherited;
      specs declared here override inherited ones
    """

    if itemtype is None:
        pattern = re.compile(re.escape(vocabulary_id))
    elif isinstance(itemtype, str):
        pattern = re.compile(itemtype)
    else:
        pattern = itemtype

    merged: Dict[str, PropertySpec] = {}
    inherited_fallback: Optional[PropertySpec] = None
    for parent in includes:
        merged.update(parent.properties)
        if parent.fallback is not None:
            inherited_fallback = parent.fallback
    merged.update(properties or {})

    return Vocabulary(
        vocabulary_id=vocabulary_id,
        itemtype=pattern,
        properties=merged,
        fallback=fallback if fallback is not None else inherited_fallback,
    )


GENERIC_VOCABULARY_ID = "mida:generic"

GENERIC_VOCABULARY = define_vocabulary(
    GENERIC_VOCABULARY_ID,
    itemtype=r"(?s).*",
    fallback=has_many(ANY),
)
