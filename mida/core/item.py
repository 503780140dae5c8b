from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

ValidatedValue = Union[str, "Item"]


@dataclass(frozen=True, eq=False)
class Item:
    """
    Immutable, validated microdata item.

    Security invariants
    - Immutable: properties is a read-only mapping of tuples
    - Every property maps to at least one value
    - Nested values are validated Items, never raw item-scopes

    Equality is structural: vocabulary, type, id and the property map
    (key order ignored, value order significant).
    """

    vocabulary: str
    type: Optional[str]
    id: Optional[str]
    properties: Mapping[str, Tuple[ValidatedValue, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(values) for name, values in self.properties.items()}
        object.__setattr__(self, "properties", MappingProxyType(frozen))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return (
            self.vocabulary == other.vocabulary
            and self.type == other.type
            and self.id == other.id
            and dict(self.properties) == dict(other.properties)
        )

    def __hash__(self) -> int:
        return hash((self.vocabulary, self.type, self.id, frozenset(self.properties.items())))

    def to_h(self) -> Dict[str, Any]:
        """Plain nested mapping of this item (see mida.core.canonical.to_plain)."""
        from .canonical import to_plain

        return to_plain(self)

    @property
    def digest(self) -> str:
        from .canonical import item_digest

        return item_digest(self)

    def __str__(self) -> str:
        from .canonical import to_display_string

        return to_display_string(self)
