from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .config import DEFAULT_MAX_DEPTH
from .errors import MalformedInput, RecursionLimitExceeded

log = logging.getLogger("mida.core")

RawValue = Union[str, "Itemscope"]


def _freeze_properties(properties: Any) -> Mapping[str, Tuple[RawValue, ...]]:
    if properties is None:
        properties = {}
    if not isinstance(properties, Mapping):
        raise MalformedInput("properties must be a mapping", path="$.properties")
    frozen: Dict[str, Tuple[RawValue, ...]] = {}
    for name, values in properties.items():
        if not isinstance(name, str):
            raise MalformedInput("property names must be strings", path="$.properties")
        prop_path = f"$.properties.{name}"
        if isinstance(values, (str, Itemscope)):
            values = (values,)
        elif not isinstance(values, (list, tuple)):
            raise MalformedInput("property values must be a list", path=prop_path)
        for i, value in enumerate(values):
            if not isinstance(value, (str, Itemscope)):
                raise MalformedInput(
                    f"property value must be a string or item-scope, got {type(value).__name__}",
                    path=f"{prop_path}[{i}]",
                )
        frozen[name] = tuple(values)
    return MappingProxyType(frozen)


@dataclass(frozen=True, eq=False)
class Itemscope:
    """A raw, unvalidated item-scope as produced by a document parser.

    Immutable: property value lists are copied into tuples behind a read-only
    mapping, so caller-held lists cannot change the scope after construction.

    Security invariants
    - Treated as untrusted input; validation decides what survives.
    - Shape is checked on construction: type/id are str or None, values are
      strings or nested Itemscopes. Violations raise MalformedInput.
    - Equality is identity-based; compare validated Items instead.
    """

    type: Optional[str] = None
    id: Optional[str] = None
    properties: Mapping[str, Tuple[RawValue, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type is not None and not isinstance(self.type, str):
            raise MalformedInput("type must be a string or null", path="$.type")
        if self.id is not None and not isinstance(self.id, str):
            raise MalformedInput("id must be a string or null", path="$.id")
        object.__setattr__(self, "properties", _freeze_properties(self.properties))

    @classmethod
    def from_mapping(cls, data: Any, *, path: str = "$", max_depth: Optional[int] = None) -> "Itemscope":
        """Build an Itemscope tree from its JSON mapping form.

        Expected shape::

            {"type": str | null, "id": str | null,
             "properties": {name: [str | {nested item-scope}, ...]}}

        Fails fast with MalformedInput on anything else. Nesting deeper than
        `max_depth` (default 32; the root is depth 0) raises
        RecursionLimitExceeded before the nested mapping is read.
        """

        limit = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
        return cls._from_mapping(data, path=path, depth=0, max_depth=limit)

    @classmethod
    def _from_mapping(cls, data: Any, *, path: str, depth: int, max_depth: int) -> "Itemscope":
        if depth > max_depth:
            log.warning("item_depth_exceeded", extra={"depth": depth, "max_depth": max_depth})
            raise RecursionLimitExceeded(depth, max_depth)

        if not isinstance(data, Mapping):
            raise MalformedInput("item-scope must be a mapping", path=path)

        unknown = set(data) - {"type", "id", "properties"}
        if unknown:
            raise MalformedInput(f"unexpected item-scope fields: {sorted(map(str, unknown))}", path=path)

        item_type = data.get("type")
        if item_type is not None and not isinstance(item_type, str):
            raise MalformedInput("type must be a string or null", path=f"{path}.type")

        item_id = data.get("id")
        if item_id is not None and not isinstance(item_id, str):
            raise MalformedInput("id must be a string or null", path=f"{path}.id")

        raw_props = data.get("properties")
        if raw_props is None:
            raw_props = {}
        if not isinstance(raw_props, Mapping):
            raise MalformedInput("properties must be a mapping", path=f"{path}.properties")

        properties: Dict[str, Tuple[RawValue, ...]] = {}
        for name, values in raw_props.items():
            prop_path = f"{path}.properties.{name}"
            if not isinstance(name, str):
                raise MalformedInput("property names must be strings", path=f"{path}.properties")
            if not isinstance(values, list):
                raise MalformedInput("property values must be a list", path=prop_path)
            converted = []
            for i, value in enumerate(values):
                value_path = f"{prop_path}[{i}]"
                if isinstance(value, str):
                    converted.append(value)
                elif isinstance(value, Mapping):
                    converted.append(
                        cls._from_mapping(value, path=value_path, depth=depth + 1, max_depth=max_depth)
                    )
                else:
                    raise MalformedInput(
                        f"property value must be a string or item-scope, got {type(value).__name__}",
                        path=value_path,
                    )
            properties[name] = tuple(converted)

        return cls(type=item_type, id=item_id, properties=properties)

    def to_mapping(self) -> Dict[str, Any]:
        """Return the JSON mapping form (inverse of from_mapping)."""
        return {
            "type": self.type,
            "id": self.id,
            "properties": {
                name: [v.to_mapping() if isinstance(v, Itemscope) else v for v in values]
                for name, values in self.properties.items()
            },
        }
