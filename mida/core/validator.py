from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from . import datatypes
from .config import ValidationConfig
from .datatypes import DataType
from .errors import CyclicItemscopeError, MalformedInput, RecursionLimitExceeded
from .item import Item, ValidatedValue
from .itemscope import Itemscope, RawValue
from .vocabulary import ANY, TypeTag, VocabularyRegistry, load_builtin_vocabularies

log = logging.getLogger("mida.core")


def default_registry() -> VocabularyRegistry:
    """Return a fresh registry holding the built-in vocabularies."""
    registry = VocabularyRegistry()
    load_builtin_vocabularies(registry)
    return registry


class ItemValidator:
    """Turns raw item-scopes into validated Items.

    Policy (best effort, fail closed by omission):
    - unknown item types resolve to the registry's default vocabulary
    - properties without an applicable spec, or with the wrong number of
      values, are dropped
    - values whose type is not accepted are dropped
    - properties left without values are omitted

    Only malformed input and excessive nesting raise.
    """

    def __init__(
        self,
        registry: Optional[VocabularyRegistry] = None,
        config: Optional[ValidationConfig] = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.config = config if config is not None else ValidationConfig()

    def validate(self, scope: Union[Itemscope, Mapping[str, Any]]) -> Item:
        """Validate one top-level item-scope (or its JSON mapping form)."""
        if isinstance(scope, Mapping):
            scope = Itemscope.from_mapping(scope, max_depth=self.config.max_depth)
        return self._validate_scope(scope, depth=0, active=frozenset(), path="$")

    def _validate_scope(self, scope: Any, *, depth: int, active: FrozenSet[int], path: str) -> Item:
        if not isinstance(scope, Itemscope):
            raise MalformedInput(f"expected an item-scope, got {type(scope).__name__}", path=path)
        if depth > self.config.max_depth:
            log.warning("item_depth_exceeded", extra={"depth": depth, "max_depth": self.config.max_depth})
            raise RecursionLimitExceeded(depth, self.config.max_depth)
        if id(scope) in active:
            log.warning("item_cycle_detected", extra={"depth": depth})
            raise CyclicItemscopeError(depth, self.config.max_depth)
        active = active | {id(scope)}

        vocabulary = self.registry.find(scope.type)
        properties = {}
        for name, raw_values in scope.properties.items():
            spec = vocabulary.spec_for(name)
            if spec is None or not spec.accepts_count(len(raw_values)):
                log.debug(
                    "property_dropped",
                    extra={
                        "property_name": name,
                        "vocabulary_id": vocabulary.vocabulary_id,
                        "value_count": len(raw_values),
                    },
                )
                continue
            values = self._validate_values(
                spec.types, raw_values, depth=depth, active=active, path=f"{path}.properties.{name}"
            )
            if values:
                properties[name] = values

        return Item(vocabulary=vocabulary.vocabulary_id, type=scope.type, id=scope.id, properties=properties)

    def _validate_values(
        self,
        types: Sequence[TypeTag],
        raw_values: Sequence[RawValue],
        *,
        depth: int,
        active: FrozenSet[int],
        path: str,
    ) -> Tuple[ValidatedValue, ...]:
        valid: List[ValidatedValue] = []
        for i, raw in enumerate(raw_values):
            value_path = f"{path}[{i}]"
            if isinstance(raw, Itemscope):
                candidate: ValidatedValue = self._validate_scope(raw, depth=depth + 1, active=active, path=value_path)
            elif isinstance(raw, str):
                candidate = raw
            else:
                raise MalformedInput(
                    f"property value must be a string or item-scope, got {type(raw).__name__}",
                    path=value_path,
                )

            resolved = self._resolve_type(types, candidate)
            if resolved is None:
                log.debug("value_rejected", extra={"value_path": value_path})
                continue

            if isinstance(resolved, DataType):
                # The extracted value only replaces the text when coercion is enabled.
                try:
                    extracted = datatypes.extract(resolved, candidate)
                except ValueError:
                    log.debug("value_rejected", extra={"value_path": value_path, "datatype": resolved.name})
                    continue
                if self.config.coerce_values:
                    candidate = resolved.formatter(extracted)
            valid.append(candidate)
        return tuple(valid)

    @staticmethod
    def _resolve_type(types: Sequence[TypeTag], candidate: ValidatedValue) -> Optional[TypeTag]:
        """Return the type under which `candidate` is accepted, or None."""
        if isinstance(candidate, Item):
            if candidate.vocabulary in types or ANY in types:
                return candidate.vocabulary
            return None
        for tag in types:
            if isinstance(tag, DataType) and datatypes.is_valid(tag, candidate):
                return tag
        if ANY in types:
            return ANY
        return None


def validate_itemscope(
    scope: Union[Itemscope, Mapping[str, Any]],
    *,
    registry: Optional[VocabularyRegistry] = None,
    config: Optional[ValidationConfig] = None,
) -> Item:
    """Validate a single item-scope with a one-off ItemValidator."""
    return ItemValidator(registry=registry, config=config).validate(scope)
