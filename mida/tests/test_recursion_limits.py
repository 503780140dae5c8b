from __future__ import annotations

import pytest

from mida.core import (
    CyclicItemscopeError,
    Item,
    Itemscope,
    ItemValidator,
    RecursionLimitExceeded,
    ValidationConfig,
    validate_itemscope,
)
from mida.core.vocabulary import VocabularyRegistry


def _chain(levels: int) -> Itemscope:
    """An item-scope with `levels` nested children below the root."""
    scope = Itemscope(type="leaf", properties={"name": ["bottom"]})
    for i in range(levels):
        scope = Itemscope(type=f"level-{i}", properties={"child": [scope]})
    return scope


def test_nesting_up_to_max_depth_is_accepted() -> None:
    validator = ItemValidator(registry=VocabularyRegistry(), config=ValidationConfig(max_depth=3))

    item = validator.validate(_chain(3))

    depth = 0
    while "child" in item.properties:
        item = item.properties["child"][0]
        assert isinstance(item, Item)
        depth += 1
    assert depth == 3
    assert item.properties["name"] == ("bottom",)


def test_nesting_beyond_max_depth_raises_with_depth() -> None:
    validator = ItemValidator(registry=VocabularyRegistry(), config=ValidationConfig(max_depth=3))

    with pytest.raises(RecursionLimitExceeded) as exc:
        validator.validate(_chain(4))

    assert exc.value.depth == 4
    assert exc.value.max_depth == 3


def test_depth_limit_aborts_even_when_property_would_be_dropped() -> None:
    # Nested scopes are validated before type checks, so the limit still applies.
    validator = ItemValidator(registry=VocabularyRegistry(), config=ValidationConfig(max_depth=0))

    with pytest.raises(RecursionLimitExceeded):
        validator.validate(_chain(1))


def test_cycle_is_detected() -> None:
    scope = Itemscope(type="loop")
    object.__setattr__(scope, "properties", {"self": (scope,)})

    with pytest.raises(CyclicItemscopeError) as exc:
        ItemValidator(registry=VocabularyRegistry()).validate(scope)

    assert isinstance(exc.value, RecursionLimitExceeded)
    assert exc.value.depth == 1


def test_shared_subtree_is_not_a_cycle() -> None:
    shared = Itemscope(type="leaf", properties={"name": ["x"]})
    scope = Itemscope(type="root", properties={"a": [shared], "b": [shared, shared]})

    item = ItemValidator(registry=VocabularyRegistry()).validate(scope)

    assert item.properties["a"][0] == item.properties["b"][0] == item.properties["b"][1]


def _deep_mapping(levels: int) -> dict:
    data: dict = {"type": "leaf"}
    for _ in range(levels):
        data = {"type": "node", "properties": {"child": [data]}}
    return data


def test_deep_mapping_raises_limit_instead_of_overflowing() -> None:
    with pytest.raises(RecursionLimitExceeded) as exc:
        validate_itemscope(_deep_mapping(1500))

    assert exc.value.depth == 33
    assert exc.value.max_depth == 32


def test_from_mapping_honours_max_depth() -> None:
    scope = Itemscope.from_mapping(_deep_mapping(2), max_depth=2)
    assert isinstance(scope.properties["child"][0], Itemscope)

    with pytest.raises(RecursionLimitExceeded) as exc:
        Itemscope.from_mapping(_deep_mapping(3), max_depth=2)

    assert exc.value.depth == 3


def test_mapping_depth_uses_validator_config() -> None:
    validator = ItemValidator(registry=VocabularyRegistry(), config=ValidationConfig(max_depth=40))

    item = validator.validate(_deep_mapping(40))

    assert item.type == "node"
