from __future__ import annotations

import pytest

from mida.core import Itemscope, MalformedInput


def test_itemscope_is_immutable_and_defensively_copied() -> None:
    values = ["x"]
    scope = Itemscope(type="T", properties={"a": values})

    values.append("y")

    assert scope.properties["a"] == ("x",)
    with pytest.raises(TypeError):
        scope.properties["b"] = ("z",)  # type: ignore[index]


def test_from_mapping_builds_nested_scopes() -> None:
    scope = Itemscope.from_mapping(
        {
            "type": "http://example.com/Review",
            "id": "urn:isbn:1-934356-08-5",
            "properties": {"author": [{"type": "http://example.com/Person", "properties": {"name": ["Ann"]}}, "Bob"]},
        }
    )

    nested, text = scope.properties["author"]
    assert isinstance(nested, Itemscope)
    assert nested.properties["name"] == ("Ann",)
    assert text == "Bob"
    assert scope.id == "urn:isbn:1-934356-08-5"


def test_from_mapping_defaults_missing_fields() -> None:
    scope = Itemscope.from_mapping({})

    assert scope.type is None
    assert scope.id is None
    assert dict(scope.properties) == {}


def test_to_mapping_inverts_from_mapping() -> None:
    data = {
        "type": "T",
        "id": None,
        "properties": {"a": ["1", {"type": "U", "id": "u1", "properties": {}}]},
    }

    assert Itemscope.from_mapping(data).to_mapping() == data


@pytest.mark.parametrize(
    "data, path",
    [
        (["not", "a", "mapping"], "$"),
        ({"type": 5}, "$.type"),
        ({"id": ["x"]}, "$.id"),
        ({"properties": ["a"]}, "$.properties"),
        ({"properties": {"a": "x"}}, "$.properties.a"),
        ({"properties": {"a": [1]}}, "$.properties.a[0]"),
        ({"properties": {"a": [{"properties": {"b": [None]}}]}}, "$.properties.a[0].properties.b[0]"),
        ({"itemtype": "T"}, "$"),
    ],
)
def test_from_mapping_rejects_malformed_input(data, path) -> None:
    with pytest.raises(MalformedInput) as exc:
        Itemscope.from_mapping(data)

    assert exc.value.path == path


@pytest.mark.parametrize(
    "kwargs, path",
    [
        ({"type": 123}, "$.type"),
        ({"type": "T", "id": 7}, "$.id"),
        ({"type": "T", "properties": ["a"]}, "$.properties"),
        ({"type": "T", "properties": {"a": None}}, "$.properties.a"),
        ({"type": "T", "properties": {"a": ["x", 1]}}, "$.properties.a[1]"),
        ({"type": "T", "properties": {1: ["x"]}}, "$.properties"),
    ],
)
def test_direct_construction_rejects_malformed_input(kwargs, path) -> None:
    with pytest.raises(MalformedInput) as exc:
        Itemscope(**kwargs)

    assert exc.value.path == path


def test_direct_construction_accepts_single_values_and_tuples() -> None:
    nested = Itemscope(type="U")
    scope = Itemscope(type="T", properties={"a": "x", "b": nested, "c": ("y", nested)})

    assert scope.properties["a"] == ("x",)
    assert scope.properties["b"] == (nested,)
    assert scope.properties["c"] == ("y", nested)
