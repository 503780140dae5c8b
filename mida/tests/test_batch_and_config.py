from __future__ import annotations

import pytest

from mida.core import MalformedInput, RecursionLimitExceeded, ValidationConfig, validate_many
from mida.core.vocabulary import VocabularyRegistry


def test_validate_many_preserves_input_order() -> None:
    scopes = [{"type": f"t{i}", "properties": {"n": [str(i)]}} for i in range(20)]

    items = validate_many(scopes, registry=VocabularyRegistry(), max_workers=4)

    assert [item.type for item in items] == [f"t{i}" for i in range(20)]
    assert [item.properties["n"] for item in items] == [(str(i),) for i in range(20)]


def test_validate_many_empty_input() -> None:
    assert validate_many([]) == []


def test_validate_many_propagates_fatal_errors() -> None:
    scopes = [{"type": "ok"}, {"type": 3}]

    with pytest.raises(MalformedInput):
        validate_many(scopes, registry=VocabularyRegistry(), max_workers=2)


def test_validate_many_uses_config_depth_limit() -> None:
    deep = {"type": "a", "properties": {"c": [{"type": "b", "properties": {"c": [{"type": "c"}]}}]}}

    with pytest.raises(RecursionLimitExceeded):
        validate_many([deep, deep], registry=VocabularyRegistry(), config=ValidationConfig(max_depth=1))


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("MIDA_MAX_DEPTH", "5")
    monkeypatch.setenv("MIDA_COERCE_VALUES", "yes")
    monkeypatch.setenv("MIDA_MAX_WORKERS", "3")

    cfg = ValidationConfig.from_env()

    assert cfg == ValidationConfig(max_depth=5, coerce_values=True, max_workers=3)


def test_config_from_env_falls_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("MIDA_MAX_DEPTH", "deep")
    monkeypatch.setenv("MIDA_MAX_WORKERS", "0")
    monkeypatch.delenv("MIDA_COERCE_VALUES", raising=False)

    assert ValidationConfig.from_env() == ValidationConfig()


def test_config_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        ValidationConfig(max_depth=-1)
