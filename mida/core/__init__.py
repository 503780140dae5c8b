"""Core item validation for mida.

Validation maps untrusted item-scopes produced by a markup parser onto the
schema of their vocabulary, yielding immutable, canonical Items.

Security notes:
- Never assume item-scope trees are well-formed or benign.
- Keep transforms deterministic and strictly bounded (max nesting depth).
"""

from .batch import validate_many
from .canonical import item_digest, to_display_string, to_plain
from .config import ValidationConfig
from .errors import (
    CyclicItemscopeError,
    MalformedInput,
    MidaError,
    RecursionLimitExceeded,
    VocabularyConfigurationError,
)
from .item import Item
from .itemscope import Itemscope
from .validator import ItemValidator, default_registry, validate_itemscope

__all__ = [
    "Item",
    "Itemscope",
    "ItemValidator",
    "ValidationConfig",
    "default_registry",
    "validate_itemscope",
    "validate_many",
    "to_plain",
    "to_display_string",
    "item_digest",
    "MidaError",
    "MalformedInput",
    "RecursionLimitExceeded",
    "CyclicItemscopeError",
    "VocabularyConfigurationError",
]
