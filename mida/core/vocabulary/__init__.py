from .builtin import builtin_vocabularies, load_builtin_vocabularies
from .pack import load_vocabulary_pack, parse_vocabulary_pack
from .registry import VocabularyRegistry
from .schema import (
    ANY,
    GENERIC_VOCABULARY,
    GENERIC_VOCABULARY_ID,
    Cardinality,
    PropertySpec,
    TypeTag,
    Vocabulary,
    define_vocabulary,
    has_many,
    has_one,
)

__all__ = [
    "ANY",
    "Cardinality",
    "PropertySpec",
    "TypeTag",
    "Vocabulary",
    "define_vocabulary",
    "has_one",
    "has_many",
    "GENERIC_VOCABULARY",
    "GENERIC_VOCABULARY_ID",
    "VocabularyRegistry",
    "builtin_vocabularies",
    "load_builtin_vocabularies",
    "load_vocabulary_pack",
    "parse_vocabulary_pack",
]
