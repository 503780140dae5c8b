from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..errors import VocabularyConfigurationError
from .schema import GENERIC_VOCABULARY, Vocabulary


@dataclass
class VocabularyRegistry:
    """In-memory registry mapping item types to vocabularies.

    `find` is total: types that match no registered vocabulary resolve to the
    default vocabulary (the generic one unless overridden).

    - register / get: O(1) average
    - find: O(n) for n registered vocabularies
    """

    default: Vocabulary = GENERIC_VOCABULARY
    _vocabularies: Dict[str, Vocabulary] = field(default_factory=dict, init=False, repr=False)

    def register(self, vocabulary: Vocabulary) -> None:
        """Register a vocabulary by vocabulary_id."""
        vid = vocabulary.vocabulary_id
        if vid in self._vocabularies or vid == self.default.vocabulary_id:
            raise VocabularyConfigurationError(f"Duplicate vocabulary_id: {vid}")
        self._vocabularies[vid] = vocabulary

    def register_all(self, vocabularies: Iterable[Vocabulary]) -> None:
        for vocabulary in vocabularies:
            self.register(vocabulary)

    def unregister(self, vocabulary_id: str) -> None:
        self._vocabularies.pop(vocabulary_id, None)

    def get(self, vocabulary_id: str) -> Vocabulary:
        """Retrieve a vocabulary by id."""
        if vocabulary_id == self.default.vocabulary_id:
            return self.default
        return self._vocabularies[vocabulary_id]

    def try_get(self, vocabulary_id: str) -> Optional[Vocabulary]:
        """Retrieve a vocabulary or None."""
        if vocabulary_id == self.default.vocabulary_id:
            return self.default
        return self._vocabularies.get(vocabulary_id)

    def list_vocabularies(self) -> List[Vocabulary]:
        """List registered vocabularies in insertion order, default last."""
        return list(self._vocabularies.values()) + [self.default]

    def find(self, item_type: Optional[str]) -> Vocabulary:
        """Resolve the vocabulary for an item type.

        Later registrations take precedence over earlier ones so that a more
        specific vocabulary can shadow a broad pattern.
        """

        if item_type is not None:
            for vocabulary in reversed(list(self._vocabularies.values())):
                if vocabulary.matches(item_type):
                    return vocabulary
        return self.default

    def __len__(self) -> int:
        return len(self._vocabularies) + 1
