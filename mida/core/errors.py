from __future__ import annotations

from typing import Optional


class MidaError(Exception):
    """
    Base exception for all mida failures.
    """

    pass


class MalformedInput(MidaError, ValueError):
    """
    Raised when an item-scope tree does not have the expected shape.

    `path` locates the offending node, e.g. ``$.properties.author[0].type``.
    """

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


class RecursionLimitExceeded(MidaError):
    """
    Raised when item-scopes are nested deeper than the configured maximum.

    Aborts the whole validation; partial items are never returned.
    """

    def __init__(self, depth: int, max_depth: Optional[int] = None, message: Optional[str] = None) -> None:
        if message is None:
            message = f"item-scope nesting depth {depth} exceeds maximum {max_depth}"
        super().__init__(message)
        self.depth = depth
        self.max_depth = max_depth


class CyclicItemscopeError(RecursionLimitExceeded):
    """
    Raised when an item-scope contains itself along the current nesting path.
    """

    def __init__(self, depth: int, max_depth: Optional[int] = None) -> None:
        super().__init__(depth, max_depth, message=f"cyclic item-scope detected at depth {depth}")


class VocabularyConfigurationError(MidaError, ValueError):
    """
    Raised when vocabularies are misconfigured or a vocabulary pack is invalid.
    """

    pass
