from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ApiError(BaseModel):
    """Standard API error payload."""

    error: str
    detail: Optional[str] = None
    path: Optional[str] = None
    depth: Optional[int] = None


class ValidateIn(BaseModel):
    """Item-scopes to validate, in their JSON mapping form."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    coerce_values: Optional[bool] = None


class ValidateOut(BaseModel):
    """Validated items (plain form), in request order."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    digests: List[str] = Field(default_factory=list)


class PropertySpecOut(BaseModel):
    num: str
    types: List[str]


class VocabularyOut(BaseModel):
    """A registered vocabulary."""

    vocabulary_id: str
    itemtype: str
    properties: Dict[str, PropertySpecOut] = Field(default_factory=dict)
    fallback: Optional[PropertySpecOut] = None
