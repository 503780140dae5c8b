"""mida: microdata item validation and normalization."""

from .core import Item, Itemscope, ItemValidator, ValidationConfig, validate_itemscope, validate_many

__version__ = "0.4.0"

__all__ = [
    "Item",
    "Itemscope",
    "ItemValidator",
    "ValidationConfig",
    "validate_itemscope",
    "validate_many",
    "__version__",
]
