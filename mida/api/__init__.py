"""mida API package.

This module provides an optional FastAPI service layer around the core
item validation pipeline.
"""

from .server import create_app  # noqa: F401
