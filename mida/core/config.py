from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEPTH = 32


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer environment variable.

    Security notes:
    - Env vars are treated as trusted configuration.
    - Unparseable values fall back to the default.

    """

    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Knobs for item validation.

    - max_depth: deepest allowed item-scope nesting (top-level item is depth 0)
    - coerce_values: store the datatype's canonical string instead of the raw text
    - max_workers: thread pool size for batch validation (None = executor default)

    Security notes:
    - Item-scope trees come from untrusted documents; keep max_depth bounded.

    """

    max_depth: int = DEFAULT_MAX_DEPTH
    coerce_values: bool = False
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @staticmethod
    def from_env() -> "ValidationConfig":
        """Create a config from environment variables.

        - MIDA_MAX_DEPTH (default 32)
        - MIDA_COERCE_VALUES (default off)
        - MIDA_MAX_WORKERS (default: executor default)

        """

        max_depth = _env_int("MIDA_MAX_DEPTH", DEFAULT_MAX_DEPTH)
        if max_depth is None or max_depth < 0:
            max_depth = DEFAULT_MAX_DEPTH
        max_workers = _env_int("MIDA_MAX_WORKERS", None)
        if max_workers is not None and max_workers < 1:
            max_workers = None
        return ValidationConfig(
            max_depth=max_depth,
            coerce_values=_env_flag("MIDA_COERCE_VALUES", False),
            max_workers=max_workers,
        )
