from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Mapping, Optional, Union

from .config import ValidationConfig
from .item import Item
from .itemscope import Itemscope
from .validator import ItemValidator
from .vocabulary import VocabularyRegistry

log = logging.getLogger("mida.core")


def validate_many(
    scopes: Iterable[Union[Itemscope, Mapping[str, Any]]],
    *,
    registry: Optional[VocabularyRegistry] = None,
    config: Optional[ValidationConfig] = None,
    max_workers: Optional[int] = None,
) -> List[Item]:
    """Validate independent top-level item-scopes in parallel.

    Results are returned in input order. The registry is only read during
    validation, so one registry is shared by all workers. The first fatal
    error (malformed input, depth limit) propagates to the caller.
    """

    validator = ItemValidator(registry=registry, config=config)
    pending = list(scopes)
    if not pending:
        return []
    workers = max_workers if max_workers is not None else validator.config.max_workers
    if workers == 1 or len(pending) == 1:
        return [validator.validate(scope) for scope in pending]

    log.debug("batch_validate", extra={"item_count": len(pending), "max_workers": workers})
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mida-validate") as pool:
        return list(pool.map(validator.validate, pending))
