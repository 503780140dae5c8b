from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from starlette.requests import Request

from mida.api.middleware import RequestLogMiddleware
from mida.api.models import ApiError, ValidateIn, ValidateOut, VocabularyOut
from mida.core import (
    MalformedInput,
    RecursionLimitExceeded,
    ValidationConfig,
    default_registry,
    item_digest,
    to_plain,
    validate_many,
)
from mida.core.vocabulary import VocabularyRegistry, load_vocabulary_pack

log = logging.getLogger("mida.api")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Configuration for the API service.

    Security notes:
    - max_items bounds the work a single request can cause.
    - vocabulary_pack is trusted server configuration, never request input.

    """

    max_items: int = 1000
    vocabulary_pack: Optional[str] = None
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @staticmethod
    def from_env() -> "ServiceConfig":
        """Read MIDA_MAX_ITEMS, MIDA_VOCABULARY_PACK and the MIDA_* validation settings."""

        raw = os.environ.get("MIDA_MAX_ITEMS", "").strip()
        try:
            max_items = int(raw) if raw else 1000
        except ValueError:
            max_items = 1000
        return ServiceConfig(
            max_items=max(1, max_items),
            vocabulary_pack=(os.environ.get("MIDA_VOCABULARY_PACK") or None),
            validation=ValidationConfig.from_env(),
        )


def build_registry(cfg: ServiceConfig) -> VocabularyRegistry:
    """Built-in vocabularies plus the configured vocabulary pack, if any."""
    registry = default_registry()
    if cfg.vocabulary_pack:
        registry.register_all(load_vocabulary_pack(cfg.vocabulary_pack, registry=registry))
    return registry


def create_app(
    *,
    config: Optional[ServiceConfig] = None,
    registry: Optional[VocabularyRegistry] = None,
) -> FastAPI:
    """Create the FastAPI app."""

    cfg = config if config is not None else ServiceConfig.from_env()
    registry = registry if registry is not None else build_registry(cfg)

    log.setLevel(os.environ.get("MIDA_LOG_LEVEL", "INFO").upper())

    app = FastAPI(title="mida API", version="0.4")
    app.state.cfg = cfg
    app.state.registry = registry
    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(MalformedInput)
    async def malformed_input_handler(request: Request, exc: MalformedInput) -> JSONResponse:
        body = ApiError(error="malformed_input", detail=str(exc), path=exc.path)
        return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))

    @app.exception_handler(RecursionLimitExceeded)
    async def recursion_limit_handler(request: Request, exc: RecursionLimitExceeded) -> JSONResponse:
        body = ApiError(error="recursion_limit_exceeded", detail=str(exc), depth=exc.depth)
        return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "vocabularies": len(registry)}

    @app.get("/vocabularies", response_model=List[VocabularyOut])
    def list_vocabularies() -> List[Dict[str, Any]]:
        return [v.describe() for v in registry.list_vocabularies()]

    @app.post("/validate", response_model=ValidateOut)
    def validate(body: ValidateIn) -> ValidateOut:
        if len(body.items) > cfg.max_items:
            raise HTTPException(status_code=413, detail="too_many_items")

        vcfg = cfg.validation
        if body.coerce_values is not None:
            vcfg = dataclasses.replace(vcfg, coerce_values=body.coerce_values)

        items = validate_many(body.items, registry=registry, config=vcfg)
        return ValidateOut(
            items=[to_plain(item) for item in items],
            digests=[item_digest(item) for item in items],
        )

    return app
