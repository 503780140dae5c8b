from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
import sys
from typing import Any, List, Optional

from mida.core import (
    ItemValidator,
    MalformedInput,
    RecursionLimitExceeded,
    ValidationConfig,
    VocabularyConfigurationError,
    default_registry,
    item_digest,
    to_plain,
)
from mida.core.vocabulary import VocabularyRegistry, load_vocabulary_pack

log = logging.getLogger("mida.cli")


def _json_default(o):
    # Lazy import keeps CLI startup light
    from mida.utils.json_safe import to_jsonable

    return to_jsonable(o)


def _print_json(obj: Any) -> None:
    """Print JSON to stdout."""
    print(json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False, default=_json_default))


def _read_json(path: str) -> Any:
    """Read a JSON file."""

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _build_registry(pack_path: Optional[str]) -> VocabularyRegistry:
    registry = default_registry()
    if pack_path:
        registry.register_all(load_vocabulary_pack(pack_path, registry=registry))
    return registry


def _configure_logging(level: Optional[str]) -> None:
    level_name = (level or os.environ.get("MIDA_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(level=level_name, format="%(name)s - %(levelname)s - %(message)s", stream=sys.stderr)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate item-scopes from a JSON file and print their plain form.

    The file holds one item-scope mapping or a list of them.

    Security notes:
    - The input file is untrusted; nesting depth is bounded by --max-depth.

    """

    try:
        data = _read_json(args.path)
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: cannot read {args.path}: {e}", file=sys.stderr)
        return 2

    cfg = ValidationConfig.from_env()
    try:
        if args.max_depth is not None:
            cfg = dataclasses.replace(cfg, max_depth=args.max_depth)
    except ValueError as e:
        print(f"error: --max-depth: {e}", file=sys.stderr)
        return 2
    if args.coerce_values:
        cfg = dataclasses.replace(cfg, coerce_values=True)

    try:
        registry = _build_registry(args.vocabularies)
        validator = ItemValidator(registry=registry, config=cfg)
        scopes = data if isinstance(data, list) else [data]
        items = [validator.validate(scope) for scope in scopes]
    except (OSError, VocabularyConfigurationError) as e:
        print(f"error: vocabulary pack: {e}", file=sys.stderr)
        return 2
    except (MalformedInput, RecursionLimitExceeded) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log.info("validated %d item(s)", len(items))
    out = []
    for item in items:
        plain = to_plain(item)
        if args.digest:
            plain = {"item": plain, "digest": item_digest(item)}
        out.append(plain)
    _print_json(out if isinstance(data, list) else out[0])
    return 0


def cmd_list_vocabularies(args: argparse.Namespace) -> int:
    """Print the registered vocabularies."""
    try:
        registry = _build_registry(args.vocabularies)
    except (OSError, VocabularyConfigurationError) as e:
        print(f"error: vocabulary pack: {e}", file=sys.stderr)
        return 2

    if args.ids_only:
        for vocabulary in registry.list_vocabularies():
            print(vocabulary.vocabulary_id)
        return 0
    _print_json(registry.list_vocabularies())
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the mida API server.

    Security notes:
    - Bind to 127.0.0.1 by default (safer than 0.0.0.0).

    """

    try:
        import uvicorn
    except ImportError as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    from mida.api.server import create_app

    uvicorn.run(create_app(), host=args.host, port=int(args.port), log_level=args.uvicorn_log_level)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    p = argparse.ArgumentParser(prog="mida", description="mida microdata item validator")
    p.add_argument("--log-level", default=None, help="Logging level (default: MIDA_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    vp = sub.add_parser("validate", help="Validate item-scopes from a JSON file")
    vp.add_argument("path", help="Path to a JSON file (one item-scope or a list)")
    vp.add_argument("--max-depth", type=int, default=None, help="Maximum item-scope nesting depth")
    vp.add_argument(
        "--coerce-values",
        action="store_true",
        help="Store canonical datatype values instead of the original text",
    )
    vp.add_argument("--vocabularies", default=None, help="Optional JSON vocabulary pack to register")
    vp.add_argument("--digest", action="store_true", help="Include a SHA-256 digest per item")
    vp.set_defaults(func=cmd_validate)

    lv = sub.add_parser("list-vocabularies", help="List registered vocabularies")
    lv.add_argument("--vocabularies", default=None, help="Optional JSON vocabulary pack to register")
    lv.add_argument("--ids-only", action="store_true", help="Print vocabulary ids only")
    lv.set_defaults(func=cmd_list_vocabularies)

    # --- API server ---
    sv = sub.add_parser("serve", help="Run the mida FastAPI server")
    sv.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    sv.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    sv.add_argument("--uvicorn-log-level", default="info", help="Uvicorn log level")
    sv.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
