"""
Operator CLI for club content: export, import, init, seed, reset, stats and serve.

By default commands act on the configured key-value backend directly. With
``--remote`` the export, import and stats commands go through the data API
at ``REMOTE_API_URL`` instead, logging in with ``AUTH_PASSWORD`` to write.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clubsite.config import get_settings
from clubsite.content import CollectionStore, export_all, import_all
from clubsite.dependencies import get_kv_store
from clubsite.errors import ClubDataError
from clubsite.facades import ContentRepository
from clubsite.sync import ApiClient, SyncedCollectionStore

logger = logging.getLogger(__name__)


def _open_store(args, *, needs_login: bool = False):
    settings = get_settings()
    if not args.remote:
        return CollectionStore(get_kv_store())

    api = ApiClient(
        settings.remote_api_url, timeout=settings.request_timeout_seconds
    )
    if needs_login:
        if not settings.auth_password:
            raise ClubDataError("AUTH_PASSWORD is required for remote writes", 400)
        api.login(settings.auth_password)
    store = SyncedCollectionStore(api)
    try:
        store.load(strict=True)
    except ClubDataError:
        store.close()
        raise
    return store


def _close(store) -> None:
    """Wait for remote pushes; raise if any of them failed."""
    if not isinstance(store, SyncedCollectionStore):
        return
    failed = store.flush()
    store.close()
    if failed:
        raise ClubDataError(f"{failed} remote update(s) failed")


def cmd_export(args) -> int:
    store = _open_store(args)
    payload = export_all(store)
    _close(store)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        logger.info("Exported content to %s", args.output)
    else:
        print(payload)
    return 0


def cmd_import(args) -> int:
    payload = Path(args.input).read_text(encoding="utf-8")
    store = _open_store(args, needs_login=True)
    ok = import_all(store, payload)
    _close(store)
    if not ok:
        logger.error("Import of %s failed", args.input)
        return 1
    logger.info("Imported content from %s", args.input)
    return 0


def cmd_init(args) -> int:
    written = CollectionStore(get_kv_store()).ensure_defaults()
    if not written:
        logger.info("All collections already initialized")
    return 0


def cmd_seed(args) -> int:
    store = CollectionStore(get_kv_store())
    if store.seed():
        logger.info("Default data seeded")
    else:
        logger.info("Data already seeded")
    return 0


def cmd_reset(args) -> int:
    if not args.yes:
        logger.error("Refusing to reset without --yes")
        return 1
    CollectionStore(get_kv_store()).reset_all()
    return 0


def cmd_stats(args) -> int:
    store = _open_store(args)
    stats = ContentRepository(store).get_stats()
    _close(store)
    print(json.dumps(stats.as_dict(), indent=2))
    return 0


def cmd_serve(args) -> int:
    import uvicorn

    CollectionStore(get_kv_store()).ensure_defaults()
    uvicorn.run("clubsite.app:app", host=args.host, port=args.port, reload=False)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Club content management")
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Go through the data API at REMOTE_API_URL",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export all collections")
    export_parser.add_argument(
        "-o", "--output", type=str, default=None, help="Write to file instead of stdout"
    )
    export_parser.set_defaults(func=cmd_export)

    import_parser = subparsers.add_parser("import", help="Import an export file")
    import_parser.add_argument("input", type=str, help="Path to an export file")
    import_parser.set_defaults(func=cmd_import)

    init_parser = subparsers.add_parser(
        "init", help="Write default content for collections that are missing"
    )
    init_parser.set_defaults(func=cmd_init)

    seed_parser = subparsers.add_parser(
        "seed", help="Seed default content if the store is empty"
    )
    seed_parser.set_defaults(func=cmd_seed)

    reset_parser = subparsers.add_parser(
        "reset", help="Overwrite every collection with default content"
    )
    reset_parser.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset_parser.set_defaults(func=cmd_reset)

    stats_parser = subparsers.add_parser("stats", help="Print dashboard statistics")
    stats_parser.set_defaults(func=cmd_stats)

    serve_parser = subparsers.add_parser("serve", help="Run the data API")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    try:
        return args.func(args)
    except ClubDataError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
