#!/usr/bin/env python3
"""
StockSync management CLI.

Usage:
    python manage.py serve       Start the API server
    python manage.py status      Show connectivity and pending queue
    python manage.py sync        Reconnect, drain the queue and refresh caches
    python manage.py import FILE Import orders from a semicolon-delimited file
"""

import argparse
import asyncio
import sys
from pathlib import Path

from stocksync.config import configure_logging


async def _status() -> int:
    from stocksync.application.services import get_stock_services
    from stocksync.infrastructure.storage.sqlite import close_pool

    try:
        services = await get_stock_services()
        pending = await services.engine.pending()
        print(f"Pending mutations: {len(pending)}")
        for mutation in pending:
            print(
                f"  {mutation.enqueued_at:%Y-%m-%d %H:%M:%S}  "
                f"{mutation.kind.value:<12} {mutation.command.value:<7} {mutation.id}"
            )
        connected = await services.gateway.connect()
        print(f"Remote: {'reachable' if connected else 'unreachable'}")
        await services.gateway.disconnect()
    finally:
        await close_pool()
    return 0


async def _sync() -> int:
    from stocksync.application.services import get_stock_services
    from stocksync.infrastructure.storage.sqlite import close_pool

    try:
        services = await get_stock_services()
        result = await services.engine.reconnect()
        if not result.connected:
            print("Could not connect to the server. Pending items stay queued.")
            return 1
        if result.drain is not None:
            print(result.drain.message)
        print(f"Still pending: {await services.engine.pending_count()}")
        await services.gateway.disconnect()
    finally:
        await close_pool()
    return 0


async def _import(path: Path) -> int:
    from stocksync.application.notifications import NotificationCollector
    from stocksync.application.services import get_stock_services
    from stocksync.application.use_cases import ImportOrdersUseCase
    from stocksync.infrastructure.storage.sqlite import close_pool

    try:
        services = await get_stock_services()
        await services.gateway.connect()
        collector = NotificationCollector()
        use_case = ImportOrdersUseCase(services=services, notifier=collector)
        result = await use_case.execute(path.read_text(encoding="utf-8"))
        print(
            f"Imported {len(result.orders)} orders, {result.items_imported} items "
            f"({result.rows_skipped} rows skipped)."
        )
        await services.gateway.disconnect()
    finally:
        await close_pool()
    return 0


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the API server."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "stocksync.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_status(args: argparse.Namespace) -> None:
    """Show connectivity and the pending queue."""
    sys.exit(asyncio.run(_status()))


def cmd_sync(args: argparse.Namespace) -> None:
    """Reconnect and drain."""
    sys.exit(asyncio.run(_sync()))


def cmd_import(args: argparse.Namespace) -> None:
    """Import orders from a file."""
    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)
    sys.exit(asyncio.run(_import(path)))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="StockSync management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # status
    p_status = sub.add_parser("status", help="Show connectivity and pending queue")
    p_status.set_defaults(func=cmd_status)

    # sync
    p_sync = sub.add_parser("sync", help="Reconnect, drain and refresh caches")
    p_sync.set_defaults(func=cmd_sync)

    # import
    p_import = sub.add_parser("import", help="Import orders from a delimited file")
    p_import.add_argument("file", help="Path to the import file")
    p_import.set_defaults(func=cmd_import)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
