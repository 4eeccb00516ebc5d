"""CLI for running one news sync outside the API."""

import argparse
import asyncio
import json
import sys
from typing import Any

from app.config import get_settings
from app.logging_config import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync Dubai real-estate news feeds.")
    parser.add_argument(
        "--source",
        default=None,
        help="Name of a single feed to sync (default: all).",
    )
    parser.add_argument("--init-db", action="store_true", help="Create tables before syncing.")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


async def run_once(source: str | None = None, init: bool = False) -> dict[str, Any]:
    from app.db.postgres import async_session, init_db
    from app.services.news_sync import build_sync_service, execute_sync

    try:
        if init:
            await init_db()
        async with async_session() as session:
            service = build_sync_service(session, get_settings())
            try:
                return await execute_sync(service, source)
            finally:
                await service.close()
    except Exception as e:
        return {"success": False, "error": str(e) or type(e).__name__}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    result = asyncio.run(run_once(args.source, init=args.init_db))
    print(json.dumps(result, indent=2))
    return 0 if result.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
