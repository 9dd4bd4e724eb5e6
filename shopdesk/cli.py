"""
CLI entry point for Shopdesk.

Usage:
    # Create the shop tables in the configured database
    shopdesk init-db

    # Serve the application
    shopdesk serve --port 8000
"""

import argparse
import logging
from typing import Optional, Sequence

from shopdesk.core.config import settings
from shopdesk.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_init_db(args: argparse.Namespace) -> None:
    """Create the shop schema."""
    from shopdesk.infrastructure.shops.schema import ensure_schema
    from shopdesk.interfaces.shops.dependencies import get_db_engine

    ensure_schema(get_db_engine())


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the ASGI server."""
    import uvicorn

    logger.info("Starting %s at http://%s:%d", settings.project_name, args.host, args.port)
    uvicorn.run(
        "shopdesk.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shopdesk administration service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create the shop tables")
    init_parser.set_defaults(func=cmd_init_db)

    serve_parser = subparsers.add_parser("serve", help="Run the web application")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument(
        "--port", type=int, default=8000, help="Port to listen on (default 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging(
        level=settings.log_level,
        secrets=settings.api_keys.keys(),
        log_sql=settings.debug,
    )
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
