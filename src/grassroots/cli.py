from __future__ import annotations

import argparse
import logging

from .bootstrap import configure_logging
from .services.http import run_local_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grassroots Calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API for the month calendar.")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--log-level", default=None, help="Override GRASSROOTS_LOG_LEVEL.")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=getattr(args, "log_level", None))
    logging.getLogger(__name__).info("Grassroots CLI starting")

    if args.command == "serve":
        run_local_server(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
