"""Command-line entry point for the Firebase Realtime Database client.

Connection settings come from ``FIREBASE_*`` environment variables (see
``FirebaseConfig.from_env``). The decoded response body is printed as JSON.

Commands:
- ``get PATH``
- ``set PATH JSON``
- ``push PATH JSON``
- ``update PATH JSON``
- ``delete PATH``
"""

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from .database import Client
from .errors import FirebaseError
from .response import Response

logger = logging.getLogger("firebase_rtdb.cli")

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_USAGE = 2

WRITE_COMMANDS = ("set", "push", "update")
READ_COMMANDS = ("get", "delete")


def _parse_query(pairs: Sequence[str]) -> dict[str, str]:
    query: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Invalid query parameter {pair!r}, expected KEY=VALUE"
            raise ValueError(msg)
        query[key] = value
    return query


def _parse_data(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"DATA must be valid JSON: {exc.msg}"
        raise ValueError(msg) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``firebase-rtdb`` command."""
    parser = argparse.ArgumentParser(
        prog="firebase-rtdb",
        description="Read and write a Firebase Realtime Database over REST.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name in (*READ_COMMANDS, *WRITE_COMMANDS):
        sub = subparsers.add_parser(name, help=f"{name.upper()} data at PATH")
        sub.add_argument("path", metavar="PATH", help="Relative database path, e.g. users/1")
        if name in WRITE_COMMANDS:
            sub.add_argument("data", metavar="DATA", help="JSON payload to write")
        sub.add_argument(
            "--query",
            "-q",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Extra query parameter (repeatable)",
        )
    return parser


def prepare(args: argparse.Namespace) -> tuple[Any, dict[str, str]]:
    """Decode DATA (write commands only) and the query pairs of ``args``."""
    query = _parse_query(args.query)
    data = _parse_data(args.data) if args.command in WRITE_COMMANDS else None
    return data, query


def run(client: Client, args: argparse.Namespace, data: Any, query: dict[str, str]) -> Response:
    """Dispatch the parsed command to ``client``."""
    if args.command in WRITE_COMMANDS:
        return getattr(client, args.command)(args.path, data, query)
    return getattr(client, args.command)(args.path, query)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the firebase-rtdb console script."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s [%(levelname)s] %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        data, query = prepare(args)
        with Client.from_env() as client:
            response = run(client, args, data, query)
    except (FirebaseError, ValueError) as exc:
        logger.error("%s", exc)  # noqa: TRY400
        return EXIT_USAGE

    print(json.dumps(response.body, indent=2))  # noqa: T201
    if not response.success:
        logger.error("Request failed with HTTP %s", response.status_code)
        return EXIT_REQUEST_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
