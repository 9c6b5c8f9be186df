"""
Command-line interface for exercising the Falu API.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Iterable, Optional, Sequence, Tuple

from .api import create_client
from .core.config import ConfigError, load_client_options
from .core.envelope import ResourceResponse
from .core.errors import FaluException, TransportError
from .core.transport import Transport
from .resources.messages import MessagesListOptions


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="falu",
        description="Call the Falu API from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing FALU_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("balance", help="Show the money balances")

    list_messages = commands.add_parser("messages-list", help="List messages")
    list_messages.add_argument("--count", type=int, help="Page size")
    list_messages.add_argument(
        "--ct",
        dest="continuation_token",
        help="Continuation token returned by a previous page",
    )

    get_message = commands.add_parser("messages-get", help="Retrieve a message")
    get_message.add_argument("id", help="Message identifier, e.g. msg_123")
    return parser


async def _execute(args: argparse.Namespace, client) -> ResourceResponse:
    async with client:
        if args.command == "balance":
            return await client.money_balances.get()
        if args.command == "messages-list":
            options = MessagesListOptions(
                count=args.count,
                continuation_token=args.continuation_token,
            )
            return await client.messages.list(options)
        return await client.messages.get(args.id)


def _print_response(response: ResourceResponse, serializer) -> None:
    payload = serializer.to_payload(response.resource)
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    if response.continuation_token:
        logging.info("More results available, continue with --ct %s", response.continuation_token)


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    transport: Optional[Transport] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        options = load_client_options(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(options=options, transport=transport)
    try:
        response = asyncio.run(_execute(args, client))
        response.ensure_success()
    except ValueError as exc:
        logging.error("Invalid arguments: %s", exc)
        return 1
    except TransportError as exc:
        logging.error("Request could not be sent: %s", exc)
        return 1
    except FaluException as exc:
        logging.error("Request failed: %s", exc)
        return 1

    _print_response(response, client.serializer)
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
