"""
Minimal script that uses the public API to send a message and report on it.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Iterable, Tuple

from falu import (
    ConfigError,
    FaluException,
    MessageCreateRequest,
    MessagePatchModel,
    PatchDocument,
    RequestOptions,
    TransportError,
    create_client,
    load_client_options,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a message using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing FALU_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--to", required=True, help="Recipient phone number in E.164 format")
    parser.add_argument("--body", required=True, help="Text of the message")
    parser.add_argument("--stream", default="transactional", help="Message stream to send on")
    parser.add_argument(
        "--idempotency-key",
        help="Reuse a key to make repeated runs send the message only once",
    )
    parser.add_argument("--reference", help="Stored as metadata 'ref' on the sent message")
    return parser.parse_args()


async def _send(args: argparse.Namespace, client) -> int:
    request = MessageCreateRequest(to=args.to, body=args.body, stream=args.stream)
    created = await client.messages.create(
        request,
        RequestOptions(idempotency_key=args.idempotency_key),
    )
    message = created.ensure_success()
    if created.cached_response:
        logging.info("Server replayed the stored response for this idempotency key")
    logging.info("Message %s is %s (request %s)", message.id, message.status, created.request_id)

    if args.reference:
        patch = PatchDocument(MessagePatchModel).add("metadata/ref", args.reference)
        updated = await client.messages.update(message.id, patch)
        updated.ensure_success()
        logging.info("Tagged message %s with reference %s", message.id, args.reference)
    return 0


async def _run(args: argparse.Namespace, client) -> int:
    async with client:
        return await _send(args, client)


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        options = load_client_options(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(options=options)
    try:
        return asyncio.run(_run(args, client))
    except (FaluException, TransportError, ValueError) as exc:
        logging.error("Sending failed: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
