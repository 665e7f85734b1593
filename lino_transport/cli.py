"""Command-line interface for the node transport."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .amount import Amount, parse_from_decimal, to_decimal
from .config import load_config, with_overrides
from .errors import AmountError, TransportError
from .logging_setup import configure_logging
from .transport import Transport

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lino-transport",
        description="Query and inspect a blockchain node",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: ~/.lino-go/config.yaml)",
    )
    parser.add_argument(
        "--node-url",
        default=None,
        help="Node RPC address (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show node status")

    block_parser = sub.add_parser("block", help="Show the block at a height")
    block_parser.add_argument("height", type=int)

    query_parser = sub.add_parser("query", help="Query a key in a store")
    query_parser.add_argument("store")
    query_parser.add_argument("key", help="Hex-encoded key")
    query_parser.add_argument(
        "--height", type=int, default=0, help="Block height (default: latest)"
    )

    subspace_parser = sub.add_parser("subspace", help="List pairs under a prefix")
    subspace_parser.add_argument("store")
    subspace_parser.add_argument("prefix", help="Hex-encoded key prefix")

    to_coin = sub.add_parser("to-coin", help="Convert a token amount to coin units")
    to_coin.add_argument("amount")

    from_coin = sub.add_parser("from-coin", help="Convert coin units to a token amount")
    from_coin.add_argument("coin", type=int)

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected network command."""
    config = with_overrides(load_config(args.config), node_url=args.node_url)
    transport = Transport.from_config(config)

    if args.command == "status":
        print(json.dumps(await transport.query_block_status(), indent=2))
    elif args.command == "block":
        print(json.dumps(await transport.query_block(args.height), indent=2))
    elif args.command == "query":
        key = bytes.fromhex(args.key)
        if args.height:
            value = await transport.query_at_height(key, args.store, args.height)
        else:
            value = await transport.query(key, args.store)
        print(value.hex())
    elif args.command == "subspace":
        pairs = await transport.query_subspace(bytes.fromhex(args.prefix), args.store)
        for pair in pairs:
            print(f"{pair.key.hex()} {pair.value.hex()}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)

    try:
        if args.command == "to-coin":
            print(parse_from_decimal(args.amount))
        elif args.command == "from-coin":
            print(to_decimal(Amount(args.coin)))
        else:
            asyncio.run(_run(args))
    except (TransportError, AmountError, ValueError, FileNotFoundError) as e:
        logger.error("%s failed: %s", args.command, e)
        sys.exit(1)
