# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from pokesync.app import rank_pokemon, sync_pokemon
from pokesync.config import configure_logging
from pokesync.domain.errors import InvalidArgument
from pokesync.domain.model import RankingAttribute

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pokesync.domain.model import Pokemon

log = logging.getLogger(__name__)

DEFAULT_TOP_COUNT = 10


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise and rank Pokémon from PokeAPI")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Run one synchronization cycle")
    sync.add_argument(
        "--page-size",
        type=_positive_int,
        default=None,
        help="Number of catalog entries to request (defaults to config)",
    )

    top = subparsers.add_parser("top", help="Print the top Pokémon by an attribute")
    top.add_argument(
        "attribute",
        choices=[attribute.value for attribute in RankingAttribute],
        help="Attribute to rank by",
    )
    top.add_argument(
        "-n",
        "--count",
        type=int,
        default=DEFAULT_TOP_COUNT,
        help="Number of Pokémon to print (default: %(default)s)",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser.parse_args(list(argv))


def _print_ranking(attribute: RankingAttribute, pokemon: Sequence[Pokemon]) -> None:
    for position, item in enumerate(pokemon, start=1):
        value = item.attribute(attribute)
        shown = "-" if value is None else str(value)
        print(f"{position:>3}. {item.name:<24} #{item.poke_api_id:<6} {attribute.value}={shown}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    if parsed_args.command == "top":
        attribute = RankingAttribute(parsed_args.attribute)
        try:
            pokemon = rank_pokemon(attribute, parsed_args.count)
        except InvalidArgument:
            log.exception("CLI validation error")
            sys.exit(2)
        except Exception:
            log.exception("Fatal error while ranking")
            sys.exit(1)
        _print_ranking(attribute, pokemon)
        return

    try:
        if parsed_args.command == "sync":
            result = sync_pokemon(page_size=parsed_args.page_size)
            log.info(
                "Sync finished: listed=%s, stored=%s, failed=%s",
                result.listed,
                result.stored,
                result.failed,
            )
        elif parsed_args.command == "serve":
            uvicorn.run(
                "pokesync.api.app:create_app",
                factory=True,
                host=parsed_args.host,
                port=parsed_args.port,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
