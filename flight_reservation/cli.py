"""Command line interface for processing a reservation input stream."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterable, TextIO

from .commands import InvalidQuery
from .engine import ReservationEngine
from .parser import read_input
from .render import render_invalid_query, render_result

_DEFAULT_LOG_LEVEL = os.environ.get("FLIGHT_RESERVATION_LOG_LEVEL", "WARNING")


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load a flight catalog and answer reservation commands."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input file with the catalog followed by commands (default: stdin).",
    )
    parser.add_argument(
        "--format",
        choices=["text", "table"],
        default="text",
        help="Render list results as plain lines or as tables (default: text).",
    )
    parser.add_argument(
        "--log-level",
        default=_DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity on stderr (default: WARNING).",
    )
    parser.add_argument(
        "--echo-sql",
        action="store_true",
        help="Log the SQL statements issued against the in-memory store.",
    )
    return parser.parse_args(list(argv))


def run(stream: TextIO, out: TextIO, *, table: bool = False) -> int:
    """Process ``stream`` and write one rendered result per command to ``out``."""

    definitions, commands = read_input(stream)
    with ReservationEngine() as engine:
        engine.load_catalog(definitions)
        processed = 0
        for command in commands:
            if isinstance(command, InvalidQuery):
                print(render_invalid_query(command), file=out)
            else:
                print(render_result(engine.execute(command), table=table), file=out)
            processed += 1
    return processed


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.echo_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    try:
        if args.input == "-":
            run(sys.stdin, sys.stdout, table=args.format == "table")
        else:
            with open(args.input, "r", encoding="utf-8") as fh:
                run(fh, sys.stdout, table=args.format == "table")
    except (ValueError, OSError) as exc:
        # malformed input, a rejected catalog and an unsupported database URL
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
