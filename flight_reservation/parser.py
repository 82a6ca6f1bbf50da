"""Parser for the line-oriented catalog and command stream."""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .catalog import FlightDefinition, SeatClassDefinition
from .commands import (
    Cancel,
    Command,
    FlightSearch,
    GetReservations,
    InvalidQuery,
    Reserve,
    SeatSearch,
)
from .models import fits_integer_column

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[0-9]+")

ParsedCommand = Union[Command, InvalidQuery]


class InputFormatError(ValueError):
    """Raised when the catalog or a count line cannot be parsed."""


class _Lines:
    """Line cursor that remembers the line number for error messages."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._iterator = iter(lines)
        self.number = 0

    def next(self, what: str) -> str:
        try:
            line = next(self._iterator)
        except StopIteration:
            raise InputFormatError(f"unexpected end of input while reading {what}") from None
        self.number += 1
        return line.rstrip("\r\n")

    def integer(self, token: str, what: str) -> int:
        value = _as_int(token)
        if value is None:
            raise InputFormatError(
                f"line {self.number}: expected a storable integer {what}, got {token!r}"
            )
        return value


def _as_int(token: str) -> Optional[int]:
    """Digits-only token as an int, or ``None`` if malformed or too large to store."""

    if not _INTEGER.fullmatch(token):
        return None
    value = int(token)
    return value if fits_integer_column(value) else None


def _read_flight(cursor: _Lines) -> FlightDefinition:
    tokens: List[str] = []
    # The five header fields may be spread over several lines.
    while len(tokens) < 5:
        tokens.extend(cursor.next("a flight header").split())
    if len(tokens) != 5:
        raise InputFormatError(f"line {cursor.number}: flight header has {len(tokens)} fields")
    flight_id = cursor.integer(tokens[0], "flight id")
    departure = cursor.integer(tokens[1], "departure airport")
    arrival = cursor.integer(tokens[2], "arrival airport")
    departure_time, arrival_time = tokens[3], tokens[4]

    class_count = cursor.integer(cursor.next("a seat class count").strip(), "seat class count")
    seat_classes = []
    for _ in range(class_count):
        fields = cursor.next("a seat class").split()
        if len(fields) != 2:
            raise InputFormatError(f"line {cursor.number}: seat class needs a bound and a price")
        seat_classes.append(
            SeatClassDefinition(
                upper_row_bound=cursor.integer(fields[0], "row bound"),
                price=cursor.integer(fields[1], "price"),
            )
        )
    return FlightDefinition(
        flight_id=flight_id,
        departure_airport=departure,
        arrival_airport=arrival,
        departure_time=departure_time,
        arrival_time=arrival_time,
        seat_classes=tuple(seat_classes),
    )


def _reserve(args: Sequence[str]) -> Optional[Command]:
    now, user_id, date, flight_id, seat_id = args
    flight = _as_int(flight_id)
    if flight is None:
        return None
    return Reserve(now=now, user_id=user_id, date=date, flight_id=flight, seat_id=seat_id)


def _cancel(args: Sequence[str]) -> Optional[Command]:
    now, user_id, reservation_id = args
    reservation = _as_int(reservation_id)
    if reservation is None:
        return None
    return Cancel(now=now, user_id=user_id, reservation_id=reservation)


def _seat_search(args: Sequence[str]) -> Optional[Command]:
    now, date, flight_id = args
    flight = _as_int(flight_id)
    if flight is None:
        return None
    return SeatSearch(date=date, flight_id=flight, now=now)


def _get_reservations(args: Sequence[str]) -> Optional[Command]:
    now, user_id = args
    return GetReservations(user_id=user_id, now=now)


def _flight_search(args: Sequence[str]) -> Optional[Command]:
    now, date, departure, arrival = args
    departure_airport, arrival_airport = _as_int(departure), _as_int(arrival)
    if departure_airport is None or arrival_airport is None:
        return None
    return FlightSearch(
        date=date,
        departure_airport=departure_airport,
        arrival_airport=arrival_airport,
        now=now,
    )


# name -> (argument count, builder)
_COMMANDS: Dict[str, Tuple[int, Callable[[Sequence[str]], Optional[Command]]]] = {
    Reserve.name: (5, _reserve),
    Cancel.name: (3, _cancel),
    SeatSearch.name: (3, _seat_search),
    GetReservations.name: (2, _get_reservations),
    FlightSearch.name: (4, _flight_search),
}


def parse_command(line: str) -> Optional[ParsedCommand]:
    """Parse one command line.

    Returns ``None`` for lines that do not name a known command, and an
    ``InvalidQuery`` when the arguments are the wrong count or type.
    """

    tokens = line.split()
    if not tokens or not tokens[0].endswith(":"):
        return None
    name = tokens[0][:-1]
    spec = _COMMANDS.get(name)
    if spec is None:
        return None
    arity, builder = spec
    args = tokens[1:]
    if len(args) != arity:
        return InvalidQuery(name)
    command = builder(args)
    return command if command is not None else InvalidQuery(name)


def parse_catalog(cursor: _Lines) -> List[FlightDefinition]:
    count = cursor.integer(cursor.next("the flight count").strip(), "flight count")
    return [_read_flight(cursor) for _ in range(count)]


def parse_commands(cursor: _Lines) -> Iterator[ParsedCommand]:
    count = cursor.integer(cursor.next("the command count").strip(), "command count")
    for _ in range(count):
        line = cursor.next("a command")
        command = parse_command(line)
        if command is None:
            logger.warning("Skipping unrecognised command on line %s: %r", cursor.number, line)
            continue
        yield command


def read_input(lines: Iterable[str]) -> Tuple[List[FlightDefinition], Iterator[ParsedCommand]]:
    """Split an input stream into the catalog and a lazy command iterator."""

    cursor = _Lines(lines)
    definitions = parse_catalog(cursor)
    return definitions, parse_commands(cursor)


__all__ = [
    "InputFormatError",
    "ParsedCommand",
    "parse_command",
    "read_input",
]
