"""Seat universe and seat-class lookup."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Sequence, Tuple

# Every flight has the same cabin regardless of how its seat classes are laid out.
ROW_COUNT = 20
SEAT_TYPES: Tuple[str, ...] = tuple("ABCD")

_SEAT_ID_PATTERN = re.compile(r"^([0-9]+)([A-Z])$")


class InvalidSeatError(ValueError):
    """Raised when a seat id cannot be mapped to a seat class."""


class SeatClassLike(Protocol):
    upper_row_bound: int
    price: int


@dataclass(frozen=True)
class SeatId:
    row: int
    seat_type: str

    def __str__(self) -> str:
        return f"{self.row}{self.seat_type}"


def parse_seat_id(seat_id: str) -> SeatId:
    match = _SEAT_ID_PATTERN.match(seat_id or "")
    if not match:
        raise InvalidSeatError(f"malformed seat id {seat_id!r}")
    row_text, seat_type = match.groups()
    if seat_type not in SEAT_TYPES:
        raise InvalidSeatError(f"unknown seat type {seat_type!r}")
    row = int(row_text)
    if not 1 <= row <= ROW_COUNT:
        raise InvalidSeatError(f"row {row} outside 1..{ROW_COUNT}")
    return SeatId(row=row, seat_type=seat_type)


def class_for_row(seat_classes: Sequence[SeatClassLike], row: int) -> Optional[Tuple[int, int]]:
    """Return ``(class_index, price)`` of the first class covering ``row``."""

    if row <= 0:
        return None
    for index, seat_class in enumerate(seat_classes, start=1):
        if row <= seat_class.upper_row_bound:
            return index, seat_class.price
    return None


def classify(seat_classes: Sequence[SeatClassLike], seat_id: str) -> Tuple[int, int]:
    """Map ``seat_id`` to its 1-based class index and price."""

    parsed = parse_seat_id(seat_id)
    found = class_for_row(seat_classes, parsed.row)
    if found is None:
        raise InvalidSeatError(f"no seat class covers row {parsed.row}")
    return found


def class_rows(seat_classes: Sequence[SeatClassLike], index: int) -> range:
    """Rows covered by the 1-based class ``index``, clipped to the seat universe."""

    lower = seat_classes[index - 2].upper_row_bound if index > 1 else 0
    upper = min(seat_classes[index - 1].upper_row_bound, ROW_COUNT)
    return range(lower + 1, upper + 1)


def iter_seat_ids(rows: range = range(1, ROW_COUNT + 1)) -> Iterator[str]:
    for row in rows:
        for seat_type in SEAT_TYPES:
            yield f"{row}{seat_type}"


__all__ = [
    "ROW_COUNT",
    "SEAT_TYPES",
    "InvalidSeatError",
    "SeatId",
    "parse_seat_id",
    "class_for_row",
    "classify",
    "class_rows",
    "iter_seat_ids",
]
