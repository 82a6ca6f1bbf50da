"""Timestamp parsing and the pre-departure deadline rule."""
from __future__ import annotations

from datetime import datetime, timedelta

TIMESTAMP_FORMAT = "%Y/%m/%d-%H:%M:%S"

# Reservations and cancellations close this long before departure.
DEADLINE = timedelta(hours=2)


class InvalidTimestampError(ValueError):
    """Raised when a string does not match ``YYYY/MM/DD-HH:MM:SS``."""


def parse_timestamp(text: str) -> datetime:
    """Parse ``text`` in the fixed ``YYYY/MM/DD-HH:MM:SS`` format."""

    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as exc:
        raise InvalidTimestampError(f"invalid timestamp {text!r}") from exc


def combine(date: str, time: str) -> datetime:
    """Join a ``YYYY/MM/DD`` date and an ``HH:MM:SS`` time into one instant."""

    return parse_timestamp(f"{date}-{time}")


def is_too_late(now: datetime, departure: datetime) -> bool:
    try:
        return now + DEADLINE >= departure
    except OverflowError:
        # now is within DEADLINE of datetime.max, so every departure is inside the window
        return True


__all__ = [
    "TIMESTAMP_FORMAT",
    "DEADLINE",
    "InvalidTimestampError",
    "parse_timestamp",
    "combine",
    "is_too_late",
]
