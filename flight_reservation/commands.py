"""Structured commands accepted by the engine and the results it returns."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Tuple, Union

from .errors import FailureReason


@dataclass(frozen=True)
class Reserve:
    name: ClassVar[str] = "reserve"

    now: str
    user_id: str
    date: str
    flight_id: int
    seat_id: str


@dataclass(frozen=True)
class Cancel:
    name: ClassVar[str] = "cancel"

    now: str
    user_id: str
    reservation_id: int


@dataclass(frozen=True)
class SeatSearch:
    name: ClassVar[str] = "seat-search"

    date: str
    flight_id: int
    now: Optional[str] = None


@dataclass(frozen=True)
class GetReservations:
    name: ClassVar[str] = "get-reservations"

    user_id: str
    now: Optional[str] = None


@dataclass(frozen=True)
class FlightSearch:
    name: ClassVar[str] = "flight-search"

    date: str
    departure_airport: int
    arrival_airport: int
    now: Optional[str] = None


@dataclass(frozen=True)
class InvalidQuery:
    """A command line the parser could not turn into a command."""

    name: str


Command = Union[Reserve, Cancel, SeatSearch, GetReservations, FlightSearch]

COMMAND_TYPES: Dict[str, type] = {
    command_type.name: command_type
    for command_type in (Reserve, Cancel, SeatSearch, GetReservations, FlightSearch)
}


@dataclass(frozen=True)
class ReservationConfirmation:
    reservation_id: int
    price: int


@dataclass(frozen=True)
class SeatMap:
    """Seat-search grid: one 20-symbol line per seat type, keyed by seat type."""

    lines: Tuple[Tuple[str, str], ...]

    def line_for(self, seat_type: str) -> str:
        return dict(self.lines)[seat_type]


@dataclass(frozen=True)
class ReservationEntry:
    reservation_id: int
    price: int
    date: str
    flight_id: int
    seat_id: str
    departure_airport: int
    departure_time: str
    arrival_airport: int
    arrival_time: str


@dataclass(frozen=True)
class ClassAvailability:
    class_index: int
    available: int
    price: int


@dataclass(frozen=True)
class FlightAvailability:
    flight_id: int
    departure_time: str
    arrival_time: str
    classes: Tuple[ClassAvailability, ...] = field(default_factory=tuple)


Payload = Union[
    None,
    ReservationConfirmation,
    SeatMap,
    List[ReservationEntry],
    List[FlightAvailability],
]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command: a payload on success, a reason on failure."""

    command: str
    ok: bool
    payload: Payload = None
    reason: Optional[FailureReason] = None

    @classmethod
    def success(cls, command: str, payload: Payload = None) -> "CommandResult":
        return cls(command=command, ok=True, payload=payload)

    @classmethod
    def failure(cls, command: str, reason: FailureReason) -> "CommandResult":
        return cls(command=command, ok=False, reason=reason)


__all__ = [
    "Reserve",
    "Cancel",
    "SeatSearch",
    "GetReservations",
    "FlightSearch",
    "InvalidQuery",
    "Command",
    "COMMAND_TYPES",
    "ReservationConfirmation",
    "SeatMap",
    "ReservationEntry",
    "ClassAvailability",
    "FlightAvailability",
    "Payload",
    "CommandResult",
]
