"""Text and table rendering of command results."""
from __future__ import annotations

from typing import List, Sequence

from tabulate import tabulate

from .commands import (
    CommandResult,
    FlightAvailability,
    FlightSearch,
    GetReservations,
    InvalidQuery,
    ReservationConfirmation,
    ReservationEntry,
    SeatMap,
)
from .errors import FailureReason


def render_invalid_query(query: InvalidQuery) -> str:
    return f"{query.name}: {FailureReason.INVALID_QUERY.value}"


def _reservation_line(entry: ReservationEntry) -> str:
    return (
        f"reservation id: {entry.reservation_id}, price: {entry.price}, "
        f"seat: {entry.date} {entry.flight_id} {entry.seat_id}, "
        f"route: {entry.departure_airport} ({entry.departure_time}) -> "
        f"{entry.arrival_airport} ({entry.arrival_time})"
    )


def _flight_lines(flight: FlightAvailability) -> List[str]:
    lines = [f"{flight.flight_id} {flight.departure_time} {flight.arrival_time}"]
    for seat_class in flight.classes:
        lines.append(
            f"class {seat_class.class_index}: {seat_class.available} seats available. "
            f"price = {seat_class.price}"
        )
    return lines


def _reservations_table(entries: Sequence[ReservationEntry]) -> str:
    rows = [
        [
            entry.reservation_id,
            entry.price,
            entry.date,
            entry.flight_id,
            entry.seat_id,
            f"{entry.departure_airport} ({entry.departure_time})",
            f"{entry.arrival_airport} ({entry.arrival_time})",
        ]
        for entry in entries
    ]
    headers = ["Reservation", "Price", "Date", "Flight", "Seat", "Departure", "Arrival"]
    return tabulate(rows, headers=headers, tablefmt="github")


def _flights_table(flights: Sequence[FlightAvailability]) -> str:
    rows = [
        [
            flight.flight_id,
            flight.departure_time,
            flight.arrival_time,
            seat_class.class_index,
            seat_class.available,
            seat_class.price,
        ]
        for flight in flights
        for seat_class in flight.classes
    ]
    headers = ["Flight", "Departs", "Arrives", "Class", "Available", "Price"]
    return tabulate(rows, headers=headers, tablefmt="github")


def render_result(result: CommandResult, *, table: bool = False) -> str:
    """Render ``result`` in the line format, or as tables for list payloads."""

    prefix = f"{result.command}:"
    if not result.ok:
        return f"{prefix} {result.reason.value}"

    payload = result.payload
    if isinstance(payload, ReservationConfirmation):
        return f"{prefix} {payload.reservation_id} {payload.price}"
    if isinstance(payload, SeatMap):
        return "\n".join([prefix] + [line for _, line in payload.lines])
    if result.command == GetReservations.name:
        header = f"{prefix} {len(payload)}"
        if table:
            return "\n".join([header, _reservations_table(payload)]) if payload else header
        return "\n".join([header] + [_reservation_line(entry) for entry in payload])
    if result.command == FlightSearch.name:
        header = f"{prefix} {len(payload)}"
        if table:
            return "\n".join([header, _flights_table(payload)]) if payload else header
        lines = [header]
        for flight in payload:
            lines.extend(_flight_lines(flight))
        return "\n".join(lines)
    return f"{prefix} success"


__all__ = ["render_result", "render_invalid_query"]
