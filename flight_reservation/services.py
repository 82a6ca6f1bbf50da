"""Command handlers for the flight reservation processor.

Each handler runs inside a single session and raises a ``ReservationError``
subclass on rejection. Checks run in a fixed order and the first failing check
decides the reported reason, so callers can rely on which reason wins when a
command is wrong in more than one way.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import catalog, ledger, occupancy
from .commands import (
    ClassAvailability,
    FlightAvailability,
    ReservationConfirmation,
    ReservationEntry,
    SeatMap,
)
from .errors import (
    AuthorizationError,
    ConflictError,
    FailureReason,
    NotFoundError,
    TooLateError,
    ValidationError,
)
from .models import Flight
from .seats import (
    ROW_COUNT,
    SEAT_TYPES,
    InvalidSeatError,
    class_for_row,
    class_rows,
    classify,
    iter_seat_ids,
    parse_seat_id,
)
from .timepolicy import InvalidTimestampError, combine, is_too_late, parse_timestamp

logger = logging.getLogger(__name__)

UNCOVERED_SEAT = "-"
HELD_SEAT = "X"


def _require_flight(session: Session, flight_id: int) -> Flight:
    flight = catalog.get_flight(session, flight_id)
    if flight is None:
        raise NotFoundError(FailureReason.FLIGHT_NOT_FOUND, f"flight {flight_id} not found")
    return flight


def _parse_now(now: str) -> datetime:
    try:
        return parse_timestamp(now)
    except InvalidTimestampError as exc:
        raise ValidationError(FailureReason.INVALID_DATETIME, str(exc)) from exc


def _departure(flight: Flight, date: str) -> datetime:
    try:
        return combine(date, flight.departure_time)
    except InvalidTimestampError as exc:
        raise ValidationError(FailureReason.INVALID_FLIGHT_DATETIME, str(exc)) from exc


def _check_deadline(now: datetime, departure: datetime) -> None:
    if is_too_late(now, departure):
        raise TooLateError(
            FailureReason.TOO_LATE,
            f"{now:%Y/%m/%d-%H:%M:%S} is past the deadline for {departure:%Y/%m/%d-%H:%M:%S}",
        )


def _seat_key(seat_id: str) -> str:
    """Canonical spelling of a seat id, so "01A" and "1A" hold the same seat."""

    try:
        return str(parse_seat_id(seat_id))
    except InvalidSeatError:
        return seat_id


def reserve_seat(
    session: Session,
    *,
    now: str,
    user_id: str,
    date: str,
    flight_id: int,
    seat_id: str,
) -> ReservationConfirmation:
    """Hold ``seat_id`` on ``flight_id`` for ``date`` and record the reservation."""

    flight = _require_flight(session, flight_id)
    current = _parse_now(now)
    departure = _departure(flight, date)
    _check_deadline(current, departure)
    seat_key = _seat_key(seat_id)
    if occupancy.is_held(session, date, flight_id, seat_key):
        raise ConflictError(FailureReason.ALREADY_RESERVED, f"{seat_key} is already held")
    try:
        _, price = classify(flight.seat_classes, seat_key)
    except InvalidSeatError as exc:
        raise ValidationError(FailureReason.INVALID_SEAT_ID, str(exc)) from exc

    # uq_active_seat rejects a second active reservation even if the hold table disagrees.
    try:
        reservation = ledger.record_reservation(
            session,
            user_id=user_id,
            date=date,
            flight_id=flight_id,
            seat_id=seat_key,
            price=price,
        )
    except IntegrityError as exc:
        raise ConflictError(FailureReason.ALREADY_RESERVED, f"{seat_key} is already held") from exc
    occupancy.hold_seat(session, date, flight_id, seat_key)
    logger.debug(
        "Reservation %s: %s holds %s on flight %s for %s",
        reservation.id,
        user_id,
        seat_key,
        flight_id,
        date,
    )
    return ReservationConfirmation(reservation_id=reservation.id, price=price)


def cancel_reservation(session: Session, *, now: str, user_id: str, reservation_id: int) -> None:
    """Cancel a reservation owned by ``user_id`` and free its seat."""

    reservation = ledger.get_active_reservation(session, reservation_id)
    if reservation is None:
        raise NotFoundError(
            FailureReason.RESERVATION_NOT_FOUND, f"reservation {reservation_id} not found"
        )
    if reservation.user_id != user_id:
        raise AuthorizationError(
            FailureReason.UNAUTHORIZED,
            f"{user_id} does not own reservation {reservation_id}",
        )
    current = _parse_now(now)
    departure = _departure(reservation.flight, reservation.date)
    _check_deadline(current, departure)

    ledger.mark_cancelled(session, reservation)
    occupancy.release_seat(session, reservation.date, reservation.flight_id, reservation.seat_id)
    logger.debug("Reservation %s cancelled by %s", reservation_id, user_id)


def search_seats(session: Session, *, date: str, flight_id: int) -> SeatMap:
    """Availability grid of ``flight_id`` on ``date``."""

    flight = _require_flight(session, flight_id)
    held = occupancy.held_seats(session, date, flight_id)
    row_classes = {row: class_for_row(flight.seat_classes, row) for row in range(1, ROW_COUNT + 1)}

    lines = []
    for seat_type in SEAT_TYPES:
        symbols = []
        for row in range(1, ROW_COUNT + 1):
            found = row_classes[row]
            if f"{row}{seat_type}" in held:
                symbols.append(HELD_SEAT)
            elif found is None:
                symbols.append(UNCOVERED_SEAT)
            else:
                symbols.append(str(found[0]))
        lines.append((seat_type, "".join(symbols)))
    return SeatMap(lines=tuple(lines))


def list_reservations(session: Session, *, user_id: str) -> List[ReservationEntry]:
    """Active reservations of ``user_id`` ordered by departure, then id."""

    reservations = ledger.active_reservations_for_user(session, user_id)
    ordered = sorted(
        reservations,
        key=lambda reservation: (
            combine(reservation.date, reservation.flight.departure_time),
            reservation.id,
        ),
    )
    return [
        ReservationEntry(
            reservation_id=reservation.id,
            price=reservation.price,
            date=reservation.date,
            flight_id=reservation.flight_id,
            seat_id=reservation.seat_id,
            departure_airport=reservation.flight.departure_airport,
            departure_time=reservation.flight.departure_time,
            arrival_airport=reservation.flight.arrival_airport,
            arrival_time=reservation.flight.arrival_time,
        )
        for reservation in ordered
    ]


def search_flights(
    session: Session,
    *,
    date: str,
    departure_airport: int,
    arrival_airport: int,
) -> List[FlightAvailability]:
    """Flights on the route with free seats per class for ``date``."""

    results: List[FlightAvailability] = []
    for flight in catalog.flights_on_route(session, departure_airport, arrival_airport):
        held = occupancy.held_seats(session, date, flight.id)
        classes = []
        for index, seat_class in enumerate(flight.seat_classes, start=1):
            available = sum(
                1
                for seat_id in iter_seat_ids(class_rows(flight.seat_classes, index))
                if seat_id not in held
            )
            classes.append(
                ClassAvailability(class_index=index, available=available, price=seat_class.price)
            )
        results.append(
            FlightAvailability(
                flight_id=flight.id,
                departure_time=flight.departure_time,
                arrival_time=flight.arrival_time,
                classes=tuple(classes),
            )
        )
    return results


__all__ = [
    "reserve_seat",
    "cancel_reservation",
    "search_seats",
    "list_reservations",
    "search_flights",
]
