"""Flight catalog: loaded once, read by every command."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from .errors import CatalogError
from .models import Flight, SeatClass, fits_integer_column
from .seats import ROW_COUNT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeatClassDefinition:
    upper_row_bound: int
    price: int


@dataclass(frozen=True)
class FlightDefinition:
    """A catalog entry as produced by the input parser."""

    flight_id: int
    departure_airport: int
    arrival_airport: int
    departure_time: str
    arrival_time: str
    seat_classes: Tuple[SeatClassDefinition, ...] = field(default_factory=tuple)


def _validate_seat_classes(flight_id: int, seat_classes: Sequence[SeatClassDefinition]) -> None:
    if not seat_classes:
        raise CatalogError(f"flight {flight_id} has no seat classes")
    previous = 0
    for index, seat_class in enumerate(seat_classes, start=1):
        if seat_class.upper_row_bound <= previous:
            raise CatalogError(
                f"flight {flight_id}: class {index} bound {seat_class.upper_row_bound} "
                f"must be greater than {previous}"
            )
        if seat_class.price < 0:
            raise CatalogError(f"flight {flight_id}: class {index} has a negative price")
        if not (fits_integer_column(seat_class.upper_row_bound) and fits_integer_column(seat_class.price)):
            raise CatalogError(f"flight {flight_id}: class {index} bound or price is too large")
        previous = seat_class.upper_row_bound
    if previous < ROW_COUNT:
        logger.warning(
            "Flight %s seat classes stop at row %s; rows %s-%s cannot be reserved",
            flight_id,
            previous,
            previous + 1,
            ROW_COUNT,
        )


def add_flight(
    session: Session,
    *,
    flight_id: int,
    departure_airport: int,
    arrival_airport: int,
    departure_time: str,
    arrival_time: str,
    seat_classes: Iterable[Tuple[int, int] | SeatClassDefinition],
) -> Flight:
    """Create a catalog entry with its ordered seat classes."""

    classes = [
        item if isinstance(item, SeatClassDefinition) else SeatClassDefinition(*item)
        for item in seat_classes
    ]
    if not all(fits_integer_column(value) for value in (flight_id, departure_airport, arrival_airport)):
        raise CatalogError(f"flight {flight_id}: id or airport code is out of range")
    _validate_seat_classes(flight_id, classes)
    if session.get(Flight, flight_id) is not None:
        raise CatalogError(f"flight {flight_id} is already loaded")

    flight = Flight(
        id=flight_id,
        departure_airport=departure_airport,
        arrival_airport=arrival_airport,
        departure_time=departure_time,
        arrival_time=arrival_time,
        seat_classes=[
            SeatClass(position=index, upper_row_bound=item.upper_row_bound, price=item.price)
            for index, item in enumerate(classes, start=1)
        ],
    )
    session.add(flight)
    session.flush()
    logger.debug("Loaded flight %s with %s seat classes", flight_id, len(classes))
    return flight


def get_flight(session: Session, flight_id: int) -> Optional[Flight]:
    if not fits_integer_column(flight_id):
        return None
    return session.get(Flight, flight_id)


def flights_on_route(session: Session, departure_airport: int, arrival_airport: int) -> List[Flight]:
    """Flights with exactly this airport pair, ordered by departure time then id."""

    if not (fits_integer_column(departure_airport) and fits_integer_column(arrival_airport)):
        return []
    stmt = (
        select(Flight)
        .where(
            Flight.departure_airport == departure_airport,
            Flight.arrival_airport == arrival_airport,
        )
        .order_by(Flight.departure_time, Flight.id)
    )
    return list(session.scalars(stmt))


__all__ = [
    "SeatClassDefinition",
    "FlightDefinition",
    "add_flight",
    "get_flight",
    "flights_on_route",
]
