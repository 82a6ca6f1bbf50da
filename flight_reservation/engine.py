"""Reservation engine: owns the catalog, ledger and occupancy state."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from . import catalog, services
from .commands import (
    Cancel,
    Command,
    CommandResult,
    FlightSearch,
    GetReservations,
    Payload,
    Reserve,
    SeatSearch,
)
from .catalog import FlightDefinition, SeatClassDefinition
from .database import DEFAULT_DB_URL, init_db
from .errors import ReservationError

logger = logging.getLogger(__name__)

Handler = Callable[[Session, Command], Payload]


def _reserve(session: Session, command: Reserve) -> Payload:
    return services.reserve_seat(
        session,
        now=command.now,
        user_id=command.user_id,
        date=command.date,
        flight_id=command.flight_id,
        seat_id=command.seat_id,
    )


def _cancel(session: Session, command: Cancel) -> Payload:
    services.cancel_reservation(
        session,
        now=command.now,
        user_id=command.user_id,
        reservation_id=command.reservation_id,
    )
    return None


def _seat_search(session: Session, command: SeatSearch) -> Payload:
    return services.search_seats(session, date=command.date, flight_id=command.flight_id)


def _get_reservations(session: Session, command: GetReservations) -> Payload:
    return services.list_reservations(session, user_id=command.user_id)


def _flight_search(session: Session, command: FlightSearch) -> Payload:
    return services.search_flights(
        session,
        date=command.date,
        departure_airport=command.departure_airport,
        arrival_airport=command.arrival_airport,
    )


_HANDLERS: Dict[type, Handler] = {
    Reserve: _reserve,
    Cancel: _cancel,
    SeatSearch: _seat_search,
    GetReservations: _get_reservations,
    FlightSearch: _flight_search,
}


class ReservationEngine:
    """Executes commands one at a time against a private in-memory database.

    Each engine builds its own schema on construction, so two engines never
    share flights or reservations.
    """

    def __init__(self, db_url: Optional[str] = None, *, echo: bool = False) -> None:
        self._engine, self._session_factory = init_db(db_url or DEFAULT_DB_URL, echo=echo)
        self._lock = threading.Lock()

    def load_flight(
        self,
        flight_id: int,
        departure_airport: int,
        arrival_airport: int,
        departure_time: str,
        arrival_time: str,
        seat_classes: Iterable[Tuple[int, int] | SeatClassDefinition],
    ) -> None:
        """Add one catalog entry. Raises ``CatalogError`` for malformed entries."""

        with self._lock, self._session_factory.begin() as session:
            catalog.add_flight(
                session,
                flight_id=flight_id,
                departure_airport=departure_airport,
                arrival_airport=arrival_airport,
                departure_time=departure_time,
                arrival_time=arrival_time,
                seat_classes=seat_classes,
            )

    def load_catalog(self, definitions: Iterable[FlightDefinition]) -> int:
        count = 0
        for definition in definitions:
            self.load_flight(
                definition.flight_id,
                definition.departure_airport,
                definition.arrival_airport,
                definition.departure_time,
                definition.arrival_time,
                definition.seat_classes,
            )
            count += 1
        logger.info("Catalog loaded with %s flights", count)
        return count

    def execute(self, command: Command) -> CommandResult:
        """Run ``command`` in its own transaction and report the outcome.

        Rejections never raise; they come back as a failed ``CommandResult`` and
        leave the state exactly as it was before the command.
        """

        handler = _HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"unsupported command {command!r}")

        with self._lock:
            try:
                with self._session_factory.begin() as session:
                    payload = handler(session, command)
            except ReservationError as exc:
                logger.info("%s rejected: %s (%s)", command.name, exc.reason.value, exc)
                return CommandResult.failure(command.name, exc.reason)
        return CommandResult.success(command.name, payload)

    def close(self) -> None:
        self._engine.dispose()

    def __enter__(self) -> "ReservationEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ReservationEngine"]
