"""Per-date seat occupancy keyed by ``(date, flight_id, seat_id)``."""
from __future__ import annotations

from typing import Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import SeatHold


def is_held(session: Session, date: str, flight_id: int, seat_id: str) -> bool:
    hold = session.get(SeatHold, (date, flight_id, seat_id))
    return bool(hold and hold.held)


def _set_held(session: Session, date: str, flight_id: int, seat_id: str, held: bool) -> None:
    hold = session.get(SeatHold, (date, flight_id, seat_id))
    if hold is None:
        hold = SeatHold(date=date, flight_id=flight_id, seat_id=seat_id, held=held)
        session.add(hold)
    else:
        hold.held = held
    session.flush()


def hold_seat(session: Session, date: str, flight_id: int, seat_id: str) -> None:
    _set_held(session, date, flight_id, seat_id, True)


def release_seat(session: Session, date: str, flight_id: int, seat_id: str) -> None:
    # The row stays behind with held=False; absent and released read the same.
    _set_held(session, date, flight_id, seat_id, False)


def held_seats(session: Session, date: str, flight_id: int) -> Set[str]:
    """Seat ids currently held on ``flight_id`` for ``date``."""

    stmt = select(SeatHold.seat_id).where(
        SeatHold.date == date,
        SeatHold.flight_id == flight_id,
        SeatHold.held.is_(True),
    )
    return set(session.scalars(stmt))


__all__ = ["is_held", "hold_seat", "release_seat", "held_seats"]
