"""Reservation ledger: creation, lookup and cancellation state."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from .models import Reservation, fits_integer_column


def record_reservation(
    session: Session,
    *,
    user_id: str,
    date: str,
    flight_id: int,
    seat_id: str,
    price: int,
) -> Reservation:
    """Store a new active reservation; the id is assigned on flush."""

    reservation = Reservation(
        user_id=user_id,
        date=date,
        flight_id=flight_id,
        seat_id=seat_id,
        price=price,
        cancelled=False,
    )
    session.add(reservation)
    session.flush()
    return reservation


def get_active_reservation(session: Session, reservation_id: int) -> Optional[Reservation]:
    """Return the reservation unless it is missing or already cancelled."""

    if not fits_integer_column(reservation_id):
        return None
    reservation = session.get(Reservation, reservation_id)
    if reservation is None or reservation.cancelled:
        return None
    return reservation


def mark_cancelled(session: Session, reservation: Reservation) -> None:
    reservation.cancelled = True
    session.flush()


def active_reservations_for_user(session: Session, user_id: str) -> List[Reservation]:
    stmt = (
        select(Reservation)
        .where(Reservation.user_id == user_id, Reservation.cancelled.is_(False))
        .options(selectinload(Reservation.flight))
        .order_by(Reservation.id)
    )
    return list(session.scalars(stmt))


__all__ = [
    "record_reservation",
    "get_active_reservation",
    "mark_cancelled",
    "active_reservations_for_user",
]
