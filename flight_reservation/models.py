"""SQLAlchemy models for the flight reservation processor."""
from __future__ import annotations

from typing import List

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# SQLite INTEGER is a signed 64-bit value; larger ids cannot be bound as parameters.
INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1


def fits_integer_column(value: int) -> bool:
    return INTEGER_MIN <= value <= INTEGER_MAX


class Base(DeclarativeBase):
    pass


class Flight(Base):
    __tablename__ = "flights"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    departure_airport: Mapped[int] = mapped_column(Integer, nullable=False)
    arrival_airport: Mapped[int] = mapped_column(Integer, nullable=False)
    departure_time: Mapped[str] = mapped_column(String(8), nullable=False)
    arrival_time: Mapped[str] = mapped_column(String(8), nullable=False)

    seat_classes: Mapped[List["SeatClass"]] = relationship(
        back_populates="flight",
        order_by="SeatClass.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    reservations: Mapped[List["Reservation"]] = relationship(back_populates="flight")


class SeatClass(Base):
    __tablename__ = "seat_classes"
    __table_args__ = (
        CheckConstraint("upper_row_bound > 0", name="ck_upper_row_bound_positive"),
        CheckConstraint("price >= 0", name="ck_price_non_negative"),
    )

    flight_id: Mapped[int] = mapped_column(
        ForeignKey("flights.id", ondelete="CASCADE"), primary_key=True
    )
    # 1-based index of the class within its flight
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    upper_row_bound: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    flight: Mapped[Flight] = relationship(back_populates="seat_classes")


class SeatHold(Base):
    """Occupancy flag for one seat of one flight on one date."""

    __tablename__ = "seat_holds"

    date: Mapped[str] = mapped_column(String(10), primary_key=True)
    flight_id: Mapped[int] = mapped_column(ForeignKey("flights.id"), primary_key=True)
    seat_id: Mapped[str] = mapped_column(String(4), primary_key=True)
    held: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        Index(
            "uq_active_seat",
            "date",
            "flight_id",
            "seat_id",
            unique=True,
            sqlite_where=text("cancelled = 0"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    flight_id: Mapped[int] = mapped_column(ForeignKey("flights.id"), nullable=False)
    seat_id: Mapped[str] = mapped_column(String(4), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    flight: Mapped[Flight] = relationship(back_populates="reservations")
