"""Failure taxonomy shared by the reservation handlers."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """Stable reason strings reported for rejected commands."""

    FLIGHT_NOT_FOUND = "flight not found"
    RESERVATION_NOT_FOUND = "reservation not found"
    INVALID_DATETIME = "invalid datetime"
    INVALID_FLIGHT_DATETIME = "invalid flight datetime"
    INVALID_SEAT_ID = "invalid seat_id"
    ALREADY_RESERVED = "already reserved"
    UNAUTHORIZED = "unauthorized operation"
    TOO_LATE = "too late"
    INVALID_QUERY = "invalid query"

    def __str__(self) -> str:
        return self.value


class ReservationError(RuntimeError):
    """Raised by a command handler when a command is rejected."""

    def __init__(self, reason: FailureReason, detail: Optional[str] = None) -> None:
        super().__init__(detail or reason.value)
        self.reason = reason


class NotFoundError(ReservationError):
    """A flight or reservation id does not resolve."""


class ValidationError(ReservationError):
    """A datetime or seat id could not be parsed or classified."""


class ConflictError(ReservationError):
    """The seat is already held by another reservation."""


class AuthorizationError(ReservationError):
    """The requester does not own the reservation."""


class TooLateError(ReservationError):
    """The command arrived at or after the pre-departure deadline."""


class CatalogError(ValueError):
    """Raised when a flight definition cannot be loaded into the catalog."""


__all__ = [
    "FailureReason",
    "ReservationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthorizationError",
    "TooLateError",
    "CatalogError",
]
