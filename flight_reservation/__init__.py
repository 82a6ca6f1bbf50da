"""In-memory flight reservation processor."""
from .catalog import FlightDefinition, SeatClassDefinition
from .cli import main as cli_main
from .commands import (
    Cancel,
    CommandResult,
    FlightSearch,
    GetReservations,
    InvalidQuery,
    Reserve,
    SeatSearch,
)
from .database import init_db
from .engine import ReservationEngine
from .errors import CatalogError, FailureReason, ReservationError
from .parser import InputFormatError, parse_command, read_input
from .render import render_result

__all__ = [
    "ReservationEngine",
    "FlightDefinition",
    "SeatClassDefinition",
    "Reserve",
    "Cancel",
    "SeatSearch",
    "GetReservations",
    "FlightSearch",
    "InvalidQuery",
    "CommandResult",
    "FailureReason",
    "ReservationError",
    "CatalogError",
    "InputFormatError",
    "init_db",
    "parse_command",
    "read_input",
    "render_result",
    "cli_main",
]
