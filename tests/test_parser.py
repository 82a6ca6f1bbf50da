from __future__ import annotations

import pytest

from flight_reservation.catalog import FlightDefinition, SeatClassDefinition
from flight_reservation.commands import (
    Cancel,
    FlightSearch,
    GetReservations,
    InvalidQuery,
    Reserve,
    SeatSearch,
)
from flight_reservation.parser import InputFormatError, parse_command, read_input


def test_read_input_splits_catalog_and_commands():
    lines = [
        "2",
        "1 10 20",
        "10:00:00 13:00:00",
        "2",
        "5 100",
        "20 50",
        "7 20 10 06:00:00 08:00:00",
        "1",
        "20 70",
        "2",
        "get-reservations: 2024/03/15-07:00:00 alice",
        "seat-search: 2024/03/15-07:00:00 2024/03/15 7",
    ]

    definitions, commands = read_input(lines)

    assert definitions == [
        FlightDefinition(
            1, 10, 20, "10:00:00", "13:00:00",
            (SeatClassDefinition(5, 100), SeatClassDefinition(20, 50)),
        ),
        FlightDefinition(7, 20, 10, "06:00:00", "08:00:00", (SeatClassDefinition(20, 70),)),
    ]
    assert list(commands) == [
        GetReservations(user_id="alice", now="2024/03/15-07:00:00"),
        SeatSearch(date="2024/03/15", flight_id=7, now="2024/03/15-07:00:00"),
    ]


def test_parse_each_command():
    assert parse_command("reserve: 2024/03/15-07:00:00 alice 2024/03/15 1 1A") == Reserve(
        now="2024/03/15-07:00:00", user_id="alice", date="2024/03/15", flight_id=1, seat_id="1A"
    )
    assert parse_command("cancel: 2024/03/15-07:00:00 alice 3") == Cancel(
        now="2024/03/15-07:00:00", user_id="alice", reservation_id=3
    )
    assert parse_command("flight-search: 2024/03/15-07:00:00 2024/03/15 10 20") == FlightSearch(
        date="2024/03/15", departure_airport=10, arrival_airport=20, now="2024/03/15-07:00:00"
    )



def test_largest_storable_id_still_parses():
    assert parse_command("cancel: 2024/03/15-07:00:00 alice 9223372036854775807") == Cancel(
        now="2024/03/15-07:00:00", user_id="alice", reservation_id=2**63 - 1
    )

@pytest.mark.parametrize(
    "line, name",
    [
        ("reserve: 2024/03/15-07:00:00 alice 2024/03/15 1", "reserve"),
        ("reserve: 2024/03/15-07:00:00 alice 2024/03/15 one 1A", "reserve"),
        ("cancel: 2024/03/15-07:00:00 alice", "cancel"),
        ("cancel: 2024/03/15-07:00:00 alice -1", "cancel"),
        ("seat-search: 2024/03/15-07:00:00 2024/03/15", "seat-search"),
        ("get-reservations: 2024/03/15-07:00:00 alice extra", "get-reservations"),
        ("flight-search: 2024/03/15-07:00:00 2024/03/15 10 x", "flight-search"),
        ("reserve: 2024/03/15-07:00:00 alice 2024/03/15 18446744073709551616 1A", "reserve"),
        ("cancel: 2024/03/15-07:00:00 alice 99999999999999999999", "cancel"),
        ("seat-search: 2024/03/15-07:00:00 2024/03/15 9223372036854775808", "seat-search"),
        ("flight-search: 2024/03/15-07:00:00 2024/03/15 10 18446744073709551616", "flight-search"),
    ],
)
def test_malformed_commands_become_invalid_queries(line, name):
    assert parse_command(line) == InvalidQuery(name)


@pytest.mark.parametrize("line", ["", "   ", "book: 1 2 3", "reserve 2024/03/15-07:00:00 a 2024/03/15 1 1A"])
def test_unknown_lines_are_ignored(line):
    assert parse_command(line) is None


def test_unknown_commands_are_skipped_from_stream():
    _, commands = read_input(["0", "2", "hello: world", "get-reservations: 2024/03/15-07:00:00 bob"])

    assert list(commands) == [GetReservations(user_id="bob", now="2024/03/15-07:00:00")]


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["x"],
        ["1", "a 10 20 10:00:00 11:00:00", "1", "20 100", "0"],
        ["1", "1 10 20 10:00:00 11:00:00", "2", "20 100"],
        ["1", "1 10 20 10:00:00 11:00:00", "1", "20"],
        ["1", "1 10 20 10:00:00 11:00:00 extra", "1", "20 100", "0"],
        ["1", "18446744073709551616 10 20 10:00:00 11:00:00", "1", "20 100", "0"],
        ["1", "1 10 20 10:00:00 11:00:00", "1", "20 9223372036854775808", "0"],
    ],
)
def test_malformed_catalog_raises(lines):
    with pytest.raises(InputFormatError):
        definitions, commands = read_input(lines)
        list(commands)
