import pytest

from flight_reservation.catalog import SeatClassDefinition
from flight_reservation.seats import (
    ROW_COUNT,
    SEAT_TYPES,
    InvalidSeatError,
    class_rows,
    classify,
    iter_seat_ids,
    parse_seat_id,
)

CLASSES = (
    SeatClassDefinition(upper_row_bound=3, price=900),
    SeatClassDefinition(upper_row_bound=8, price=400),
    SeatClassDefinition(upper_row_bound=20, price=150),
)


def test_seat_universe():
    assert ROW_COUNT == 20
    assert SEAT_TYPES == ("A", "B", "C", "D")
    assert len(list(iter_seat_ids())) == 80


def test_parse_seat_id():
    seat = parse_seat_id("12B")

    assert (seat.row, seat.seat_type) == (12, "B")
    assert str(seat) == "12B"
    assert str(parse_seat_id("012B")) == "12B"
    assert parse_seat_id("01A") == parse_seat_id("1A")
    assert classify(CLASSES, "04A") == (2, 400)


@pytest.mark.parametrize(
    "seat_id, expected",
    [("1A", (1, 900)), ("3D", (1, 900)), ("4A", (2, 400)), ("8C", (2, 400)), ("9B", (3, 150)), ("20D", (3, 150))],
)
def test_classify_walks_classes_in_order(seat_id, expected):
    assert classify(CLASSES, seat_id) == expected


@pytest.mark.parametrize("seat_id", ["0A", "00A", "021A", "21A", "5E", "5", "B5", "-1A", "1 A"])
def test_classify_rejects_unknown_seats(seat_id):
    with pytest.raises(InvalidSeatError):
        classify(CLASSES, seat_id)


def test_classify_rejects_rows_past_last_class():
    with pytest.raises(InvalidSeatError):
        classify((SeatClassDefinition(upper_row_bound=10, price=100),), "11A")


def test_class_rows_are_contiguous_and_clipped():
    assert class_rows(CLASSES, 1) == range(1, 4)
    assert class_rows(CLASSES, 2) == range(4, 9)
    assert class_rows(CLASSES, 3) == range(9, 21)

    wide = (SeatClassDefinition(15, 100), SeatClassDefinition(40, 50))
    assert class_rows(wide, 2) == range(16, 21)
