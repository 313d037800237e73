import pytest

from tests.helpers import frag
from wave_slot_agent.classifier import classify, level_from_style, parse_seat_half
from wave_slot_agent.models import (
    DateMarker,
    Level,
    LevelMarker,
    SeatCount,
    SoldOut,
    TimeMarker,
    Unrecognized,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("9/27 (토)", DateMarker(month=9, day=27)),
        ("12/1(일)", DateMarker(month=12, day=1)),
        ("13/1 (월)", Unrecognized()),
        ("9/32 (토)", Unrecognized()),
        ("9/27", SeatCount(left=9, right=27)),
        ("9/27 (Sat)", Unrecognized()),
    ],
)
def test_date_markers(text, expected) -> None:
    assert classify(frag(text)) == expected


def test_date_marker_iso_uses_supplied_year() -> None:
    assert DateMarker(month=9, day=7).iso(2024) == "2024-09-07"


@pytest.mark.parametrize("text", ["10:00", "07:00", " 14:00 "])
def test_on_the_hour_times(text) -> None:
    assert classify(frag(text)) == TimeMarker(time=text.strip())


@pytest.mark.parametrize("text", ["10:30", "9:00", "10:00 AM"])
def test_other_times_are_unrecognized(text) -> None:
    assert classify(frag(text)) == Unrecognized()


def test_level_labels() -> None:
    assert classify(frag("상급")) == LevelMarker(level=Level.ADVANCED)
    assert classify(frag("중급")) == LevelMarker(level=Level.INTERMEDIATE)
    assert classify(frag("초급")) == LevelMarker(level=Level.BEGINNER)


def test_style_hint_overrides_level_label() -> None:
    assert classify(frag("중급", style="rgb(239, 68, 68)")) == LevelMarker(level=Level.ADVANCED)
    assert classify(frag("상급", style="RGB(34,197,94)")) == LevelMarker(level=Level.BEGINNER)


def test_unknown_style_keeps_label() -> None:
    assert classify(frag("중급", style="rgb(1, 2, 3)")) == LevelMarker(level=Level.INTERMEDIATE)


def test_style_hint_alone_is_not_a_level() -> None:
    assert classify(frag("안내", style="rgb(239, 68, 68)")) == Unrecognized()


def test_level_from_style() -> None:
    assert level_from_style("#EF4444") is Level.ADVANCED
    assert level_from_style(" rgb( 245 , 158 , 11 ) ") is Level.INTERMEDIATE
    assert level_from_style(None) is None


@pytest.mark.parametrize(
    "text, left, right",
    [
        ("3/2", 3, 2),
        ("-/4", 0, 4),
        ("5/-", 5, 0),
        ("-/-", 0, 0),
        ("0/12", 0, 12),
        ("-3/2", 0, 2),
    ],
)
def test_seat_counts(text, left, right) -> None:
    result = classify(frag(text))
    assert isinstance(result, SeatCount)
    assert (result.left, result.right) == (left, right)


def test_sold_out_is_zero_seats() -> None:
    result = classify(frag("매진"))
    assert isinstance(result, SoldOut)
    assert isinstance(result, SeatCount)
    assert result.total == 0


@pytest.mark.parametrize("text", ["", "3/2/1", "a/b", "잔여", "3 / 2"])
def test_everything_else_is_unrecognized(text) -> None:
    assert classify(frag(text)) == Unrecognized()


def test_parse_seat_half() -> None:
    assert parse_seat_half("7") == 7
    assert parse_seat_half("-") == 0
    assert parse_seat_half("x") == 0


@pytest.mark.parametrize("text", ["１０:00", "９/２７ (토)", "３/２", "3/２"])
def test_only_ascii_digits_count(text) -> None:
    assert classify(frag(text)) == Unrecognized()
