import pytest

from tracking.input_filters import filter_decimal_input, filter_integer_input, parse_speed, parse_time


@pytest.mark.parametrize(
    "raw, expected",
    [("92", "92"), ("9a2 mph", "92"), ("-88", "88"), ("", ""), (None, "")],
)
def test_filter_integer_input(raw, expected):
    assert filter_integer_input(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("1.35", "1.35"), ("1.3.5", "1.35"), ("..4", ".4"), ("abc", ""), ("0.4s", "0.4")],
)
def test_filter_decimal_input_keeps_first_point(raw, expected):
    assert filter_decimal_input(raw) == expected


def test_parse_speed_absent_when_nothing_numeric():
    assert parse_speed("mph") is None
    assert parse_speed(" 91 ") == 91


def test_parse_time_handles_lone_point():
    assert parse_time(".") is None
    assert parse_time("") is None
    assert parse_time("1.2.3") == pytest.approx(1.23)
