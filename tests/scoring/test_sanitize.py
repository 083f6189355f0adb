import pytest

from siagajiwa.scoring.sanitize import parse_rating, sum_ratings


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0", 0),
        ("4", 4),
        ("12", 12),
        ("+3", 3),
        ("-2", -2),
        ("", 0),
        (" 2", 0),
        ("2.0", 0),
        ("two", 0),
    ],
)
def test_parse_rating(value, expected):
    assert parse_rating(value) == expected


def test_malformed_rating_is_logged(caplog):
    parse_rating("abc")
    assert "abc" in caplog.text


def test_sum_ratings():
    assert sum_ratings({1: "1", 2: "oops", 3: "4"}) == 5
    assert sum_ratings({}) == 0
