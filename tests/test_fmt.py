# tests/test_fmt.py
from __future__ import annotations

import pytest

from bigint import APPLY, BigInt, abbr_digits, format_value, group_digits
from bigint.fmt import strip_ansi

FACT_25 = "15511210043330985984000000"


@pytest.mark.parametrize("text, expected", [
    ("1234567", "1,234,567"),
    ("-1234", "-1,234"),
    ("100", "100"),
    ("0", "0"),
    ("123456", "123,456"),
])
def test_group_digits(text, expected):
    assert group_digits(BigInt(text)) == expected


def test_group_digits_custom_separator_and_size():
    assert group_digits(BigInt(12345678), sep="_", size=4) == "1234_5678"


def test_group_digits_rejects_bad_size():
    with pytest.raises(ValueError):
        group_digits(BigInt(1), size=0)


def test_abbr_digits():
    assert abbr_digits(BigInt(FACT_25), head=5, tail=5, threshold=10) == "15511…00000"
    assert abbr_digits(BigInt("-" + FACT_25), 3, 3, 10, "...") == "-155...000"


def test_abbr_digits_keeps_short_values():
    assert abbr_digits(BigInt(FACT_25)) == FACT_25  # 26 digits <= default threshold


def test_format_value_defaults_to_plain_digits():
    assert format_value(BigInt(FACT_25)) == FACT_25


def test_format_value_follows_profile():
    APPLY({"FORMATTING": {"GROUP_DIGITS": True, "GROUP_SEPARATOR": "."}})
    assert format_value(BigInt(1234567)) == "1.234.567"

    APPLY({"FORMATTING": {
        "NUM_ABBR_ENABLED": True,
        "NUM_ABBR_HEAD": 4,
        "NUM_ABBR_TAIL": 2,
        "NUM_ABBR_THRESHOLD": 8,
        "ELLIPSIS": "~",
    }})
    assert format_value(BigInt(FACT_25)) == "1551~00"


def test_format_value_arguments_override_profile():
    APPLY({"FORMATTING": {"GROUP_DIGITS": True}})
    assert format_value(BigInt(1234567), group=False) == "1234567"
    assert format_value(BigInt(1234567), group=True, abbreviate=False) == "1,234,567"


def test_strip_ansi():
    assert strip_ansi("\x1b[31mred\x1b[0m") == "red"
