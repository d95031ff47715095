# tests/test_expreval.py
from __future__ import annotations

import pytest

from bigint import APPLY, InvalidInput, UserInputError, evaluate, parse_int_or_expr

EXPR_CASES = [
    ("25!", "15511210043330985984000000"),
    ("39916800 * 12", "479001600"),
    ("255 + -1", "254"),
    ("(2 + 3)! - 1", "119"),
    ("2 * 10!", "7257600"),
    ("-5!", "-120"),
    ("0!", "1"),
    ("1.5e+3 - 1", "1499"),
    ("2e+30 * 1e+2", "2" + "0" * 32),
    ("1_000 * 3", "3000"),
    ("10 - 20", "-10"),
    ("-(3 - 10) * -2", "-14"),
    ("  42  ", "42"),
]


@pytest.mark.parametrize("expr, expected", EXPR_CASES)
def test_evaluate(expr, expected):
    assert evaluate(expr).to_string() == expected


LITERAL_CASES = [
    ("1,234,567", "1234567"),
    ("123 456 789", "123456789"),
    ("123.456.789", "123456789"),
    ("1_000_000", "1000000"),
    ("+7", "7"),
    ("-7", "-7"),
    ("-0", "0"),
]


@pytest.mark.parametrize("text, expected", LITERAL_CASES)
def test_parse_grouped_literals(text, expected):
    assert parse_int_or_expr(text).to_string() == expected


NOT_EXPRESSIONS = [
    "hello",
    "default",
    "2 +",
    "3!!",
    "(3!)!",
    "!5",
    "2 / 3",
    "2 ** 3",
    "7 % 2",
    "abs(3)",
    "x.y",
    "[1, 2]",
    "+".join(["1"] * 200),
]


@pytest.mark.parametrize("text", NOT_EXPRESSIONS)
def test_not_an_expression(text):
    assert parse_int_or_expr(text) is None
    with pytest.raises(UserInputError):
        evaluate(text)


@pytest.mark.parametrize("text", ["1.5", "1e-3", "2 * 1.25e+1"])
def test_non_integer_literal_is_reported(text):
    with pytest.raises(InvalidInput):
        parse_int_or_expr(text)


def test_negative_factorial_is_reported():
    with pytest.raises(UserInputError, match="non-negative"):
        parse_int_or_expr("(0 - 3)!")


def test_none_is_not_an_expression():
    assert parse_int_or_expr(None) is None


# ---------- digit limit -------------------------------------------------------


@pytest.fixture
def small_limit():
    APPLY({"BEHAVIOUR": {"MAX_DIGITS": 5}})


def test_limit_allows_small_values(small_limit):
    assert evaluate("99999 + 0").to_string() == "99999"
    assert evaluate("8!").to_string() == "40320"


@pytest.mark.parametrize("text", ["123456", "999 * 999", "10!", "99999 + 1", "1e+7"])
def test_limit_rejects_large_values(small_limit, text):
    with pytest.raises(UserInputError, match="more than 5 decimal digits"):
        evaluate(text)


def test_limit_applies_to_plain_literals(small_limit):
    with pytest.raises(UserInputError):
        parse_int_or_expr("1,000,000")


@pytest.mark.parametrize("text", ["1e+99999999999", "2 * 1e+400000000", "1e+" + "9" * 40, "0.5e+6"])
def test_limit_checked_before_exponent_is_expanded(small_limit, text):
    with pytest.raises(UserInputError, match="more than 5 decimal digits"):
        parse_int_or_expr(text)


def test_limit_allows_small_exponents(small_limit):
    assert parse_int_or_expr("0.05e+3").to_string() == "50"
    assert parse_int_or_expr("1.2e+4").to_string() == "12000"
