# src/bigint/parse.py
"""
Input normalization for BigInt.

Every accepted input shape is turned into a (sign, digits) pair that already
satisfies the value invariants: digits are ints 0-9, most significant first,
never empty, no leading zeros, and zero is always positive.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from bigint.utility import InvalidInput, format_integer_exact, typename

if TYPE_CHECKING:
    from bigint.value import BigInt

_DECIMAL_RE = re.compile(r"(-?)(\d+)", re.ASCII)
_SCIENTIFIC_RE = re.compile(r"(-?)(\d+)(?:\.(\d+))?[eE]([-+]?)(\d+)", re.ASCII)


def strip_leading_zeros(digits: list[int]) -> list[int]:
    """Drop redundant leading zeros in place, keeping at least one digit."""
    i = 0
    last = len(digits) - 1
    while i < last and digits[i] == 0:
        i += 1
    if i:
        del digits[:i]
    return digits


def is_zero_digits(digits: list[int]) -> bool:
    return len(digits) == 1 and digits[0] == 0


def normalize(sign: bool, digits: list[int]) -> tuple[bool, list[int]]:
    if not digits:
        raise InvalidInput("a value needs at least one digit")
    strip_leading_zeros(digits)
    if is_zero_digits(digits):
        sign = True
    return sign, digits


def _digits_of(text: str) -> list[int]:
    return [ord(ch) - 48 for ch in text]


def _from_int(n: int) -> tuple[bool, list[int]]:
    sign = n >= 0
    return normalize(sign, _digits_of(format_integer_exact(abs(n))))


def _from_float(x: float) -> tuple[bool, list[int]]:
    if not math.isfinite(x) or not x.is_integer():
        raise InvalidInput(f"not an integer value: {x!r}")
    return _from_int(int(x))


def scientific_width(int_part: str, frac_part: str, exp_text: str) -> int | float:
    """Upper bound on the digits of int_part.frac_part e+exp, without building them."""
    mantissa = (int_part + frac_part).lstrip("0")
    if not mantissa:
        return 1
    exp_text = exp_text.lstrip("0") or "0"
    # too long to be a real exponent; also keeps int() under the str-digit limit
    if len(exp_text) > 18:
        return math.inf
    return len(mantissa) + max(0, int(exp_text) - len(frac_part))


def _from_scientific(m: re.Match, max_digits: int | None = None) -> tuple[bool, list[int]]:
    """
    Materialize '<int>[.<frac>]e[+]<exp>' as a full decimal digit string.

    The integer part of the result has len(int) + exp digits. Fraction digits
    beyond the exponent must all be zero or the value is not an integer.
    With max_digits set, the width is checked before any digit is built.
    """
    neg, int_part, frac_part, exp_sign, exp_text = m.groups()
    frac_part = frac_part or ""

    if exp_sign == "-":
        raise InvalidInput(
            "scientific notation with a negative exponent is not supported"
        )

    if max_digits is not None and scientific_width(int_part, frac_part, exp_text) > max_digits:
        raise InvalidInput(
            f"{m.group(0)!r} has more than {max_digits} decimal digits"
        )

    exp = int(exp_text)
    digits = _digits_of(int_part + frac_part)
    surplus = len(frac_part) - exp
    if surplus > 0:
        dropped = digits[-surplus:]
        if any(dropped):
            raise InvalidInput(
                f"scientific notation does not denote an integer: {m.group(0)!r}"
            )
        del digits[-surplus:]
    else:
        digits.extend([0] * -surplus)

    return normalize(neg != "-", digits)


def parse_text(s: str, max_digits: int | None = None) -> tuple[bool, list[int]]:
    m = _DECIMAL_RE.fullmatch(s)
    if m:
        return normalize(m.group(1) != "-", _digits_of(m.group(2)))

    m = _SCIENTIFIC_RE.fullmatch(s)
    if m:
        return _from_scientific(m, max_digits)

    raise InvalidInput(f"not an integer: {s!r}")


def parse_value(n: BigInt | int | float | str) -> tuple[bool, list[int]]:
    """
    Accepts: another BigInt (deep copy), int, integral float,
             decimal string ('-123'), scientific string ('1.5e+3')
    Rejects: None, bool, '12a', ' 1', '', '1e-3', 1.5
    """
    from bigint.value import BigInt

    if isinstance(n, BigInt):
        return n.is_positive(), n.get_digits()

    # bool is an int subclass; True/False are not numbers here
    if isinstance(n, bool):
        raise InvalidInput("cannot build a value from a bool")

    if isinstance(n, int):
        return _from_int(n)

    if isinstance(n, float):
        return _from_float(n)

    if isinstance(n, str):
        return parse_text(n)

    raise InvalidInput(f"cannot build a value from {typename(n)}")
