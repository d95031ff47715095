# src/bigint/value.py
"""
BigInt - arbitrary-precision signed decimal integer.

A value is a sign flag plus a list of decimal digits, most significant
first. add(), subtract() and multiply() mutate the receiver and return it,
so chained calls work on one object:

    >>> BigInt("39916800").multiply(12).add(-1).to_string()
    '479001599'

Use copy() (or the +, -, * operators, which work on copies) when the
original value is still needed. factorial() always returns a new value.
"""

from __future__ import annotations

from functools import total_ordering

from bigint.arith import add_magnitudes, compare_magnitudes, mul_magnitudes, sub_magnitudes
from bigint.fmt import to_string
from bigint.parse import is_zero_digits, normalize, parse_value
from bigint.utility import InvalidInput, MissingOperand

_INT_CHUNK = 18


@total_ordering
class BigInt:
    __slots__ = ("digits", "sign")

    # mutable: not usable as a dict key
    __hash__ = None

    def __init__(self, n: BigInt | int | float | str):
        self.sign: bool = True
        self.digits: list[int] = [0]
        self.parse(n)

    def parse(self, n: BigInt | int | float | str) -> None:
        """Replace this value with n. On InvalidInput the value is left as it was."""
        self.sign, self.digits = parse_value(n)

    # --- accessors ------------------------------------------------------------

    def get_digits(self) -> list[int]:
        """Copy of the digit list."""
        return list(self.digits)

    def is_positive(self) -> bool:
        return self.sign

    def is_zero(self) -> bool:
        return is_zero_digits(self.digits)

    def copy(self) -> BigInt:
        return BigInt(self)

    def to_string(self) -> str:
        return to_string(self)

    def __str__(self) -> str:
        return to_string(self)

    def __repr__(self) -> str:
        return f"BigInt('{to_string(self)}')"

    def __int__(self) -> int:
        # chunked so int() is not bound by sys.get_int_max_str_digits()
        value = 0
        for i in range(0, len(self.digits), _INT_CHUNK):
            chunk = self.digits[i:i + _INT_CHUNK]
            value = value * 10 ** len(chunk) + int("".join(chr(48 + d) for d in chunk))
        return value if self.sign else -value

    def __bool__(self) -> bool:
        return not self.is_zero()

    # --- comparison -----------------------------------------------------------

    def equals(self, other: BigInt | int | float | str, *, ignore_sign: bool = False) -> bool:
        """
        True if other denotes the same integer.

        other goes through the same parser as the constructor. With
        ignore_sign=True only the magnitudes are compared (-5 equals 5).
        """
        o = other if isinstance(other, BigInt) else BigInt(other)
        if not ignore_sign and self.sign != o.sign:
            return False
        if len(self.digits) != len(o.digits):
            return False
        for a, b in zip(self.digits, o.digits):
            if a != b:
                return False
        return True

    def compare(self, other: BigInt | int | float | str) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        o = other if isinstance(other, BigInt) else BigInt(other)
        if self.sign != o.sign:
            return 1 if self.sign else -1
        cmp = compare_magnitudes(self.digits, o.digits)
        return cmp if self.sign else -cmp

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, BigInt | int | float | str):
            return NotImplemented
        try:
            return self.equals(other)
        except InvalidInput:
            return False

    def __lt__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.compare(other) < 0

    # --- arithmetic (in place) ------------------------------------------------

    @staticmethod
    def _operand(other: BigInt | int | float | str | None, op: str) -> BigInt:
        if other is None:
            raise MissingOperand(f"{op}() requires an operand")
        return other if isinstance(other, BigInt) else BigInt(other)

    def add(self, other: BigInt | int | float | str) -> BigInt:
        """self += other. Returns self."""
        o = self._operand(other, "add")

        if self.sign == o.sign:
            sign = self.sign
            digits = add_magnitudes(self.digits, o.digits)
        elif compare_magnitudes(self.digits, o.digits) >= 0:
            sign = self.sign
            digits = sub_magnitudes(self.digits, o.digits)
        else:
            sign = o.sign
            digits = sub_magnitudes(o.digits, self.digits)

        self.sign, self.digits = normalize(sign, digits)
        return self

    def subtract(self, other: BigInt | int | float | str) -> BigInt:
        """self -= other. Returns self; other is never modified."""
        if other is None:
            raise MissingOperand("subtract() requires an operand")
        negated = BigInt(other)
        if not negated.is_zero():
            negated.sign = not negated.sign
        return self.add(negated)

    def multiply(self, other: BigInt | int | float | str) -> BigInt:
        """self *= other. Returns self."""
        o = self._operand(other, "multiply")
        sign = self.sign == o.sign
        self.sign, self.digits = normalize(sign, mul_magnitudes(self.digits, o.digits))
        return self

    def factorial(self) -> BigInt:
        """
        n! as a new value, built from multiply(), add() and equals() only.

        0! is 1. Negative values raise InvalidInput.
        """
        if not self.sign:
            raise InvalidInput(f"factorial is not defined for negative values ({self})")
        if self.equals(0):
            return BigInt(1)

        acc = BigInt(1)
        counter = BigInt(1)
        while not counter.equals(self):
            acc.multiply(counter)
            counter.add(1)
        acc.multiply(counter)
        return acc

    # --- operators ------------------------------------------------------------

    def __neg__(self) -> BigInt:
        out = self.copy()
        if not out.is_zero():
            out.sign = not out.sign
        return out

    def __pos__(self) -> BigInt:
        return self.copy()

    def __abs__(self) -> BigInt:
        out = self.copy()
        out.sign = True
        return out

    def __add__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.copy().add(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.copy().subtract(other)

    def __rsub__(self, other):
        if isinstance(other, bool) or not isinstance(other, int | str):
            return NotImplemented
        return BigInt(other).subtract(self)

    def __mul__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.copy().multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __iadd__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.add(other)

    def __isub__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.subtract(other)

    def __imul__(self, other):
        if isinstance(other, bool) or not isinstance(other, BigInt | int | str):
            return NotImplemented
        return self.multiply(other)
