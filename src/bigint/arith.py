# src/bigint/arith.py
"""
Schoolbook digit algorithms on magnitudes.

All functions take and return digit lists most-significant-first and never
mutate their arguments. Work is done on reversed copies so position i is
the 10**i place.
"""

from __future__ import annotations

from bigint.parse import strip_leading_zeros

BASE = 10


def compare_magnitudes(a: list[int], b: list[int]) -> int:
    """Return -1, 0 or 1 as |a| is less than, equal to or greater than |b|."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for x, y in zip(a, b):
        if x != y:
            return -1 if x < y else 1
    return 0


def add_magnitudes(a: list[int], b: list[int]) -> list[int]:
    ra = a[::-1]
    rb = b[::-1]
    la, lb = len(ra), len(rb)

    carry = 0
    for i in range(max(la, lb)):
        if i < la and i < lb:
            s = ra[i] + rb[i] + carry
        elif i < la:
            s = ra[i] + carry
        else:
            # b is longer: append instead of overwrite
            s = rb[i] + carry
            ra.append(0)

        if s > BASE - 1:
            ra[i] = s % BASE
            carry = 1
        else:
            ra[i] = s
            carry = 0

    if carry:
        ra.append(carry)

    return strip_leading_zeros(ra[::-1])


def sub_magnitudes(a: list[int], b: list[int]) -> list[int]:
    """|a| - |b| with borrow. Requires |a| >= |b|."""
    if compare_magnitudes(a, b) < 0:
        raise ValueError("sub_magnitudes requires |a| >= |b|")

    ra = a[::-1]
    rb = b[::-1]

    borrow = 0
    for i in range(len(ra)):
        d = ra[i] - borrow - (rb[i] if i < len(rb) else 0)
        if d < 0:
            d += BASE
            borrow = 1
        else:
            borrow = 0
        ra[i] = d

    return strip_leading_zeros(ra[::-1])


def mul_magnitudes(a: list[int], b: list[int]) -> list[int]:
    """
    Grade-school multiplication.

    Rows come from the shorter operand. Each row writes into overlapping
    output positions, so every digit is added to what is already there with
    its own carry (sum_carry), separate from the multiplication carry.
    """
    ra = a[::-1]
    rb = b[::-1]
    if len(rb) > len(ra):
        bigger, smaller = rb, ra
    else:
        bigger, smaller = ra, rb

    result: list[int] = []
    for i, sd in enumerate(smaller):
        if sd == 0:
            if len(result) < i + 1:
                result.append(0)
            continue

        carry = 0
        sum_carry = 0
        for j, bd in enumerate(bigger):
            product = sd * bd + carry
            if product > BASE - 1:
                digit = product % BASE
                carry = product // BASE
            else:
                digit = product
                carry = 0

            pos = i + j
            if pos >= len(result):
                result.append(0)
            total = result[pos] + digit + sum_carry
            result[pos] = total % BASE
            sum_carry = total // BASE

        # flush what is left of this row past its last digit
        pos = i + len(bigger)
        rest = carry + sum_carry
        while rest:
            if pos >= len(result):
                result.append(0)
            total = result[pos] + rest
            result[pos] = total % BASE
            rest = total // BASE
            pos += 1

    if not result:
        result.append(0)

    return strip_leading_zeros(result[::-1])
