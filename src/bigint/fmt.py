# src/bigint/fmt.py
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bigint.runtime import CFG

if TYPE_CHECKING:
    from bigint.value import BigInt

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def to_string(value: BigInt) -> str:
    """'-' for negative values, then every digit in stored order."""
    sign = "" if value.is_positive() else "-"
    return sign + "".join(chr(48 + d) for d in value.digits)


def group_digits(value: BigInt, sep: str = ",", size: int = 3) -> str:
    """Thousands-style grouping: 1234567 -> 1,234,567."""
    if size <= 0:
        raise ValueError(f"group size must be positive, got {size}")
    text = to_string(value)
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]

    head = len(text) % size or size
    groups = [text[:head]]
    groups.extend(text[i:i + size] for i in range(head, len(text), size))
    return sign + sep.join(groups)


def abbr_digits(
    value: BigInt,
    head: int = 10,
    tail: int = 10,
    threshold: int = 35,
    ellipsis: str = "…",
) -> str:
    """Abbreviate very long values as first<head>…last<tail>."""
    text = to_string(value)
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]

    d = len(text)
    if d <= threshold or head + tail >= d:
        return sign + text
    return f"{sign}{text[:head]}{ellipsis}{text[d - tail:]}"


def format_value(value: BigInt, *, group: bool | None = None, abbreviate: bool | None = None) -> str:
    """
    Render a value for display using the FORMATTING.* profile settings.
    Explicit group/abbreviate arguments override the profile.
    """
    if abbreviate is None:
        abbreviate = bool(CFG("FORMATTING.NUM_ABBR_ENABLED", False))
    if group is None:
        group = bool(CFG("FORMATTING.GROUP_DIGITS", False))

    if abbreviate:
        ELL = CFG("FORMATTING.ELLIPSIS", "…")
        HEAD = int(CFG("FORMATTING.NUM_ABBR_HEAD", 10))
        TAIL = int(CFG("FORMATTING.NUM_ABBR_TAIL", 10))
        THR = int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35))
        d = len(value.digits)
        # short values fall through to grouping / plain digits
        if d > THR and HEAD + TAIL < d:
            return abbr_digits(value, HEAD, TAIL, THR, ELL)

    if group:
        SEP = str(CFG("FORMATTING.GROUP_SEPARATOR", ","))
        return group_digits(value, SEP)

    return to_string(value)
