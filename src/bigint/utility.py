# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import shutil
import sys

# Largest power of ten handled per divmod step in format_integer_exact
_CHUNK_DIGITS = 18
_CHUNK = 10 ** _CHUNK_DIGITS


class BigIntError(Exception):
    pass


class UserInputError(BigIntError):
    pass


class InvalidInput(UserInputError, ValueError):
    """Raised when a value cannot be built from the given input."""


class MissingOperand(UserInputError, TypeError):
    """Raised when an arithmetic operation is called without an operand."""


def format_integer_exact(n: int) -> str:
    """
    Decimal text of a native int, exact for any size.

    Does not go through str(n) for large values, so it is not subject to
    sys.get_int_max_str_digits().
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidInput(f"expected an int, got {typename(n)}")

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n
    if a < _CHUNK:
        return sign + str(a)

    chunks: list[int] = []
    while a:
        a, low = divmod(a, _CHUNK)
        chunks.append(low)

    # most significant chunk unpadded, the rest zero-padded to full width
    parts = [str(chunks[-1])]
    parts.extend(f"{c:0{_CHUNK_DIGITS}d}" for c in reversed(chunks[:-1]))
    return sign + "".join(parts)


def clear_screen(keep_scrollback: bool = False) -> None:
    """
    Clear the terminal screen.
    - On Windows: uses 'cls'
    - On POSIX: ANSI sequences; optionally clear scrollback
    """
    if os.name == "nt":
        os.system("cls")
        return
    seq = "\033[H\033[2J" if keep_scrollback else "\033[3J\033[H\033[2J"
    sys.stdout.write(seq)
    sys.stdout.flush()


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except (OSError, ValueError):
        return default


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
