# src/bigint/display.py
from __future__ import annotations

import textwrap

from colorama import Fore, Style

from bigint.config import list_profiles_with_descriptions
from bigint.fmt import format_value
from bigint.runtime import current as _rt_current
from bigint.value import BigInt

ALIGN_WIDTH = 22  # label column


def _row(label: str, value: str) -> str:
    return f"  {label + ':':<{ALIGN_WIDTH}}{value}"


def _sign_label(value: BigInt) -> str:
    if value.is_zero():
        return "Zero"
    return "Positive" if value.is_positive() else "Negative"


def _parity_label(value: BigInt) -> str:
    return "Even" if value.digits[-1] % 2 == 0 else "Odd"


def print_value(value: BigInt, *, group: bool | None = None, abbreviate: bool | None = None) -> None:
    print(format_value(value, group=group, abbreviate=abbreviate))


def print_statistics(
    value: BigInt,
    user_input: str,
    *,
    group: bool | None = None,
    abbreviate: bool | None = None,
) -> None:
    """Pretty print the evaluated value and its digit statistics."""
    number = format_value(value, group=group, abbreviate=abbreviate)

    lines = [f"{Fore.CYAN + Style.BRIGHT}Number statistics:{Style.RESET_ALL}"]
    lines.append(_row("Input", user_input.strip()))
    lines.append(_row("Number", f"{Fore.YELLOW + Style.BRIGHT}{number}{Style.RESET_ALL}"))
    lines.append(_row("Digits", f"Count={len(value.digits)}"))
    lines.append(_row("Sign", _sign_label(value)))
    lines.append(_row("Parity", _parity_label(value)))

    if _rt_current().debug:
        lines.append(_row("Profile", _rt_current().profile_name))

    print("\n".join(lines))


def print_profiles_with_descriptions() -> None:
    items = list_profiles_with_descriptions()
    if not items:
        print("No profiles found.")
        return
    width = max(len(name) for name, _ in items)
    print(f"{Fore.CYAN + Style.BRIGHT}Profiles:{Style.RESET_ALL}")
    for name, desc in items:
        print(f"  {Fore.GREEN}{name:<{width}}{Style.RESET_ALL}  {desc}")


def show_intro_help() -> None:
    text = textwrap.dedent(f"""\
    {Fore.CYAN + Style.BRIGHT}Enter an integer expression:{Style.RESET_ALL}
      123456789            plain integer (1_000, 1,234,567 also accepted)
      1.5e+3               scientific notation with a non-negative exponent
      39916800 * 12        addition, subtraction, multiplication
      25!                  factorial (postfix, not nested)
      (2 + 3)! - 1         parentheses

    {Fore.CYAN + Style.BRIGHT}Commands:{Style.RESET_ALL}
      h, help              this help
      p                    list profiles
      hist                 show values evaluated this session
      hist clear           forget the session history
      debug [on|off]       toggle debug output
      <profile name>       switch profile
      q, quit              quit
    """)
    print(text)
