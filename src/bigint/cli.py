# src/bigint/cli.py

"""
BigInt - arbitrary-precision decimal integer calculator

Description:
    Evaluates integer expressions (+, -, *, postfix factorial) with the
    BigInt digit engine and prints the exact result with its digit
    statistics. Without an expression an interactive prompt is started.

usage: see bigint -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import platform
import sys
import textwrap
import time
import traceback
from importlib.resources import files as pkg_files
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

from bigint import __version__ as _ver
from bigint import config as CONFIG
from bigint.display import (
    print_profiles_with_descriptions,
    print_statistics,
    print_value,
    show_intro_help,
)
from bigint.expreval import parse_int_or_expr
from bigint.runtime import APPLY, CFG
from bigint.runtime import current as _rt_current
from bigint.utility import UserInputError, clear_screen, flatten_dotted, get_terminal_width, typename
from bigint.value import BigInt
from bigint.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

COMMANDS = ("init", "where", "profiles")


# In memory session history
class HistoryItem(NamedTuple):
    text: str
    value: BigInt
    profile: str | None
    timestamp: float


_HISTORY: list[HistoryItem] = []


def add_to_history(text: str, value: BigInt, profile: str | None = None) -> None:
    _HISTORY.append(HistoryItem(text=text, value=value, profile=profile, timestamp=time.time()))


def get_history() -> list[HistoryItem]:
    return list(_HISTORY)


def clear_history() -> None:
    _HISTORY.clear()


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _print_invalid_input(msg: str) -> None:
    prefix = f"{Fore.RED}Invalid input:{Style.RESET_ALL}"
    print(f"{prefix} {msg}", file=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folder and copy the packaged profiles if missing.

      init overwrite
          Replace the workspace profiles with the packaged ones.

      profiles
          List all available profiles.

      where
          Show the workspace and package paths.

    examples:
      bigint 25!
      bigint "39916800 * 12"
      bigint --group "2 * 1.5e+30 - 1"
    """)

    p = argparse.ArgumentParser(
        prog="bigint",
        description="BigInt — arbitrary-precision decimal integer calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="expression",
                   help="integer expression to evaluate, or a command")
    p.add_argument("--profile", default=None, help="Profile to use (default: last used, else 'default')")
    p.add_argument("--group", action="store_true", default=None, help="Group digits in thousands")
    p.add_argument("--abbr", action="store_true", default=None, help="Abbreviate very long values")
    p.add_argument("--quiet", action="store_true", help="Print only the value")
    p.add_argument("--debug", action="store_true", help="Show profile details and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _configure_text_streams() -> None:
    # Respect explicit user choice
    if os.environ.get("PYTHONIOENCODING"):
        return
    # Only touch redirected output (pipes/files), leave TTY as-is
    if sys.stdout.isatty() or not hasattr(sys.stdout, "reconfigure"):
        return
    enc = (sys.stdout.encoding or "").lower()
    if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")


def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit --profile
      2) last used (from workspace)
      3) 'default'
    """
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _apply_profile(name: str) -> None:
    selected = CONFIG.load_settings(name)
    APPLY(selected)

    if _rt_current().debug:
        _debug(f"active profile: {selected.name}")
        if selected._source:
            _debug(f"profile file: {selected._source}")
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat, key=str.lower):
            v = CFG(k, None)
            print(f"        {k:.<50} {v!r} ({typename(v)})", file=sys.stderr)


def _run_command(items: list[str]) -> int | None:
    """Handle init / where / profiles. Returns an exit code or None if not a command."""
    cmd = items[0].lower()
    if cmd not in COMMANDS:
        return None

    if cmd == "init":
        overwrite = len(items) > 1 and items[1].lower() == "overwrite"
        ws, copied = seed_workspace(overwrite=overwrite)
        note = " (overwrote existing files)" if overwrite else ""
        print(f"Workspace ready at: {ws}{note}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0

    if cmd == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('bigint')}")
        return 0

    print_profiles_with_descriptions()
    return 0


def _main_impl(argv=None) -> int:

    colorama_init()
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    ensure_workspace_seeded()

    if args.items:
        code = _run_command(args.items)
        if code is not None:
            return code

    if args.profile and not CONFIG.has_profile(args.profile):
        print(f"Unknown profile: '{args.profile}'", file=sys.stderr)
        print("Available profiles:", ", ".join(CONFIG.list_all_profiles()), file=sys.stderr)
        return 2

    profile_name = _select_profile_name(args.profile)
    _apply_profile(profile_name)
    # --debug on the command line wins over the profile
    if args.debug:
        rt.debug = True

    # --- one-shot expression path ---
    if args.items:
        text = " ".join(args.items)
        value = parse_int_or_expr(text)
        if value is None:
            _print_invalid_input(f"'{text}' is not an integer expression.")
            return 2
        if args.quiet:
            print_value(value, group=args.group, abbreviate=args.abbr)
        else:
            print_statistics(value, text, group=args.group, abbreviate=args.abbr)
        return 0

    return _repl(profile_name, args)


def _repl(profile_name: str, args) -> int:
    if not _rt_current().debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}BigInt v{_ver} — arbitrary-precision integer calculator{Style.RESET_ALL}")
    _debug(f"terminal width {get_terminal_width()}")

    current_profile = profile_name
    while True:
        try:
            prompt = f"\nProfile: {current_profile} — Enter an expression, command or profile (h=Help, q=Quit): "
            user_input = input(prompt).strip()

            low = user_input.lower()
            if low in {"", "q", "quit"}:
                break

            if low in {"h", "help"}:
                show_intro_help()
                continue

            if low in {"p", "profiles"}:
                print_profiles_with_descriptions()
                continue

            if low in {"hist clear", "history clear"}:
                clear_history()
                print("History cleared.")
                continue

            if low in {"hist", "history"}:
                hist = get_history()
                if not hist:
                    print("History is empty.")
                    continue
                for item in hist:
                    ts = time.strftime("%H:%M:%S", time.localtime(item.timestamp))
                    print(f"{ts}  {item.text:<20}  = {item.value}  profile={item.profile or '-'}")
                continue

            if low.startswith("debug"):
                parts = low.split()
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    state = "ON" if rt.debug else "OFF"
                    print(f"Debug is currently {state}.")
                elif parts[1] == "on":
                    rt.debug = True
                    print("Debug mode enabled for this session.")
                elif parts[1] == "off":
                    rt.debug = False
                    print("Debug mode disabled for this session.")
                else:
                    print("Usage: DEBUG [on|off|status]")
                continue

            try:
                value = parse_int_or_expr(user_input)
            except UserInputError as e:
                _print_invalid_input(str(e))
                continue

            if value is not None:
                print_statistics(value, user_input, group=args.group, abbreviate=args.abbr)
                add_to_history(user_input, value, current_profile)
                continue

            # treat as profile switch
            if CONFIG.has_profile(user_input):
                try:
                    _apply_profile(user_input)
                except UserInputError as e:
                    print(f"{Fore.RED}Failed to load profile {Style.RESET_ALL}'{user_input}': {e}", file=sys.stderr)
                    continue
                CONFIG.write_current_profile(user_input)
                current_profile = user_input
                print(f"Applied profile: {current_profile}")
                continue

            print(f"{Fore.RED}Invalid input: {Style.RESET_ALL}'{user_input}'. Type H for help.")
        except (EOFError, KeyboardInterrupt):
            print()
            break

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
