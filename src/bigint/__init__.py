from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bigint")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings, read_current_profile
from .expreval import evaluate, parse_int_or_expr
from .fmt import abbr_digits, format_value, group_digits, to_string
from .runtime import APPLY, CFG
from .utility import BigIntError, InvalidInput, MissingOperand, UserInputError, format_integer_exact
from .value import BigInt
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "BigInt",
    "BigIntError",
    "InvalidInput",
    "MissingOperand",
    "UserInputError",
    "__version__",
    "abbr_digits",
    "evaluate",
    "format_integer_exact",
    "format_value",
    "group_digits",
    "has_profile",
    "load_settings",
    "parse_int_or_expr",
    "read_current_profile",
    "to_string",
    "workspace_dir",
]
