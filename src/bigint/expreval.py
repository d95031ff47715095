from __future__ import annotations

import ast
import math
import re

from bigint.parse import scientific_width
from bigint.runtime import CFG
from bigint.utility import UserInputError
from bigint.value import BigInt

# ---- simple number parsing helpers ----
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,._\u00A0\u2009\u202F]"      # spaces/commas/dots/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+", re.ASCII)
_PLAIN_RE = re.compile(r"[+-]?\d[\d_]*", re.ASCII)

# Numeric literal inside an expression: 42, 1_000, 1.5e+3, 2E5
_LITERAL_TOKEN = re.compile(
    r"""
    (?<![\w.])              # not immediately after a word char or dot
    (?P<lit>
     (?P<int>\d(?:_?\d)*)              # integer part, single underscores allowed
     (?:\.(?P<frac>\d+))?              # optional fraction
     (?:[eE](?P<esign>[-+]?)(?P<exp>\d+))?  # optional exponent
    )
    (?![\w.])               # not immediately before a word char or dot
    """,
    re.VERBOSE | re.ASCII,
)

_FAKE_FACT = "__fact__"
_FAKE_LIT = "__lit{}__"

_MAX_NODES = 256  # sanity guard
_DEFAULT_MAX_DIGITS = 100_000


class _IntExprError(UserInputError):
    """Text is not an integer expression at all."""


def _max_digits() -> int:
    return int(CFG("BEHAVIOUR.MAX_DIGITS", _DEFAULT_MAX_DIGITS))


def _check_digits(value: BigInt, limit: int) -> BigInt:
    if len(value.digits) > limit:
        raise UserInputError(
            f"number has more than {limit} decimal digits. "
            "Increase the limit in the profile or pass a smaller value."
        )
    return value


def _factorial_digits_estimate(n: BigInt) -> float:
    """Decimal digits of n! via lgamma (n must be small enough for a float)."""
    if len(n.digits) > 15:
        return math.inf
    return math.floor(math.lgamma(int(n) + 1) / math.log(10)) + 1


def _rewrite_literals(expr: str, limit: int) -> tuple[str, dict[str, BigInt]]:
    """
    Replace every numeric literal with a placeholder name and parse it exactly.

        12 * 1.5e+3   ->  __lit0__ * __lit1__

    The literal text goes through the BigInt parser, so '1.5' or '1e-3'
    raise InvalidInput here instead of ever becoming a float. Exponents are
    checked against the digit limit before the literal is expanded.
    """
    table: dict[str, BigInt] = {}

    def repl(m: re.Match) -> str:
        exp = m.group("exp")
        if exp is not None and m.group("esign") != "-":
            int_part = m.group("int").replace("_", "")
            _check_digits_count(scientific_width(int_part, m.group("frac") or "", exp), limit)
        name = _FAKE_LIT.format(len(table))
        table[name] = BigInt(m.group("lit").replace("_", ""))
        return name

    return _LITERAL_TOKEN.sub(repl, expr), table


def _rewrite_factorial(expr: str) -> str:
    """
    Rewrite postfix factorial 'x!' into '__fact__(x)'.

    Handles:
        5!
        (3+2)!
        2 * 10!    -> 2 * __fact__(10)

    Does NOT allow:
        !5         (no prefix factorial)
        3!!        (no double/nested factorial)
        (3!)!      (no factorial of factorial)
    """
    out: list[str] = []
    n = len(expr)
    pos = 0  # start of the next chunk to copy

    i = 0
    while i < n:
        if expr[i] != '!':
            i += 1
            continue

        # found '!' at i; find the operand to its left
        j = i - 1
        while j >= 0 and expr[j].isspace():
            j -= 1
        if j < 0:
            raise _IntExprError("factorial '!' requires a left operand")

        if expr[j] == ')':
            level = 0
            k = j
            while k >= 0:
                if expr[k] == ')':
                    level += 1
                elif expr[k] == '(':
                    level -= 1
                    if level == 0:
                        break
                k -= 1
            if k < 0 or level != 0:
                raise _IntExprError("unbalanced parentheses before '!'")
            operand_start = k

        else:
            if not (expr[j].isalnum() or expr[j] == "_"):
                raise _IntExprError("factorial '!' has invalid left operand")

            k = j
            while k >= 0 and (expr[k].isalnum() or expr[k] == "_"):
                k -= 1
            operand_start = k + 1

        # catches (3!)! and 3!!
        if operand_start < pos:
            raise _IntExprError("nested factorial '!' is not supported")

        out.append(expr[pos:operand_start])
        out.append(f"{_FAKE_FACT}({expr[operand_start:j + 1]})")

        pos = i + 1
        i = i + 1

    out.append(expr[pos:])
    return "".join(out)


def _eval_tree(tree: ast.Expression, literals: dict[str, BigInt], limit: int) -> BigInt:
    """Walk the AST; every node yields a fresh BigInt owned by the caller."""

    def _eval(node) -> BigInt:
        if isinstance(node, ast.Expression):
            return _eval(node.body)

        if isinstance(node, ast.Name):
            if node.id in literals:
                return literals[node.id].copy()
            raise _IntExprError(f"unknown name '{node.id}'")

        if isinstance(node, ast.UnaryOp):
            if isinstance(node.op, ast.UAdd):
                return _eval(node.operand)
            if isinstance(node.op, ast.USub):
                return -_eval(node.operand)

        if isinstance(node, ast.BinOp):
            if isinstance(node.op, ast.Add):
                return _check_digits(_eval(node.left).add(_eval(node.right)), limit)
            if isinstance(node.op, ast.Sub):
                return _check_digits(_eval(node.left).subtract(_eval(node.right)), limit)
            if isinstance(node.op, ast.Mult):
                left = _eval(node.left)
                right = _eval(node.right)
                # product has at least len(a) + len(b) - 1 digits
                if not left.is_zero() and not right.is_zero():
                    _check_digits_count(len(left.digits) + len(right.digits) - 1, limit)
                return _check_digits(left.multiply(right), limit)
            raise _IntExprError(f"unsupported operator: {type(node.op).__name__}")

        if isinstance(node, ast.Call):
            if isinstance(node.func, ast.Name) and node.func.id == _FAKE_FACT:
                if node.keywords or len(node.args) != 1:
                    raise _IntExprError("factorial takes exactly one argument")
                val = _eval(node.args[0])
                if not val.is_positive():
                    raise UserInputError("factorial requires a non-negative integer")
                if _factorial_digits_estimate(val) > limit:
                    raise UserInputError(
                        f"{val}! has more than {limit} decimal digits. "
                        "Increase the limit in the profile or pass a smaller value."
                    )
                return _check_digits(val.factorial(), limit)
            raise _IntExprError("function calls are not allowed")

        raise _IntExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


def _check_digits_count(count: int, limit: int) -> None:
    if count > limit:
        raise UserInputError(
            f"number has more than {limit} decimal digits. "
            "Increase the limit in the profile or pass a smaller value."
        )


def evaluate(expr: str) -> BigInt:
    """
    Evaluate a *safe* integer expression with the BigInt engine.

    Allowed: integer literals (incl. underscores and scientific notation
             such as 1.5e+3), parentheses, + - *, unary +/-, postfix n!.

    Disallowed: names, calls, attributes, /, %, **, and anything else.
    BEHAVIOUR.MAX_DIGITS is enforced on literals, on intermediate results
    and on the final value.
    """
    limit = _max_digits()

    for ch in _THIN_SPACES:
        expr = expr.replace(ch, " ")

    rewritten, literals = _rewrite_literals(expr, limit)
    for lit in literals.values():
        _check_digits(lit, limit)
    rewritten = _rewrite_factorial(rewritten)

    try:
        tree = ast.parse(rewritten.strip(), mode="eval")
    except SyntaxError as e:
        raise _IntExprError("invalid integer expression") from e

    if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
        raise _IntExprError("expression too large")

    return _check_digits(_eval_tree(tree, literals, limit), limit)


def _parse_int_literal(text: str) -> BigInt | None:
    """Accepts: 42  -7  +7  1_000_000  123.456.789  123 456 789  1,234,567
       Returns None for anything else."""
    s = text.strip()
    if not s:
        return None

    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")

    if _PLAIN_RE.fullmatch(s) or _GROUPED_RE.fullmatch(s):
        compact = re.sub(_SEP_CLASS, "", s).lstrip("+")
        return BigInt(compact)

    return None


# ---- public entry point ----
def parse_int_or_expr(s: str) -> BigInt | None:
    """
    Turn user text into a BigInt.

    Returns None when the text is not an integer expression at all (the CLI
    then treats it as a profile name or command). Raises UserInputError for
    text that is an expression but cannot be evaluated (digit limit,
    negative factorial, non-integer literal).
    """
    if s is None:
        return None

    n = _parse_int_literal(s)
    if n is not None:
        return _check_digits(n, _max_digits())

    try:
        return evaluate(s)
    except _IntExprError:
        return None
