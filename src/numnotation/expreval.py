# -----------------------------------------------------------------------------
#  expreval.py
#  Parse command-line text into a Decimal magnitude
# -----------------------------------------------------------------------------

from __future__ import annotations

import ast
import re
from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow

from numnotation.magnitude import MAGNITUDE_CONTEXT
from numnotation.utility import UserInputError

# ---- simple number parsing helpers ----
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"       # spaces/commas/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_NON_FINITE = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity", "nan"}

# ---- allowed operators (safe subset) ----
_ALLOWED_BINOPS = {
    ast.Add:  MAGNITUDE_CONTEXT.add,
    ast.Sub:  MAGNITUDE_CONTEXT.subtract,
    ast.Mult: MAGNITUDE_CONTEXT.multiply,
    ast.Div:  MAGNITUDE_CONTEXT.divide,
    ast.Pow:  MAGNITUDE_CONTEXT.power,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: MAGNITUDE_CONTEXT.plus,
    ast.USub: MAGNITUDE_CONTEXT.minus,
}

_MAX_NODES = 256  # sanity guard

_NUMBER_TOKEN = re.compile(
    r"""
    (?<![\w.])              # not immediately after a word char or dot
    (
      (?:\d+(?:\.\d*)?|\.\d+)  # mantissa
      (?:[eE][+\-]?\d+)?      # optional exponent
    )
    (?![\w.])               # not immediately before a word char or dot
    """,
    re.VERBOSE,
)


class _ExprError(Exception):
    pass


def _rewrite_literals(expr: str) -> str:
    """
    Quote every number so ast sees strings instead of floats.

    1e20000 would otherwise become float('inf'); as '1e20000' it goes to
    Decimal unchanged.
    """
    return _NUMBER_TOKEN.sub(lambda m: f"'{m.group(1)}'", expr)


def _eval_expr(expr: str) -> Decimal:
    """
    Evaluate a *safe* arithmetic expression over Decimal.

    Allowed: numbers (incl. scientific), parentheses, + - * / ** and ^ (as
    power, right-associative), unary +/-.
    Disallowed: names, calls, attributes, subscripts, comparisons, etc.
    """
    expr = _rewrite_literals(expr.replace("^", "**"))
    try:
        tree = ast.parse(expr, mode="eval")
    except SyntaxError as e:
        raise _ExprError("not a valid expression") from e

    if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
        raise _ExprError("expression too long")

    def _eval(node) -> Decimal:
        if isinstance(node, ast.Expression):
            return _eval(node.body)
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            return Decimal(node.value)
        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))
        if isinstance(node, ast.BinOp) and type(node.op) in _ALLOWED_BINOPS:
            return _ALLOWED_BINOPS[type(node.op)](_eval(node.left), _eval(node.right))
        raise _ExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


def parse_magnitude(s: str) -> Decimal:
    """
    Parse user input into a magnitude.

    >>> parse_magnitude("1,000,000")
    Decimal('1000000')
    """
    raw = s
    s = (s or "").strip()
    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")
    if not s:
        raise UserInputError("Invalid input: empty value.")

    if s.lower() in _NON_FINITE:
        return Decimal(s)
    if _DECIMAL_RE.match(s) or _GROUPED_RE.match(s):
        try:
            return Decimal(re.sub(_SEP_CLASS, "", s))
        except (InvalidOperation, Overflow):
            # exponent outside what the decimal module can hold
            raise UserInputError(f"Invalid input: '{raw}' is too large to represent.") from None

    try:
        return _eval_expr(s)
    except _ExprError as e:
        raise UserInputError(f"Invalid input: '{raw}' ({e}).") from None
    except Overflow:
        raise UserInputError(f"Invalid input: '{raw}' is too large to represent.") from None
    except (DivisionByZero, InvalidOperation):
        raise UserInputError(f"Invalid input: '{raw}' is not a finite number.") from None
