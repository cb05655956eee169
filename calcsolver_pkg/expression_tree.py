"""Expression Tree data structure for the calculus solver.

Trees are immutable: every node is a frozen dataclass and children are owned
by their parent only (no back-references). Integration, differentiation and
simplification always build a new tree.

Key Classes:
    - OperatorKind: Enum for the five binary operators
    - Constant, Symbol, BinaryOp, FunctionCall: the node variants
    - Expr: Union of the node variants
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator
from typing import Union

import sympy as sp

from .config import ALLOWED_SYMPY_NAMES
from .config import NAMED_CONSTANTS
from .utils.formatting import format_number_no_trailing_zeros


class OperatorKind(Enum):
    """Binary operators, valued by their textual symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"


PRECEDENCE: dict[OperatorKind, int] = {
    OperatorKind.ADD: 1,
    OperatorKind.SUBTRACT: 1,
    OperatorKind.MULTIPLY: 2,
    OperatorKind.DIVIDE: 2,
    OperatorKind.POWER: 3,
}

SYMPY_BINARY = {
    OperatorKind.ADD: lambda x, y: x + y,
    OperatorKind.SUBTRACT: lambda x, y: x - y,
    OperatorKind.MULTIPLY: lambda x, y: x * y,
    OperatorKind.DIVIDE: lambda x, y: x / y,
    OperatorKind.POWER: lambda x, y: x**y,
}


@dataclass(frozen=True)
class Constant:
    """A finite real numeric literal."""

    value: int | float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Constant value must be a number, got {self.value!r}")
        if not math.isfinite(self.value):
            raise ValueError(f"Constant value must be finite, got {self.value!r}")

    def __str__(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class Symbol:
    """A named variable such as ``x``."""

    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Symbol name must be non-empty")

    def __str__(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class BinaryOp:
    op: OperatorKind
    left: Expr
    right: Expr

    def __str__(self) -> str:
        return to_text(self)


@dataclass(frozen=True)
class FunctionCall:
    """A named single-argument function application, e.g. ``ln(x)``."""

    name: str
    argument: Expr

    def __post_init__(self):
        if not self.name:
            raise ValueError("Function name must be non-empty")

    def __str__(self) -> str:
        return to_text(self)


Expr = Union[Constant, Symbol, BinaryOp, FunctionCall]


def add(left: Expr, right: Expr) -> BinaryOp:
    return BinaryOp(OperatorKind.ADD, left, right)


def subtract(left: Expr, right: Expr) -> BinaryOp:
    return BinaryOp(OperatorKind.SUBTRACT, left, right)


def multiply(left: Expr, right: Expr) -> BinaryOp:
    return BinaryOp(OperatorKind.MULTIPLY, left, right)


def divide(left: Expr, right: Expr) -> BinaryOp:
    return BinaryOp(OperatorKind.DIVIDE, left, right)


def power(base: Expr, exponent: Expr) -> BinaryOp:
    return BinaryOp(OperatorKind.POWER, base, exponent)


def ln(argument: Expr) -> FunctionCall:
    return FunctionCall("ln", argument)


def children(node: Expr) -> tuple[Expr, ...]:
    if isinstance(node, (Constant, Symbol)):
        return ()
    elif isinstance(node, BinaryOp):
        return (node.left, node.right)
    elif isinstance(node, FunctionCall):
        return (node.argument,)
    raise TypeError(f"Unknown expression node: {node!r}")


def walk(node: Expr) -> Iterator[Expr]:
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def count_nodes(node: Expr) -> int:
    return sum(1 for _ in walk(node))


def depth(node: Expr) -> int:
    """Calculate depth of the tree (a single leaf has depth 1)."""
    best = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        best = max(best, level)
        stack.extend((child, level + 1) for child in children(current))
    return best


def _is_negative_constant(node: Expr) -> bool:
    return isinstance(node, Constant) and node.value < 0


def _negated_operand(node: Expr) -> str | None:
    """Text after the sign when ``node`` is ``-1 * operand``, rendered as ``-operand``."""
    if not (
        isinstance(node, BinaryOp)
        and node.op is OperatorKind.MULTIPLY
        and isinstance(node.left, Constant)
        and node.left.value == -1
    ):
        return None
    text = to_text(node.right)
    # "--2" would not read back as a product
    if text.startswith("-"):
        return None
    if _needs_parens(node.right, OperatorKind.MULTIPLY, is_right=True):
        return f"({text})"
    return text


def _needs_parens(child: Expr, parent_op: OperatorKind, is_right: bool) -> bool:
    if _is_negative_constant(child) or _negated_operand(child) is not None:
        # "x ^ -1" reads fine; "(-2) ^ x" and "x - (-1)" need the parentheses
        return is_right != (parent_op is OperatorKind.POWER)
    if not isinstance(child, BinaryOp):
        return False
    child_prec = PRECEDENCE[child.op]
    parent_prec = PRECEDENCE[parent_op]
    if child_prec != parent_prec:
        return child_prec < parent_prec
    if parent_op is OperatorKind.POWER:
        return not is_right
    return is_right and parent_op in (OperatorKind.SUBTRACT, OperatorKind.DIVIDE)


def to_text(node: Expr) -> str:
    """Render the canonical text of a tree, e.g. ``x ^ 3 / 3``."""
    if isinstance(node, Constant):
        return format_number_no_trailing_zeros(node.value)
    elif isinstance(node, Symbol):
        return node.name
    elif isinstance(node, FunctionCall):
        return f"{node.name}({to_text(node.argument)})"
    elif isinstance(node, BinaryOp):
        negated = _negated_operand(node)
        if negated is not None:
            return f"-{negated}"
        left = to_text(node.left)
        right = to_text(node.right)
        if _needs_parens(node.left, node.op, is_right=False):
            left = f"({left})"
        if _needs_parens(node.right, node.op, is_right=True):
            right = f"({right})"
        return f"{left} {node.op.value} {right}"
    raise TypeError(f"Unknown expression node: {node!r}")


def _constant_to_sympy(value: int | float) -> sp.Expr:
    if isinstance(value, int):
        return sp.Integer(value)
    # Skip rationalization for very large or very small numbers
    if abs(value) > 1e6 or (abs(value) < 1e-6 and value != 0):
        return sp.Float(value)
    rational = sp.nsimplify(value, tolerance=1e-12, rational=True)
    if abs(float(rational) - value) < 1e-12:
        return rational
    return sp.Float(value)


def to_sympy(node: Expr, symbols: dict[str, sp.Symbol] | None = None) -> sp.Expr:
    """Convert a tree to a SymPy expression (SymPy's own evaluation applies).

    Args:
        node: Root of the tree
        symbols: Optional mapping of variable names to SymPy symbols

    Returns:
        SymPy expression
    """
    symbols = symbols or {}
    if isinstance(node, Constant):
        return _constant_to_sympy(node.value)
    elif isinstance(node, Symbol):
        if node.name in symbols:
            return symbols[node.name]
        if node.name in NAMED_CONSTANTS:
            return NAMED_CONSTANTS[node.name]
        return sp.Symbol(node.name)
    elif isinstance(node, FunctionCall):
        argument = to_sympy(node.argument, symbols)
        func = ALLOWED_SYMPY_NAMES.get(node.name)
        if func is None or node.name in NAMED_CONSTANTS:
            func = sp.Function(node.name)
        return func(argument)
    elif isinstance(node, BinaryOp):
        left = to_sympy(node.left, symbols)
        right = to_sympy(node.right, symbols)
        return SYMPY_BINARY[node.op](left, right)
    raise TypeError(f"Unknown expression node: {node!r}")
