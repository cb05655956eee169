"""Parse capability: expression text -> Expression Tree.

SymPy's tokenizer transformations normalize the text (``^`` to ``**``,
implicit multiplication, numbers and names wrapped in SymPy constructors).
The resulting Python source is parsed with :mod:`ast` and converted node by
node, so the tree keeps the operand order and shape the user typed instead of
SymPy's evaluated canonical form.
"""

from __future__ import annotations

import ast
from tokenize import TokenError

import sympy as sp
from sympy.parsing.sympy_parser import stringify_expr

from .config import ALLOWED_SYMPY_NAMES
from .config import MAX_EXPRESSION_DEPTH
from .config import MAX_INPUT_LENGTH
from .config import NAMED_CONSTANTS
from .config import SQRT_ATOM_RE
from .config import TRANSFORMATIONS
from .config import UNICODE_REPLACEMENTS
from .expression_tree import BinaryOp
from .expression_tree import Constant
from .expression_tree import Expr
from .expression_tree import FunctionCall
from .expression_tree import OperatorKind
from .expression_tree import Symbol
from .expression_tree import depth
from .expression_tree import multiply
from .logging_config import get_logger
from .types import ParseError

logger = get_logger("parser")

AST_OPERATORS = {
    ast.Add: OperatorKind.ADD,
    ast.Sub: OperatorKind.SUBTRACT,
    ast.Mult: OperatorKind.MULTIPLY,
    ast.Div: OperatorKind.DIVIDE,
    ast.Pow: OperatorKind.POWER,
}

# Constructors the tokenizer transformations emit; implicit multiplication
# only groups "Symbol('x')" as one factor when these names are callable
TOKEN_GLOBALS = {
    "Symbol": sp.Symbol,
    "Integer": sp.Integer,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Function": sp.Function,
}


def preprocess(text: str) -> str:
    """Map the calculus keyboard's Unicode symbols onto ASCII syntax."""
    for symbol, replacement in UNICODE_REPLACEMENTS.items():
        if symbol == "√":
            text = SQRT_ATOM_RE.sub(r" sqrt(\1) ", text)
        text = text.replace(symbol, replacement)
    return text.strip()


def _literal_args(call: ast.Call) -> list:
    values = []
    for arg in call.args:
        if not isinstance(arg, ast.Constant):
            raise ParseError(f"Unexpected token in number: {ast.dump(arg)}")
        values.append(arg.value)
    return values


def _convert_call(call: ast.Call) -> Expr:
    func = call.func
    if isinstance(func, ast.Name) and func.id in ("Integer", "Float", "Rational"):
        values = _literal_args(call)
        if func.id == "Integer":
            return Constant(int(values[0]))
        if func.id == "Float":
            return Constant(float(values[0]))
        numerator, denominator = (int(v) for v in values)
        return Constant(numerator / denominator)
    if isinstance(func, ast.Name) and func.id == "Symbol":
        (name,) = _literal_args(call)
        return Symbol(str(name))

    # Implicit multiplication turns unknown names before "(" into products,
    # so only the allowed function names arrive here as calls
    if isinstance(func, ast.Name) and func.id in ALLOWED_SYMPY_NAMES:
        name = func.id
    else:
        raise ParseError(f"Unsupported function call: {ast.unparse(call)}")

    if len(call.args) != 1 or call.keywords:
        raise ParseError(f"Function '{name}' takes exactly one argument")
    return FunctionCall(str(name), _convert(call.args[0]))


def _convert(node: ast.AST) -> Expr:
    if isinstance(node, ast.BinOp):
        op = AST_OPERATORS.get(type(node.op))
        if op is None:
            raise ParseError(f"Unsupported operator: {type(node.op).__name__}")
        return BinaryOp(op, _convert(node.left), _convert(node.right))

    if isinstance(node, ast.UnaryOp):
        operand = _convert(node.operand)
        if isinstance(node.op, ast.UAdd):
            return operand
        if isinstance(node.op, ast.USub):
            if isinstance(operand, Constant):
                return Constant(-operand.value)
            return multiply(Constant(-1), operand)
        raise ParseError(f"Unsupported operator: {type(node.op).__name__}")

    if isinstance(node, ast.Call):
        return _convert_call(node)

    if isinstance(node, ast.Name) and node.id in NAMED_CONSTANTS:
        return Symbol(node.id)

    if isinstance(node, ast.Name):
        raise ParseError(f"'{node.id}' cannot be used on its own")

    raise ParseError(f"Unsupported syntax: {type(node).__name__}")


def parse_expression(text: str) -> Expr:
    """Parse expression text into an Expression Tree.

    Args:
        text: Algebraic expression, e.g. ``"3*x^2"`` or ``"sin(x)"``

    Returns:
        Root node of the parsed tree

    Raises:
        ParseError: If the text is empty, too long, too deeply nested or is
            not a well-formed algebraic expression
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise ParseError(
            f"Input too long ({len(text)} characters, limit is {MAX_INPUT_LENGTH})"
        )
    cleaned = preprocess(text)
    if not cleaned:
        raise ParseError("Empty expression")

    try:
        # auto_symbol records names in the local dict it is given
        code = stringify_expr(
            cleaned, dict(ALLOWED_SYMPY_NAMES), dict(TOKEN_GLOBALS), TRANSFORMATIONS
        )
        module = ast.parse(code, mode="eval")
    except TokenError:
        raise ParseError(
            f"Incomplete expression '{text}'. Check for missing parentheses or operators."
        ) from None
    except (SyntaxError, ValueError, TypeError):
        raise ParseError(f"Invalid syntax in expression '{text}'") from None

    try:
        tree = _convert(module.body)
    except RecursionError:
        raise ParseError("Expression is nested too deeply") from None
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid expression '{text}': {e}") from e

    if depth(tree) > MAX_EXPRESSION_DEPTH:
        raise ParseError(
            f"Expression is nested too deeply (limit is {MAX_EXPRESSION_DEPTH} levels)"
        )
    logger.debug("Parsed %r as %s", text, tree)
    return tree
