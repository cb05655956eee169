"""SymPy-backed derivative and simplify capabilities.

Trees go to SymPy through :func:`to_sympy` and come back through
:func:`from_sympy`, which maps SymPy's n-ary canonical forms onto the binary
tree: negated terms of a sum become subtractions and negative powers in a
product become a denominator.
"""

from __future__ import annotations

import sympy as sp

from .expression_tree import Constant
from .expression_tree import Expr
from .expression_tree import FunctionCall
from .expression_tree import Symbol
from .expression_tree import add
from .expression_tree import divide
from .expression_tree import multiply
from .expression_tree import power
from .expression_tree import subtract
from .expression_tree import to_sympy
from .logging_config import get_logger
from .parser import parse_expression
from .types import CapabilityError

logger = get_logger("symbolic")

# SymPy function class name -> name used in rendered text
FUNCTION_NAMES = {
    "log": "ln",
    "Abs": "abs",
}

NUMBER_SYMBOL_NAMES = {sp.pi: "pi", sp.E: "e"}


def _from_number(expr: sp.Expr) -> Expr:
    if expr.is_Integer:
        return Constant(int(expr))
    if expr.is_Rational:
        return divide(Constant(int(expr.p)), Constant(int(expr.q)))
    if expr.is_Float:
        return Constant(float(expr))
    raise ValueError(f"Cannot represent number {expr}")


def _from_sum(expr: sp.Add) -> Expr:
    terms = expr.as_ordered_terms()
    result = from_sympy(terms[0])
    for term in terms[1:]:
        if term.could_extract_minus_sign():
            result = subtract(result, from_sympy(-term))
        else:
            result = add(result, from_sympy(term))
    return result


def _from_product(expr: sp.Mul) -> Expr:
    numerator, denominator = expr.as_numer_denom()
    if denominator != 1:
        return divide(from_sympy(numerator), from_sympy(denominator))

    coefficient, factors = expr.as_coeff_mul()
    result: Expr | None = None
    for factor in factors:
        converted = from_sympy(factor)
        result = converted if result is None else multiply(result, converted)
    if result is None:
        return from_sympy(coefficient)
    if coefficient == 1:
        return result
    return multiply(from_sympy(coefficient), result)


def _from_power(expr: sp.Pow) -> Expr:
    base, exponent = expr.as_base_exp()
    if exponent.is_Number and exponent.is_negative:
        return divide(Constant(1), from_sympy(base**-exponent))
    if exponent == sp.Rational(1, 2):
        return FunctionCall("sqrt", from_sympy(base))
    return power(from_sympy(base), from_sympy(exponent))


def from_sympy(expr: sp.Expr) -> Expr:
    """Convert a SymPy expression into an Expression Tree.

    Raises:
        ValueError: If the expression uses a construct the tree cannot hold
            (multi-argument functions, unevaluated derivatives, infinities)
    """
    if expr.is_Number:
        return _from_number(expr)
    if isinstance(expr, sp.NumberSymbol):
        return Symbol(NUMBER_SYMBOL_NAMES.get(expr, str(expr)))
    if expr.is_Symbol:
        return Symbol(expr.name)
    if expr.is_Add:
        return _from_sum(expr)
    if expr.is_Mul:
        return _from_product(expr)
    if expr.is_Pow:
        return _from_power(expr)
    if isinstance(expr, sp.Function) and len(expr.args) == 1:
        name = type(expr).__name__
        return FunctionCall(FUNCTION_NAMES.get(name, name), from_sympy(expr.args[0]))
    raise ValueError(f"Cannot represent {type(expr).__name__} '{expr}' as an expression tree")


def derivative(text: str, variable: str) -> Expr:
    """Differentiate expression text with respect to ``variable``.

    Raises:
        ParseError: If the text cannot be parsed
        CapabilityError: If SymPy fails or returns something the tree cannot hold
    """
    tree = parse_expression(text)
    symbol = sp.Symbol(variable)
    try:
        # The variable stays a symbol even when named like a constant ("e")
        result = sp.diff(to_sympy(tree, {variable: symbol}), symbol)
        logger.debug("d/d%s %s -> %s", variable, text, result)
        return from_sympy(result)
    except (ValueError, TypeError, AttributeError, NotImplementedError) as e:
        logger.warning("Derivative of %r failed", text, exc_info=True)
        raise CapabilityError(f"Could not differentiate '{text}': {e}") from e


def simplify(tree: Expr, variable: str | None = None) -> Expr:
    """Return a canonicalized copy of ``tree``.

    Args:
        tree: Tree to simplify
        variable: Name of the request variable; kept as a plain symbol even
            when it collides with a named constant such as ``e``

    Raises:
        CapabilityError: If SymPy fails or returns something the tree cannot hold
    """
    try:
        symbols = {variable: sp.Symbol(variable)} if variable else None
        result = sp.simplify(to_sympy(tree, symbols))
        return from_sympy(result)
    except (ValueError, TypeError, AttributeError, NotImplementedError) as e:
        logger.warning("Simplification of %s failed", tree, exc_info=True)
        raise CapabilityError(f"Could not simplify '{tree}': {e}") from e
