"""Pattern-matched power-rule integration.

Rules are tried in table order and the first whose recognizer accepts the
body is applied. Recognizers look at tree shape only; no algebraic
normalization happens before matching. Results omit the constant of
integration.

Key Objects:
    - IntegrationRule: a named (recognizer, transform) pair
    - INTEGRATION_RULES: the ordered rule table
    - integrate: apply the first matching rule or raise UnsupportedExpression
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from typing import Sequence

from .expression_tree import BinaryOp
from .expression_tree import Constant
from .expression_tree import Expr
from .expression_tree import OperatorKind
from .expression_tree import Symbol
from .expression_tree import divide
from .expression_tree import ln
from .expression_tree import multiply
from .expression_tree import power
from .logging_config import get_logger
from .types import UnsupportedExpression

logger = get_logger("integration")


@dataclass(frozen=True)
class IntegrationRule:
    """A named integration rule.

    Attributes:
        name: Short identifier used in logs and tests
        recognizes: Predicate (body, variable) -> bool on the tree's shape
        apply: Transform (body, variable) -> antiderivative tree; only called
            when ``recognizes`` returned True
    """

    name: str
    recognizes: Callable[[Expr, str], bool]
    apply: Callable[[Expr, str], Expr]


def _is_variable(node: Expr, variable: str) -> bool:
    return isinstance(node, Symbol) and node.name == variable


def _is_variable_power(node: Expr, variable: str) -> bool:
    """``variable ^ Constant``."""
    return (
        isinstance(node, BinaryOp)
        and node.op is OperatorKind.POWER
        and _is_variable(node.left, variable)
        and isinstance(node.right, Constant)
    )


def _power_antiderivative(
    coefficient: Constant | None, exponent: int | float, variable: str
) -> Expr:
    """Build ``c * v^(n+1) / (n+1)``, or ``c * ln(v)`` when ``n == -1``."""
    if coefficient is not None and coefficient.value == 0:
        return Constant(0)
    if exponent == -1:
        result: Expr = ln(Symbol(variable))
        return result if coefficient is None else multiply(coefficient, result)
    raised = exponent + 1
    term: Expr = power(Symbol(variable), Constant(raised))
    if coefficient is not None:
        term = multiply(coefficient, term)
    return divide(term, Constant(raised))


def _power_rule_matches(body: Expr, variable: str) -> bool:
    return _is_variable_power(body, variable)


def _power_rule(body: Expr, variable: str) -> Expr:
    return _power_antiderivative(None, body.right.value, variable)


def _constant_times_power_matches(body: Expr, variable: str) -> bool:
    return (
        isinstance(body, BinaryOp)
        and body.op is OperatorKind.MULTIPLY
        and isinstance(body.left, Constant)
        and _is_variable_power(body.right, variable)
    )


def _constant_times_power(body: Expr, variable: str) -> Expr:
    return _power_antiderivative(body.left, body.right.right.value, variable)


def _bare_symbol_matches(body: Expr, variable: str) -> bool:
    return _is_variable(body, variable)


def _bare_symbol(body: Expr, variable: str) -> Expr:
    return divide(power(Symbol(variable), Constant(2)), Constant(2))


def _constant_times_symbol_matches(body: Expr, variable: str) -> bool:
    if not (isinstance(body, BinaryOp) and body.op is OperatorKind.MULTIPLY):
        return False
    left, right = body.left, body.right
    return (isinstance(left, Constant) and _is_variable(right, variable)) or (
        isinstance(right, Constant) and _is_variable(left, variable)
    )


def _constant_times_symbol(body: Expr, variable: str) -> Expr:
    coefficient = body.left if isinstance(body.left, Constant) else body.right
    return _power_antiderivative(coefficient, 1, variable)


POWER_RULE = IntegrationRule("power", _power_rule_matches, _power_rule)
CONSTANT_TIMES_POWER_RULE = IntegrationRule(
    "constant_times_power", _constant_times_power_matches, _constant_times_power
)
BARE_SYMBOL_RULE = IntegrationRule("bare_symbol", _bare_symbol_matches, _bare_symbol)
CONSTANT_TIMES_SYMBOL_RULE = IntegrationRule(
    "constant_times_symbol", _constant_times_symbol_matches, _constant_times_symbol
)

INTEGRATION_RULES: tuple[IntegrationRule, ...] = (
    POWER_RULE,
    CONSTANT_TIMES_POWER_RULE,
    BARE_SYMBOL_RULE,
    CONSTANT_TIMES_SYMBOL_RULE,
)


def find_rule(
    body: Expr, variable: str, rules: Sequence[IntegrationRule] = INTEGRATION_RULES
) -> IntegrationRule | None:
    """Return the first rule whose recognizer accepts ``body``, or None."""
    for rule in rules:
        if rule.recognizes(body, variable):
            return rule
    return None


def integrate(
    body: Expr, variable: str, rules: Sequence[IntegrationRule] = INTEGRATION_RULES
) -> Expr:
    """Compute the indefinite integral of ``body`` with respect to ``variable``.

    Args:
        body: Parsed integrand
        variable: Name of the integration variable
        rules: Rule table to use, in priority order

    Returns:
        New (unsimplified) tree for the antiderivative, without ``+ C``

    Raises:
        UnsupportedExpression: If no rule recognizes the integrand
    """
    rule = find_rule(body, variable, rules)
    if rule is None:
        logger.debug("No integration rule matches %s d%s", body, variable)
        raise UnsupportedExpression(str(body))
    result = rule.apply(body, variable)
    logger.debug("Rule %s: %s d%s -> %s", rule.name, body, variable, result)
    return result
