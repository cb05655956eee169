"""Input dispatcher: classify raw calculus input and route it.

Integrals go to the power-rule engine, derivatives to the differentiation
capability. Every outcome, including failures, comes back as a SolveResult.
"""

from __future__ import annotations

from typing import Any
from typing import Callable

from .capabilities import Capabilities
from .capabilities import sympy_capabilities
from .config import DERIVATIVE_RE
from .config import INTEGRAL_RE
from .expression_tree import Expr
from .expression_tree import to_text
from .integration import integrate
from .logging_config import get_logger
from .types import CapabilityError
from .types import ComputationError
from .types import InvalidFormat
from .types import RequestKind
from .types import SolveRequest
from .types import SolveResult
from .types import SolverError
from .types import UnrecognizedRequest
from .types import UnsupportedExpression

logger = get_logger("dispatch")


def classify_request(text: str) -> SolveRequest:
    """
    Classify raw input as an integral or derivative request.

    Args:
        text: Raw input (e.g., "∫ x^2 dx", "d/dx x^2")

    Returns:
        SolveRequest with the kind, the one-letter variable and the trimmed body

    Raises:
        InvalidFormat: If the prefix is recognized but the body/variable is not
        UnrecognizedRequest: If the input starts with neither ∫ nor d/d
    """
    expr = (text or "").strip()
    if expr.startswith("∫"):
        match = INTEGRAL_RE.match(expr)
        if not match or not match.group(1).strip():
            raise InvalidFormat("integral")
        return SolveRequest(RequestKind.INTEGRAL, match.group(2), match.group(1).strip())
    if expr.startswith("d/d"):
        match = DERIVATIVE_RE.match(expr)
        if not match or not match.group(2).strip():
            raise InvalidFormat("derivative")
        return SolveRequest(RequestKind.DERIVATIVE, match.group(1), match.group(2).strip())
    raise UnrecognizedRequest()


class Solver:
    """Routes classified requests to the rule engine or the differentiator.

    Every solve is a pure function of the input text and the capabilities
    given at construction; the solver holds no other state.
    """

    def __init__(self, capabilities: Capabilities | None = None):
        self.capabilities = (
            capabilities if capabilities is not None else sympy_capabilities()
        )
        logger.debug("Solver capabilities: %s", self.capabilities.available())

    def classify(self, text: str) -> SolveRequest:
        return classify_request(text)

    def _call(self, name: str, func: Callable | None, *args: Any) -> Expr:
        if func is None:
            raise CapabilityError(f"The {name} capability is not available.")
        try:
            return func(*args)
        except SolverError:
            raise
        except Exception as e:
            logger.warning("%s capability failed", name, exc_info=True)
            raise CapabilityError(str(e)) from e

    def compute(self, request: SolveRequest) -> Expr:
        """Return the unsimplified result tree for a classified request."""
        if request.kind is RequestKind.DERIVATIVE:
            return self._call(
                "derivative", self.capabilities.derivative, request.body, request.variable
            )

        body = self._call("parse", self.capabilities.parse, request.body)
        try:
            return integrate(body, request.variable)
        except UnsupportedExpression as e:
            # Name what the user typed, not the parsed tree's rendering
            raise UnsupportedExpression(request.body) from e

    def render(self, tree: Expr, variable: str) -> str:
        """Simplify when possible, then render canonical text."""
        if self.capabilities.simplify is None:
            logger.debug("No simplify capability, rendering %s as is", tree)
            return to_text(tree)
        return to_text(
            self._call("simplify", self.capabilities.simplify, tree, variable)
        )

    def solve(self, text: str) -> SolveResult:
        """Solve one request. Never raises; failures come back as result text."""
        request = None
        try:
            request = self.classify(text)
            result = self.render(self.compute(request), request.variable)
            logger.info("Solved %r -> %s", text, result)
            return SolveResult.success(result, request)
        except SolverError as e:
            logger.info("Could not solve %r: %s", text, e.code)
            return SolveResult.failure(e, request)
        except Exception as e:
            logger.error("Unexpected error solving %r", text, exc_info=True)
            return SolveResult.failure(ComputationError(str(e)), request)


def solve(text: str, capabilities: Capabilities | None = None) -> SolveResult:
    """Solve one request with the given (default: SymPy-backed) capabilities."""
    return Solver(capabilities).solve(text)
