"""Injectable external capabilities: parse, derivative and simplify."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from . import config as _config
from .expression_tree import Expr

ParseFn = Callable[[str], Expr]
DerivativeFn = Callable[[str, str], Expr]
SimplifyFn = Callable[[Expr, str], Expr]


@dataclass(frozen=True)
class Capabilities:
    """The operations the solver consumes but does not implement.

    Any of them may be None. A missing parse or derivative capability fails
    the requests that need it; a missing simplify capability only means
    results are shown unsimplified.

    ``simplify`` receives the request variable so it is never mistaken for a
    named constant of the same name.
    """

    parse: ParseFn | None = None
    derivative: DerivativeFn | None = None
    simplify: SimplifyFn | None = None

    def available(self) -> dict[str, bool]:
        return {
            "parse": self.parse is not None,
            "derivative": self.derivative is not None,
            "simplify": self.simplify is not None,
        }


def sympy_capabilities(simplify_enabled: bool | None = None) -> Capabilities:
    """Build the default SymPy-backed capabilities.

    Args:
        simplify_enabled: Include the simplify capability; defaults to
            ``config.SIMPLIFY_ENABLED`` at call time so CLI overrides apply
    """
    from .parser import parse_expression
    from .symbolic import derivative
    from .symbolic import simplify

    if simplify_enabled is None:
        simplify_enabled = _config.SIMPLIFY_ENABLED
    return Capabilities(
        parse=parse_expression,
        derivative=derivative,
        simplify=simplify if simplify_enabled else None,
    )
