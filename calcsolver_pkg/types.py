"""Request/result types and the solver error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RequestKind(Enum):
    INTEGRAL = "integral"
    DERIVATIVE = "derivative"


@dataclass(frozen=True)
class SolveRequest:
    """A classified request: what to compute, on which body, by which variable."""

    kind: RequestKind
    variable: str
    body: str


class SolverError(Exception):
    """Base class for every error a solve request can end with.

    Attributes:
        message: User-facing text shown in place of a result
        code: Stable machine-readable name of the error kind
    """

    code = "SOLVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnrecognizedRequest(SolverError):
    code = "UNRECOGNIZED_REQUEST"

    def __init__(self):
        super().__init__(
            "Please start your input with ∫ (for integral) or d/dx (for derivative)."
        )


USAGE_EXAMPLES = {
    "integral": "Invalid integral format. Use: ∫ expression dx (e.g., ∫ x^2 dx)",
    "derivative": "Invalid derivative format. Use: d/dx expression (e.g., d/dx x^2)",
}


class InvalidFormat(SolverError):
    """The prefix was recognized but the body/variable could not be extracted."""

    code = "INVALID_FORMAT"

    def __init__(self, kind: str):
        super().__init__(USAGE_EXAMPLES.get(kind, f"Invalid {kind} format."))
        self.kind = kind


class UnsupportedExpression(SolverError):
    code = "UNSUPPORTED_EXPRESSION"

    def __init__(self, expression: str):
        super().__init__(
            f"Error: Integration not yet supported for: {expression}. "
            "Try: x, x^2, x^3, 2*x, etc."
        )
        self.expression = expression


class CapabilityError(SolverError):
    """An external parse/derivative/simplify capability is missing or failed."""

    code = "CAPABILITY_ERROR"

    def __init__(self, reason: str):
        super().__init__(f"Error: {reason}")
        self.reason = reason


class ParseError(CapabilityError):
    code = "PARSE_ERROR"


class ComputationError(SolverError):
    code = "COMPUTATION_ERROR"

    def __init__(self, message: str):
        super().__init__(f"Error: {message}")
        self.reason = message


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one solve: result text on success, error text otherwise."""

    ok: bool
    text: str
    error_code: str | None = None
    request: SolveRequest | None = None

    @classmethod
    def success(cls, text: str, request: SolveRequest) -> SolveResult:
        return cls(ok=True, text=text, request=request)

    @classmethod
    def failure(
        cls, error: SolverError, request: SolveRequest | None = None
    ) -> SolveResult:
        return cls(ok=False, text=error.message, error_code=error.code, request=request)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ok": self.ok}
        if self.ok:
            data["result"] = self.text
        else:
            data["error"] = self.text
            data["error_code"] = self.error_code
        if self.request is not None:
            data["type"] = self.request.kind.value
            data["variable"] = self.request.variable
            data["expression"] = self.request.body
        return data
