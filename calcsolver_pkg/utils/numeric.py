"""Numeric helpers: vectorized evaluation of trees and antiderivative checks.

Key Functions:
    evaluate_tree: Evaluate a tree on an array of points with NumPy
    central_difference: First derivative of a tree by central differences
    check_antiderivative: Verify d/dx F == f at sample points
    sample_curves: Points for plotting an integrand next to its result
"""

from __future__ import annotations

import numpy as np
import sympy as sp

from .. import config as _config
from ..expression_tree import Expr
from ..expression_tree import to_sympy


def evaluate_tree(tree: Expr, variable: str, xs: np.ndarray) -> np.ndarray:
    """Evaluate ``tree`` at every point of ``xs``.

    Args:
        tree: Expression in (at most) the single variable ``variable``
        variable: Name of the free variable
        xs: 1-D array of evaluation points

    Returns:
        Float array with the same shape as ``xs``

    Raises:
        ValueError: If the tree has free symbols other than ``variable``
    """
    symbol = sp.Symbol(variable)
    expr = to_sympy(tree, {variable: symbol})
    extra = expr.free_symbols - {symbol}
    if extra:
        names = ", ".join(sorted(str(s) for s in extra))
        raise ValueError(f"Expression depends on symbols other than {variable}: {names}")

    func = sp.lambdify(symbol, expr, modules=["numpy"])
    xs = np.asarray(xs, dtype=float)
    with np.errstate(all="ignore"):
        values = func(xs)
    # Constant expressions come back as scalars
    return np.broadcast_to(np.asarray(values, dtype=float), xs.shape).copy()


def central_difference(
    tree: Expr, variable: str, xs: np.ndarray, step: float | None = None
) -> np.ndarray:
    """Approximate d(tree)/d(variable) with ``(F(x+h) - F(x-h)) / 2h``."""
    h = _config.NUMERIC_STEP if step is None else step
    xs = np.asarray(xs, dtype=float)
    return (evaluate_tree(tree, variable, xs + h) - evaluate_tree(tree, variable, xs - h)) / (
        2 * h
    )


def check_antiderivative(
    body: Expr,
    antiderivative: Expr,
    variable: str,
    points: np.ndarray | None = None,
    tolerance: float | None = None,
) -> bool:
    """Check numerically that ``antiderivative`` differentiates back to ``body``.

    Sample points default to positive values so logarithms stay real.
    Points where either side is not finite are skipped; the check fails if
    no usable point remains.
    """
    tol = _config.NUMERIC_TOLERANCE if tolerance is None else tolerance
    if points is None:
        points = np.linspace(0.5, 3.0, _config.NUMERIC_SAMPLE_POINTS)

    expected = evaluate_tree(body, variable, points)
    actual = central_difference(antiderivative, variable, points)
    usable = np.isfinite(expected) & np.isfinite(actual)
    if not np.any(usable):
        return False
    return bool(np.allclose(actual[usable], expected[usable], rtol=tol, atol=tol))


def sample_curves(
    body: Expr,
    result: Expr,
    variable: str,
    x_range: tuple[float, float] | None = None,
    num_points: int | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(xs, body(xs), result(xs))`` for plotting."""
    lo, hi = _config.PLOT_RANGE if x_range is None else x_range
    n = _config.PLOT_POINTS if num_points is None else num_points
    xs = np.linspace(lo, hi, n)
    return xs, evaluate_tree(body, variable, xs), evaluate_tree(result, variable, xs)
