import numpy as np
import pytest

from calcsolver_pkg.expression_tree import Constant
from calcsolver_pkg.expression_tree import Symbol
from calcsolver_pkg.integration import integrate
from calcsolver_pkg.parser import parse_expression
from calcsolver_pkg.utils.numeric import central_difference
from calcsolver_pkg.utils.numeric import check_antiderivative
from calcsolver_pkg.utils.numeric import evaluate_tree
from calcsolver_pkg.utils.numeric import sample_curves


def test_evaluate_tree():
    xs = np.array([1.0, 2.0, 3.0])
    np.testing.assert_allclose(evaluate_tree(parse_expression("x^2 + 1"), "x", xs), [2, 5, 10])


def test_evaluate_constant_broadcasts():
    xs = np.linspace(0, 1, 4)
    values = evaluate_tree(Constant(2), "x", xs)
    assert values.shape == (4,)
    np.testing.assert_allclose(values, 2.0)


def test_evaluate_rejects_other_symbols():
    with pytest.raises(ValueError):
        evaluate_tree(parse_expression("x*y"), "x", np.array([1.0]))


def test_central_difference():
    xs = np.array([1.0, 2.0])
    np.testing.assert_allclose(
        central_difference(parse_expression("x^3"), "x", xs), [3.0, 12.0], rtol=1e-6
    )


@pytest.mark.parametrize(
    "text",
    ["x", "5*x", "x*5", "x^2", "3*x^2", "x^-1", "4*x^-1", "x^-2", "2.5*x^0.5", "-3*x^7", "0*x^2"],
)
def test_rule_results_differentiate_back(text):
    body = parse_expression(text)
    assert check_antiderivative(body, integrate(body, "x"), "x")


def test_wrong_antiderivative_is_rejected():
    assert not check_antiderivative(parse_expression("x^2"), parse_expression("x^3"), "x")


def test_other_variable():
    body = parse_expression("t^4")
    assert check_antiderivative(body, integrate(body, "t"), "t")


def test_sample_curves():
    body = parse_expression("x")
    xs, body_ys, result_ys = sample_curves(body, integrate(body, "x"), "x", x_range=(0.0, 2.0), num_points=5)
    np.testing.assert_allclose(xs, [0.0, 0.5, 1.0, 1.5, 2.0])
    np.testing.assert_allclose(body_ys, xs)
    np.testing.assert_allclose(result_ys, xs**2 / 2)


def test_symbol_name_does_not_matter():
    xs = np.array([4.0])
    np.testing.assert_allclose(evaluate_tree(Symbol("t"), "t", xs), [4.0])
