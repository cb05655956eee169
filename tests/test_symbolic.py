import pytest
import sympy as sp

from calcsolver_pkg.expression_tree import Constant
from calcsolver_pkg.expression_tree import FunctionCall
from calcsolver_pkg.expression_tree import Symbol
from calcsolver_pkg.expression_tree import divide
from calcsolver_pkg.expression_tree import multiply
from calcsolver_pkg.expression_tree import power
from calcsolver_pkg.expression_tree import to_sympy
from calcsolver_pkg.expression_tree import to_text
from calcsolver_pkg.parser import parse_expression
from calcsolver_pkg.symbolic import derivative
from calcsolver_pkg.symbolic import from_sympy
from calcsolver_pkg.symbolic import simplify
from calcsolver_pkg.types import CapabilityError
from calcsolver_pkg.types import ParseError

sx = sp.Symbol("x")
x = Symbol("x")


class TestFromSympy:
    def test_numbers(self):
        assert from_sympy(sp.Integer(3)) == Constant(3)
        assert from_sympy(sp.Rational(1, 2)) == divide(Constant(1), Constant(2))
        assert from_sympy(sp.Float(2.5)) == Constant(2.5)

    def test_product_with_coefficient(self):
        assert from_sympy(2 * sx) == multiply(Constant(2), x)
        assert to_text(from_sympy(3 * sx**2)) == "3 * x ^ 2"

    def test_negative_terms_become_subtraction(self):
        assert to_text(from_sympy(sx**2 - 3 * sx)) == "x ^ 2 - 3 * x"

    def test_rational_coefficient_becomes_division(self):
        assert to_text(from_sympy(sx**3 / 3)) == "x ^ 3 / 3"
        assert to_text(from_sympy(sp.Rational(5, 2) * sx**2)) == "5 * x ^ 2 / 2"

    def test_negative_power_becomes_division(self):
        assert from_sympy(1 / sx) == divide(Constant(1), x)
        assert to_text(from_sympy(sx**-2)) == "1 / x ^ 2"

    def test_square_root(self):
        assert from_sympy(sp.sqrt(sx)) == FunctionCall("sqrt", x)

    def test_functions_and_constants(self):
        assert from_sympy(sp.log(sx)) == FunctionCall("ln", x)
        assert from_sympy(sp.cos(sx)) == FunctionCall("cos", x)
        assert from_sympy(sp.exp(sx)) == FunctionCall("exp", x)
        assert from_sympy(sp.Abs(sx)) == FunctionCall("abs", x)
        assert from_sympy(sp.pi) == Symbol("pi")
        assert from_sympy(sp.E) == Symbol("e")

    def test_unrepresentable(self):
        with pytest.raises(ValueError):
            from_sympy(sp.oo)
        with pytest.raises(ValueError):
            from_sympy(sp.Derivative(sp.Function("f")(sx), sx))

    @pytest.mark.parametrize(
        "text",
        ["x^2 + 3*x - 1", "2*x/(x + 1)", "sin(x)^2", "sqrt(x)", "x^-3", "ln(x)/x"],
    )
    def test_round_trip_is_equivalent(self, text):
        expr = to_sympy(parse_expression(text))
        assert sp.simplify(to_sympy(from_sympy(expr)) - expr) == 0


class TestDerivative:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("x^2", "2 * x"),
            ("x^3", "3 * x ^ 2"),
            ("5*x", "5"),
            ("7", "0"),
            ("sin(x)", "cos(x)"),
            ("ln(x)", "1 / x"),
        ],
    )
    def test_derivatives(self, text, expected):
        assert to_text(derivative(text, "x")) == expected

    def test_other_variable(self):
        assert to_text(derivative("y^2", "y")) == "2 * y"
        assert to_text(derivative("y^2", "x")) == "0"

    def test_variable_named_like_a_constant(self):
        assert to_text(derivative("e^2", "e")) == "2 * e"
        assert to_text(derivative("E^2", "E")) == "2 * E"
        assert to_text(derivative("e^x", "x")) == "exp(x)"

    def test_parse_failure_propagates(self):
        with pytest.raises(ParseError):
            derivative("(x", "x")

    def test_unrepresentable_result(self, monkeypatch):
        monkeypatch.setattr(sp, "diff", lambda expr, var: sp.zoo)
        with pytest.raises(CapabilityError) as excinfo:
            derivative("x^2", "x")
        assert not isinstance(excinfo.value, ParseError)
        assert excinfo.value.message.startswith("Error: Could not differentiate 'x^2'")


class TestSimplify:
    def test_combines_coefficients(self):
        tree = divide(multiply(Constant(2), power(x, Constant(4))), Constant(4))
        assert to_text(simplify(tree)) == "x ^ 4 / 2"

    def test_zero_exponent_result(self):
        assert to_text(simplify(divide(power(x, Constant(1)), Constant(1)))) == "x"

    def test_already_simple(self):
        tree = divide(power(x, Constant(3)), Constant(3))
        assert simplify(tree) == tree

    def test_variable_named_like_a_constant(self):
        e = Symbol("e")
        tree = divide(multiply(Constant(2), power(e, Constant(4))), Constant(4))
        assert to_text(simplify(tree, "e")) == "e ^ 4 / 2"
        assert to_text(simplify(power(e, Constant(1)), "e")) == "e"
