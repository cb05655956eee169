import unittest
from unittest import mock

from calcsolver_pkg import parser as parser_module
from calcsolver_pkg.expression_tree import Constant
from calcsolver_pkg.expression_tree import FunctionCall
from calcsolver_pkg.expression_tree import Symbol
from calcsolver_pkg.expression_tree import add
from calcsolver_pkg.expression_tree import divide
from calcsolver_pkg.expression_tree import multiply
from calcsolver_pkg.expression_tree import power
from calcsolver_pkg.expression_tree import subtract
from calcsolver_pkg.parser import parse_expression
from calcsolver_pkg.parser import preprocess
from calcsolver_pkg.types import CapabilityError
from calcsolver_pkg.types import ParseError

x = Symbol("x")


class TestParserShapes(unittest.TestCase):
    def test_power_with_caret_and_double_star(self):
        self.assertEqual(parse_expression("x^2"), power(x, Constant(2)))
        self.assertEqual(parse_expression("x**2"), power(x, Constant(2)))

    def test_operand_order_is_preserved(self):
        """Shape follows the text, not SymPy's canonical ordering."""
        self.assertEqual(parse_expression("5*x"), multiply(Constant(5), x))
        self.assertEqual(parse_expression("x*5"), multiply(x, Constant(5)))

    def test_negative_exponent_is_a_constant(self):
        self.assertEqual(parse_expression("x^-1"), power(x, Constant(-1)))
        self.assertEqual(parse_expression("x^(-2)"), power(x, Constant(-2)))

    def test_zero_coefficient_is_kept(self):
        self.assertEqual(
            parse_expression("0*x^2"), multiply(Constant(0), power(x, Constant(2)))
        )

    def test_unary_minus(self):
        self.assertEqual(
            parse_expression("-3*x^2"), multiply(Constant(-3), power(x, Constant(2)))
        )
        self.assertEqual(parse_expression("-x"), multiply(Constant(-1), x))
        self.assertEqual(parse_expression("+x"), x)

    def test_left_associative_and_right_associative(self):
        self.assertEqual(
            parse_expression("x + 1 - 2"), subtract(add(x, Constant(1)), Constant(2))
        )
        self.assertEqual(
            parse_expression("2^3^2"),
            power(Constant(2), power(Constant(3), Constant(2))),
        )

    def test_division_and_floats(self):
        self.assertEqual(parse_expression("x/4"), divide(x, Constant(4)))
        self.assertEqual(parse_expression("2.5*x"), multiply(Constant(2.5), x))

    def test_implicit_multiplication(self):
        self.assertEqual(parse_expression("2 x"), multiply(Constant(2), x))

    def test_functions(self):
        self.assertEqual(parse_expression("sin(x)"), FunctionCall("sin", x))
        self.assertEqual(parse_expression("ln(x)"), FunctionCall("ln", x))
        self.assertEqual(
            parse_expression("sqrt(x + 1)"), FunctionCall("sqrt", add(x, Constant(1)))
        )

    def test_unicode_keyboard_symbols(self):
        self.assertEqual(parse_expression("π*x"), multiply(Symbol("pi"), x))
        self.assertEqual(parse_expression("√(x)"), FunctionCall("sqrt", x))
        self.assertEqual(parse_expression("2×x"), multiply(Constant(2), x))
        self.assertEqual(preprocess("  x − 1 "), "x - 1")

    def test_root_sign_takes_next_atom(self):
        sqrt_x = FunctionCall("sqrt", x)
        self.assertEqual(parse_expression("√x"), sqrt_x)
        self.assertEqual(parse_expression("2√x"), multiply(Constant(2), sqrt_x))
        self.assertEqual(parse_expression("√4"), FunctionCall("sqrt", Constant(4)))

    def test_pi_glued_to_a_name(self):
        self.assertEqual(parse_expression("πx"), multiply(Symbol("pi"), x))
        self.assertEqual(parse_expression("xπ"), multiply(x, Symbol("pi")))
        self.assertEqual(parse_expression("√π"), FunctionCall("sqrt", Symbol("pi")))

    def test_unknown_name_before_parenthesis_multiplies(self):
        self.assertEqual(parse_expression("f(x)"), multiply(Symbol("f"), x))

    def test_other_variables(self):
        self.assertEqual(parse_expression("t^3"), power(Symbol("t"), Constant(3)))


class TestParserErrors(unittest.TestCase):
    def assertParseError(self, text):
        with self.assertRaises(ParseError):
            parse_expression(text)

    def test_empty(self):
        self.assertParseError("")
        self.assertParseError("   ")

    def test_unbalanced_parentheses(self):
        self.assertParseError("(x")
        self.assertParseError("x)")

    def test_unsupported_operator(self):
        self.assertParseError("x % 2")

    def test_dangling_operator(self):
        self.assertParseError("x +")

    def test_too_long(self):
        self.assertParseError("x+" * 600 + "x")

    def test_too_deep(self):
        with mock.patch.object(parser_module, "MAX_EXPRESSION_DEPTH", 3):
            self.assertParseError("((x + 1) + 1) + 1")

    def test_parse_error_is_a_capability_error(self):
        with self.assertRaises(CapabilityError) as ctx:
            parse_expression("(x")
        self.assertEqual(ctx.exception.code, "PARSE_ERROR")
        self.assertTrue(ctx.exception.message.startswith("Error: "))


if __name__ == "__main__":
    unittest.main()
