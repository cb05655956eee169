"""Centralized configuration for Calcsolver.

This module defines:
- Logging defaults
- Input validation limits (length, depth)
- Numeric cross-check and plotting settings
- Allowed SymPy names and parser transformations
- Regex patterns for request classification
- The calculus keyboard shown by the browser front end

Configuration can be overridden via:
- CLI flags (see cli/app.py)
- Environment variables (prefixed with CALCSOLVER_)
"""

import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import convert_xor
from sympy.parsing.sympy_parser import implicit_multiplication
from sympy.parsing.sympy_parser import standard_transformations

VERSION = "1.0.0"

LOG_LEVEL = os.getenv("CALCSOLVER_LOG_LEVEL", "WARNING").upper()

# Run the result tree through the simplify capability before rendering
SIMPLIFY_ENABLED = os.getenv("CALCSOLVER_SIMPLIFY_ENABLED", "true").lower() == "true"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("CALCSOLVER_MAX_INPUT_LENGTH", "1000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("CALCSOLVER_MAX_EXPRESSION_DEPTH", "100")
)  # tree depth

# Numeric cross-check of antiderivatives
NUMERIC_TOLERANCE = float(os.getenv("CALCSOLVER_NUMERIC_TOLERANCE", "1e-6"))
NUMERIC_SAMPLE_POINTS = int(os.getenv("CALCSOLVER_NUMERIC_SAMPLE_POINTS", "9"))
NUMERIC_STEP = float(os.getenv("CALCSOLVER_NUMERIC_STEP", "1e-5"))

# Plotting
PLOT_POINTS = int(os.getenv("CALCSOLVER_PLOT_POINTS", "200"))
PLOT_RANGE = (
    float(os.getenv("CALCSOLVER_PLOT_MIN", "0.1")),
    float(os.getenv("CALCSOLVER_PLOT_MAX", "5.0")),
)

# Names the parser keeps as functions/constants; everything else is a symbol
ALLOWED_SYMPY_NAMES = {
    "pi": sp.pi,
    "e": sp.E,
    "E": sp.E,
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
    "abs": sp.Abs,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
}

NAMED_CONSTANTS = {"pi": sp.pi, "e": sp.E, "E": sp.E}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

INTEGRAL_RE = re.compile(r"^∫\s*(.*?)\s*d([a-zA-Z])$")
DERIVATIVE_RE = re.compile(r"^d/d([a-zA-Z])\s+(.*)$")

# "√x" and "2√x" take the number or name right after the root sign;
# "√(" and "√sin(x)" fall through to the plain replacement
SQRT_ATOM_RE = re.compile(r"√\s*(\d+(?:\.\d+)?|[A-Za-z_]\w*(?![\w(]))")

# Padded so "πx" and "xπ" stay two tokens
UNICODE_REPLACEMENTS = {
    "π": " pi ",
    "√": " sqrt ",
    "·": "*",
    "×": "*",
    "÷": "/",
    "−": "-",
}

# (label, inserted text) pairs for the on-screen keyboard
KEYBOARD_SYMBOLS = (
    ("∫", "∫"),
    ("d/dx", "d/dx "),
    ("dx", "dx"),
    ("dy", "dy"),
    ("π", "π"),
    ("√", "√"),
    ("^", "^"),
    ("(", "("),
    (")", ")"),
    ("e", "e"),
    ("sin", "sin"),
    ("cos", "cos"),
    ("tan", "tan"),
    ("ln", "ln"),
    ("log", "log"),
)
