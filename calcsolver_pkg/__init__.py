"""Calcsolver package: expression trees, power-rule integration, request dispatch and CLI."""

__version__ = "1.0.0"

from . import capabilities, cli, config, dispatch, expression_tree, integration
from . import logging_config, parser, symbolic, types
from .capabilities import Capabilities, sympy_capabilities
from .dispatch import Solver, classify_request, solve
from .integration import INTEGRATION_RULES, integrate
from .parser import parse_expression

__all__ = [
    "capabilities",
    "cli",
    "config",
    "dispatch",
    "expression_tree",
    "integration",
    "logging_config",
    "parser",
    "symbolic",
    "types",
    "Capabilities",
    "sympy_capabilities",
    "Solver",
    "classify_request",
    "solve",
    "INTEGRATION_RULES",
    "integrate",
    "parse_expression",
]
